from .content import ScoredSentence, StructuredContent
from .payload import RawPayload
from .pull_request import PayloadHint, PRContext, PRFile, PRSnapshot, PRTotals
from .summary_request import LLMSummaryRequest, PageRequest

__all__ = [
    'ScoredSentence', 'StructuredContent', 'RawPayload',
    'PayloadHint', 'PRContext', 'PRFile', 'PRSnapshot', 'PRTotals',
    'PageRequest', 'LLMSummaryRequest',
]
