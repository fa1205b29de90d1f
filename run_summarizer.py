# run_summarizer.py
import argparse
import asyncio
import json
import sys
from pathlib import Path

# Make the repo root importable
repo_root = Path(__file__).resolve().parent
if str(repo_root) not in sys.path:
    sys.path.append(str(repo_root))

from loguru import logger

from core.exceptions import PRSumException
from services.extractor.dom import Document
from services.payload.raw_payload import build_raw_payload
from services.pipeline import run_extraction
from services.scraper.fetcher import fetch_document


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize a web page or pull request locally.")
    parser.add_argument("url", help="Page URL (also used for PR/MR detection)")
    parser.add_argument("--html-file", type=Path, help="Read the markup from this file instead of downloading it")
    parser.add_argument("--max-chars", type=int, default=None, help="Character budget for the summary")
    parser.add_argument("--raw", action="store_true", help="Print the raw LLM payload as JSON instead of a summary")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


async def load_document(url: str, html_file=None) -> Document:
    if html_file is not None:
        return Document.from_html(html_file.read_text(encoding="utf-8"), url=url)
    return await fetch_document(url)


async def main(argv=None) -> int:
    args = parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    try:
        document = await load_document(args.url, args.html_file)
    except PRSumException as exc:
        logger.error(exc.message)
        return 1

    if args.raw:
        payload = build_raw_payload(document, args.url)
        print(json.dumps(payload.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return 0

    result = run_extraction(document, args.url, args.max_chars)
    print(result.summary)
    if result.pr is not None and result.pr.is_low_confidence:
        logger.warning("No diff content was found; the page may not have finished loading")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
