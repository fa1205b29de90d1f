# services/pr/properties.py
"""
Mines identifier/property names from added diff lines.

The patterns (see ``property_patterns`` in the lexicon) catch quoted object
keys, ``name: value`` pairs, class fields, ``self.name =`` assignments and
``ALL_CAPS =`` constants.  They over‑match (any ``word:`` in a comment) and
miss minified code; treat the result as a suggestion list.
"""

from typing import Iterable, List, Optional, Pattern, Set

from models.pull_request import PRFile
from services.extractor.lexicon import Lexicon, get_default_lexicon

MAX_LINES_PER_FILE = 800
MAX_NAME_LENGTH = 80


class PropertyMiner:
    def __init__(
        self,
        lexicon: Optional[Lexicon] = None,
        patterns: Optional[Iterable[Pattern]] = None,
        max_lines_per_file: int = MAX_LINES_PER_FILE,
        max_name_length: int = MAX_NAME_LENGTH,
    ):
        if patterns is None:
            patterns = (lexicon or get_default_lexicon()).compiled_patterns()
        self.patterns = list(patterns)
        self.max_lines_per_file = max_lines_per_file
        self.max_name_length = max_name_length

    def names_in_line(self, line: str) -> Set[str]:
        names: Set[str] = set()
        for pattern in self.patterns:
            for match in pattern.finditer(line):
                name = match.group(1)
                if name and len(name) <= self.max_name_length:
                    names.add(name)
        return names

    def mine(self, files: Iterable[PRFile]) -> List[str]:
        """Case‑sensitive sorted set of names found in the added lines."""
        names: Set[str] = set()
        for f in files:
            for line in f.added_lines[: self.max_lines_per_file]:
                names |= self.names_in_line(line)
        return sorted(names)


def mine_properties(files: Iterable[PRFile], lexicon: Optional[Lexicon] = None) -> List[str]:
    return PropertyMiner(lexicon).mine(files)
