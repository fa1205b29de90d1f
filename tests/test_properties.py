# tests/test_properties.py
import re

import pytest

from models.pull_request import PRFile
from services.pr.properties import PropertyMiner, mine_properties


@pytest.fixture
def miner(lexicon):
    return PropertyMiner(lexicon)


@pytest.mark.parametrize(
    "line,expected",
    [
        ("maxRetries: 5", "maxRetries"),
        ("self.userId = 1", "userId"),
        ('"content-type": "json"', "content-type"),
        ("private readonly apiBase = '/v1';", "apiBase"),
        ("MAX_WORKERS = 8", "MAX_WORKERS"),
    ],
)
def test_each_pattern_family(miner, line, expected):
    assert expected in miner.names_in_line(line)


def test_comments_over_match(miner):
    """Heuristic: any ``word:`` in a comment is reported as well."""
    assert "note" in miner.names_in_line("// note: fix later")


def test_result_is_case_sensitive_sorted_set():
    files = [
        PRFile(path="a.py", added_lines=["b: 1", "B: 2"]),
        PRFile(path="b.py", added_lines=["a: 3", "b: 4"]),
    ]
    assert mine_properties(files) == ["B", "a", "b"]


def test_line_limit_per_file(lexicon):
    miner = PropertyMiner(lexicon, max_lines_per_file=1)
    files = [PRFile(path="x.ts", added_lines=["alpha: 1", "beta: 2"])]
    assert miner.mine(files) == ["alpha"]


def test_overlong_names_are_ignored(miner):
    assert miner.names_in_line("a" * 81 + ": 1") == set()
    assert miner.names_in_line("a" * 80 + ": 1") == {"a" * 80}


def test_removed_lines_are_not_mined(miner):
    assert miner.mine([PRFile(path="x", removed_lines=["gone: 1"])]) == []


def test_custom_patterns_replace_the_lexicon():
    miner = PropertyMiner(patterns=[re.compile(r"let (\w+)")])
    assert miner.mine([PRFile(path="x.js", added_lines=["let count = 0", "name: 'x'"])]) == ["count"]


def test_word_boundaries_are_ascii_only(lexicon):
    """An accented letter right before a name does not hide it."""
    assert all(p.flags & re.ASCII for p in lexicon.compiled_patterns())
    bare_key = PropertyMiner(patterns=lexicon.compiled_patterns()[1:2])
    assert bare_key.names_in_line("éfoo: 1") == {"foo"}
