import pytest

from wordlists import WordSets

FINAL = ["crane", "slate", "trace", "moldy", "speed"]
EXTRA = ["plate", "crony", "brace", "grade", "crate", "eerie", "geese", "steed", "sheep", "erase"]


@pytest.fixture
def words():
    return WordSets.from_lists(FINAL, FINAL + EXTRA)
