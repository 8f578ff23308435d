# wordlists.py
import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from alphabet import WORD_LENGTH
from errors import (
    FinalSetNotSubsetOfAcceptableSet,
    InvalidLetter,
    InvalidWordLength,
    SecretNotInFinalSet,
    WordNotInAcceptableSet,
)

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_FINAL = DATA_DIR / "wordlist.yaml"
DEFAULT_ACCEPTABLE = DATA_DIR / "guessable.yaml"

_LETTERS = re.compile(r"^[a-z]+$")


###############################################################################
# Load word lists
###############################################################################
def load_wordlist_yaml(path):
    # a .yaml list of words
    with open(path, encoding="utf-8") as f:
        words = yaml.safe_load(f)
    if not isinstance(words, list):
        raise ValueError(f"{path} must contain a YAML list of words")
    return [str(w) for w in words]


def load_wordlist_txt(path):
    # a .txt with one word per line
    out = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            w = line.strip()
            if w:
                out.append(w)
    return out


def load_wordlist(path):
    if Path(path).suffix in (".yaml", ".yml"):
        return load_wordlist_yaml(path)
    return load_wordlist_txt(path)


def normalize_words(words):
    """Lower-case, strip, drop duplicates and sort."""
    return sorted({w.strip().lower() for w in words if w.strip()})


def check_word(word):
    """Normalised word, or InvalidWordLength / InvalidLetter."""
    word = word.strip().lower()
    if len(word) != WORD_LENGTH:
        raise InvalidWordLength(word, WORD_LENGTH)
    if not _LETTERS.match(word):
        raise InvalidLetter(word)
    return word


###############################################################################
# Final + acceptable sets
###############################################################################
@dataclass(frozen=True)
class WordSets:
    final: tuple
    acceptable: tuple
    _acceptable_lookup: frozenset = field(repr=False, compare=False, default=frozenset())
    _final_lookup: frozenset = field(repr=False, compare=False, default=frozenset())

    @classmethod
    def from_lists(cls, final, acceptable):
        final = normalize_words(final)
        acceptable = normalize_words(acceptable)
        for w in acceptable:
            check_word(w)
        for w in final:
            check_word(w)

        acceptable_lookup = frozenset(acceptable)
        missing = [w for w in final if w not in acceptable_lookup]
        if missing:
            raise FinalSetNotSubsetOfAcceptableSet(missing)

        return cls(tuple(final), tuple(acceptable), acceptable_lookup, frozenset(final))

    @classmethod
    def load(cls, final_path=None, acceptable_path=None):
        final = load_wordlist(final_path or DEFAULT_FINAL)
        acceptable = load_wordlist(acceptable_path or DEFAULT_ACCEPTABLE)
        return cls.from_lists(final, acceptable)

    def check_guess(self, word):
        word = check_word(word)
        if word not in self._acceptable_lookup:
            raise WordNotInAcceptableSet(word)
        return word

    def check_secret(self, word):
        word = check_word(word)
        if word not in self._final_lookup:
            raise SecretNotInFinalSet(word)
        return word
