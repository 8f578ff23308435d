# alphabet.py
from enum import Enum

ALPHABET = "abcdefghijklmnopqrstuvwxyz"
WORD_LENGTH = 5

# Symbol shown for a letter that has never been guessed
UNKNOWN_SYMBOL = "X"


def letter_index(ch):
    return ord(ch) - 97


###############################################################################
# Per-position verdict
###############################################################################
class Verdict(Enum):
    CORRECT = "G"
    WRONG_POSITION = "Y"
    ABSENT = "R"

    @property
    def symbol(self):
        return self.value

    @property
    def digit(self):
        # base-3 digit used in pattern codes
        return _DIGITS[self]

    @classmethod
    def from_symbol(cls, symbol):
        return cls(symbol.upper())


_DIGITS = {Verdict.CORRECT: 2, Verdict.WRONG_POSITION: 1, Verdict.ABSENT: 0}
_PRIORITY = {Verdict.CORRECT: 3, Verdict.WRONG_POSITION: 2, Verdict.ABSENT: 1, None: 0}


def priority(status):
    """
    Merge order for letter knowledge:
    Correct > WrongPosition > Absent > Unknown (None).
    """
    return _PRIORITY[status]


###############################################################################
# Fixed 26-slot multiset of letters
###############################################################################
class LetterCounter:
    __slots__ = ("_counts",)

    def __init__(self, word=""):
        self._counts = [0] * 26
        for ch in word:
            self._counts[ord(ch) - 97] += 1

    def __getitem__(self, ch):
        return self._counts[ord(ch) - 97]

    def add(self, ch, n=1):
        self._counts[ord(ch) - 97] += n

    def take(self, ch):
        # consume one occurrence if any is left
        i = ord(ch) - 97
        if self._counts[i] > 0:
            self._counts[i] -= 1
            return True
        return False

    def letters(self):
        return [ALPHABET[i] for i, c in enumerate(self._counts) if c > 0]

    def __repr__(self):
        inner = ", ".join(f"{ch}={self[ch]}" for ch in self.letters())
        return f"LetterCounter({inner})"


###############################################################################
# Best-known status for each letter over a whole round
###############################################################################
class AlphabetTracker:
    def __init__(self):
        self._status = [None] * 26

    def status(self, ch):
        return self._status[letter_index(ch)]

    def update(self, guess, verdicts):
        """Upgrade each guessed letter; a status never moves down the priority order."""
        for ch, verdict in zip(guess, verdicts):
            i = letter_index(ch)
            if priority(verdict) > priority(self._status[i]):
                self._status[i] = verdict

    def letters_with(self, verdict):
        return frozenset(ALPHABET[i] for i, s in enumerate(self._status) if s is verdict)

    def must_contain(self):
        return self.letters_with(Verdict.WRONG_POSITION)

    def code(self):
        """26 symbols, one per letter a..z: G, Y, R or X."""
        return "".join(UNKNOWN_SYMBOL if s is None else s.symbol for s in self._status)

    def snapshot(self):
        return dict(zip(ALPHABET, self._status))
