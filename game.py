# game.py
import logging
import random
from dataclasses import dataclass

from alphabet import Verdict, WORD_LENGTH
from constraints import ConstraintModel, is_admissible
from errors import HardModeViolation, RoundOver
from feedback import evaluate, format_verdicts, is_win, parse_verdicts

log = logging.getLogger(__name__)

MAX_GUESSES = 6
DEFAULT_SEED = 19260817998244353


@dataclass(frozen=True)
class GuessRecord:
    word: str
    verdicts: tuple

    @property
    def code(self):
        return format_verdicts(self.verdicts)


def pick_secret(final, seed=DEFAULT_SEED, day=1):
    """Secret for a given day: the final set shuffled once per seed, indexed by day."""
    if day < 1:
        raise ValueError("day must be a positive integer")
    words = list(final)
    random.Random(seed).shuffle(words)
    return words[(day - 1) % len(words)]


class _Board:
    """History, constraint model and letter tracker shared by both game modes."""

    def __init__(self, words):
        self.words = words
        self.model = ConstraintModel()
        self._history = []

    @property
    def tracker(self):
        return self.model.tracker

    @property
    def history(self):
        return list(self._history)

    @property
    def guesses_used(self):
        return len(self._history)

    @property
    def last_verdicts(self):
        return self._history[-1].verdicts if self._history else None

    def letter_codes(self):
        return self.tracker.code()

    def candidates(self, pool=None):
        return self.model.filter(self.words.final if pool is None else pool)

    def recommend(self, guesser):
        return guesser.recommend(self.model)

    def _record(self, word, verdicts):
        self.model.update(word, verdicts)
        record = GuessRecord(word, tuple(verdicts))
        self._history.append(record)
        return record


###############################################################################
# A round with a known secret
###############################################################################
class Round(_Board):
    def __init__(self, secret, words, hard_mode=False, max_guesses=MAX_GUESSES):
        super().__init__(words)
        self.secret = words.check_secret(secret)
        self.hard_mode = hard_mode
        self.max_guesses = max_guesses

    @property
    def won(self):
        return bool(self._history) and self._history[-1].word == self.secret

    @property
    def lost(self):
        return not self.won and len(self._history) >= self.max_guesses

    @property
    def over(self):
        return self.won or self.lost

    def check_guess(self, guess):
        guess = self.words.check_guess(guess)
        if self.hard_mode and not is_admissible(guess, self.last_verdicts, self.model):
            raise HardModeViolation(
                f"{guess!r} must reuse the confirmed letters and every misplaced letter"
            )
        return guess

    def submit(self, guess):
        if self.over:
            raise RoundOver("the round is already over")
        guess = self.check_guess(guess)
        record = self._record(guess, evaluate(self.secret, guess))
        log.debug("guess %d: %s -> %s", len(self._history), guess, record.code)
        return record


###############################################################################
# Feedback typed in from a game played elsewhere
###############################################################################
class Assistant(_Board):
    def __init__(self, words, max_guesses=MAX_GUESSES):
        super().__init__(words)
        self.max_guesses = max_guesses
        self.solved = False

    @property
    def over(self):
        return self.solved or len(self._history) >= self.max_guesses

    def observe(self, guess, feedback):
        """Record a guess with its G/Y/R feedback string (or verdict sequence)."""
        if self.over:
            raise RoundOver("no guesses left to observe")
        guess = self.words.check_guess(guess)
        if isinstance(feedback, str):
            verdicts = parse_verdicts(feedback)
        else:
            verdicts = tuple(feedback)
            if len(verdicts) != WORD_LENGTH or not all(isinstance(v, Verdict) for v in verdicts):
                raise ValueError(f"feedback must be {WORD_LENGTH} verdicts, got {verdicts!r}")
        record = self._record(guess, verdicts)
        self.solved = is_win(verdicts)
        return record

    def candidates(self, pool=None):
        return self.model.filter(self.words.acceptable if pool is None else pool)
