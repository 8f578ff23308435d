# constraints.py
import logging

from alphabet import AlphabetTracker, LetterCounter, Verdict, WORD_LENGTH
from errors import ContradictoryConstraint

log = logging.getLogger(__name__)


class ConstraintModel:
    """
    Everything learned about the secret from the feedback seen so far.

    locked        position -> letter confirmed there (CORRECT)
    forbidden_at  letter -> positions where it was marked WRONG_POSITION
    exact_count   letter -> number of times it occurs in the secret, once known
    min_count     letter -> most copies any single feedback has credited so far
    must_contain  letters whose best status is WRONG_POSITION (from the tracker)
    """

    def __init__(self, tracker=None):
        self.locked = [None] * WORD_LENGTH
        self.forbidden_at = {}
        self.exact_count = {}
        self.min_count = {}
        self.tracker = tracker if tracker is not None else AlphabetTracker()

    @property
    def must_contain(self):
        return self.tracker.must_contain()

    def update(self, guess, verdicts):
        """
        Fold one scored guess into the model and the letter tracker.

        Nothing is changed if the feedback contradicts what is already known;
        ContradictoryConstraint is raised instead.
        """
        new_locks = []
        new_forbidden = []
        matched = LetterCounter()
        absent = set()

        for i, (ch, verdict) in enumerate(zip(guess, verdicts)):
            lock = self.locked[i]
            if verdict is Verdict.CORRECT:
                if lock is not None and lock != ch:
                    raise ContradictoryConstraint(
                        f"position {i + 1} is already locked to {lock!r}, got {ch!r}"
                    )
                if i in self.forbidden_at.get(ch, ()):
                    raise ContradictoryConstraint(
                        f"{ch!r} was marked misplaced at position {i + 1} before"
                    )
                new_locks.append((i, ch))
                matched.add(ch)
                continue

            if lock == ch:
                raise ContradictoryConstraint(
                    f"{ch!r} is locked at position {i + 1} but was not marked correct"
                )
            if verdict is Verdict.WRONG_POSITION:
                new_forbidden.append((ch, i))
                matched.add(ch)
            else:
                absent.add(ch)

        # An absent copy means every copy of the letter in the secret was matched
        new_counts = {ch: matched[ch] for ch in absent}

        for ch, n in new_counts.items():
            if n < self.min_count.get(ch, 0):
                raise ContradictoryConstraint(
                    f"{ch!r} was shown at least {self.min_count[ch]} times, feedback says {n}"
                )

        for ch in set(guess):
            known = self.exact_count.get(ch)
            if known is None:
                continue
            if ch in new_counts and new_counts[ch] != known:
                raise ContradictoryConstraint(
                    f"{ch!r} occurs exactly {known} times, feedback says {new_counts[ch]}"
                )
            if matched[ch] > known:
                raise ContradictoryConstraint(
                    f"{ch!r} occurs exactly {known} times, feedback matched {matched[ch]}"
                )

        for i, ch in new_locks:
            self.locked[i] = ch
        for ch, i in new_forbidden:
            self.forbidden_at.setdefault(ch, set()).add(i)
        for ch, n in new_counts.items():
            # first determination stays
            self.exact_count.setdefault(ch, n)
        for ch in set(guess):
            if matched[ch] > self.min_count.get(ch, 0):
                self.min_count[ch] = matched[ch]
        self.tracker.update(guess, verdicts)

        log.debug(
            "constraints after %s: locked=%s counts=%s",
            guess,
            "".join(ch or "." for ch in self.locked),
            dict(sorted(self.exact_count.items())),
        )

    ###########################################################################
    # Candidate filter
    ###########################################################################
    def allows(self, word, must_contain=None):
        if must_contain is None:
            must_contain = self.must_contain
        for i, ch in enumerate(word):
            lock = self.locked[i]
            if lock is not None and ch != lock:
                return False
            if i in self.forbidden_at.get(ch, ()):
                return False
        counts = LetterCounter(word)
        for ch, n in self.exact_count.items():
            if counts[ch] != n:
                return False
        for ch in must_contain:
            if counts[ch] == 0:
                return False
        return True

    def filter(self, words):
        """Words still consistent with every constraint, in their original order."""
        must_contain = self.must_contain
        return [w for w in words if self.allows(w, must_contain)]

    def __repr__(self):
        forbidden = {ch: sorted(p) for ch, p in sorted(self.forbidden_at.items())}
        return (
            f"ConstraintModel(locked={''.join(ch or '.' for ch in self.locked)!r}, "
            f"forbidden_at={forbidden}, "
            f"exact_count={dict(sorted(self.exact_count.items()))}, "
            f"must_contain={sorted(self.must_contain)})"
        )


def filter_candidates(model, words):
    return model.filter(words)


###############################################################################
# Hard mode
###############################################################################
def is_admissible(guess, last_verdicts, model):
    """
    Hard-mode check for the next guess.

    Every position that was CORRECT in the last feedback must keep its locked
    letter, and every letter whose best status is WRONG_POSITION must appear
    somewhere else in the guess. Counts and forbidden positions are not checked.
    """
    if last_verdicts is None:
        return True

    free_letters = []
    for i, ch in enumerate(guess):
        if last_verdicts[i] is Verdict.CORRECT:
            if ch != model.locked[i]:
                return False
        else:
            free_letters.append(ch)

    return all(ch in free_letters for ch in model.must_contain)
