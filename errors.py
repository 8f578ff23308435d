# errors.py


class WordleError(Exception):
    """Base class for everything the engine reports back to the caller."""


###############################################################################
# Word validation
###############################################################################
class InvalidWordLength(WordleError, ValueError):
    def __init__(self, word, length=5):
        super().__init__(f"{word!r} has {len(word)} letters, expected {length}")
        self.word = word


class InvalidLetter(WordleError, ValueError):
    def __init__(self, word):
        super().__init__(f"{word!r} contains characters outside a-z")
        self.word = word


class WordNotInAcceptableSet(WordleError, ValueError):
    def __init__(self, word):
        super().__init__(f"{word!r} is not in the acceptable word list")
        self.word = word


class SecretNotInFinalSet(WordleError, ValueError):
    def __init__(self, word):
        super().__init__(f"{word!r} is not in the final word list")
        self.word = word


class FinalSetNotSubsetOfAcceptableSet(WordleError):
    def __init__(self, missing):
        self.missing = sorted(missing)
        preview = ", ".join(self.missing[:5])
        super().__init__(
            f"{len(self.missing)} final words are not acceptable guesses: {preview}"
        )


###############################################################################
# Game state
###############################################################################
class ContradictoryConstraint(WordleError):
    pass


class HardModeViolation(WordleError):
    pass


class RoundOver(WordleError):
    pass


###############################################################################
# Surroundings
###############################################################################
class ConfigError(WordleError):
    pass


class SessionLogError(WordleError):
    pass
