# feedback.py
from alphabet import LetterCounter, Verdict, WORD_LENGTH

N_PATTERNS = 3 ** WORD_LENGTH  # 243
ALL_CORRECT = N_PATTERNS - 1


def evaluate(secret, guess):
    """
    Verdict for every position of guess against secret.

    Exact matches are taken first; the secret letters left over feed the
    wrong-position marks from left to right, so surplus copies of a letter
    in the guess come out ABSENT.
    """
    verdicts = [Verdict.ABSENT] * WORD_LENGTH
    remaining = LetterCounter()

    # Mark exact
    for i in range(WORD_LENGTH):
        if guess[i] == secret[i]:
            verdicts[i] = Verdict.CORRECT
        else:
            remaining.add(secret[i])

    # Mark misplaced
    for i in range(WORD_LENGTH):
        if verdicts[i] is not Verdict.CORRECT and remaining.take(guess[i]):
            verdicts[i] = Verdict.WRONG_POSITION

    return tuple(verdicts)


def pattern_code(verdicts):
    # Convert base-3 pattern to integer, position 0 is the lowest digit
    code = 0
    base = 1
    for v in verdicts:
        code += v.digit * base
        base *= 3
    return code


def compute_pattern(guess, secret):
    """Integer code 0..242 for guess vs. secret: 2 => exact, 1 => misplaced, 0 => miss."""
    pat = [0] * WORD_LENGTH
    remaining = LetterCounter()

    for i in range(WORD_LENGTH):
        if guess[i] == secret[i]:
            pat[i] = 2
        else:
            remaining.add(secret[i])

    for i in range(WORD_LENGTH):
        if pat[i] == 0 and remaining.take(guess[i]):
            pat[i] = 1

    return pat[0] + 3 * pat[1] + 9 * pat[2] + 27 * pat[3] + 81 * pat[4]


def verdicts_from_code(code):
    by_digit = {v.digit: v for v in Verdict}
    out = []
    for _ in range(WORD_LENGTH):
        out.append(by_digit[code % 3])
        code //= 3
    return tuple(out)


###############################################################################
# G/Y/R strings
###############################################################################
def format_verdicts(verdicts):
    return "".join(v.symbol for v in verdicts)


def parse_verdicts(text):
    """Parse a feedback string such as 'GYRRG' (case-insensitive)."""
    text = text.strip().upper()
    if len(text) != WORD_LENGTH:
        raise ValueError(f"feedback {text!r} must have {WORD_LENGTH} symbols")
    try:
        return tuple(Verdict.from_symbol(ch) for ch in text)
    except ValueError:
        raise ValueError(f"feedback {text!r} may only use G, Y and R") from None


def is_win(verdicts):
    return all(v is Verdict.CORRECT for v in verdicts)
