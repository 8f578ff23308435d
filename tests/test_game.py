import pytest

from alphabet import Verdict
from errors import (
    ContradictoryConstraint,
    HardModeViolation,
    RoundOver,
    SecretNotInFinalSet,
    WordNotInAcceptableSet,
)
from game import Assistant, Round, pick_secret
from guesser import Guesser


def test_round_is_won_on_the_secret(words):
    rnd = Round("crane", words)
    first = rnd.submit("slate")
    assert first.code == "RRGRG"
    assert not rnd.over
    assert rnd.letter_codes() == "GXXXGXXXXXXRXXXXXXRRXXXXXX"

    last = rnd.submit("CRANE")
    assert last.code == "GGGGG"
    assert rnd.won and rnd.over and not rnd.lost
    assert rnd.guesses_used == 2
    assert [r.word for r in rnd.history] == ["slate", "crane"]


def test_round_is_lost_after_six_guesses(words):
    rnd = Round("speed", words)
    for _ in range(6):
        rnd.submit("crane")
    assert rnd.lost and rnd.over and not rnd.won
    with pytest.raises(RoundOver):
        rnd.submit("speed")


def test_invalid_guess_does_not_use_a_turn(words):
    rnd = Round("speed", words)
    with pytest.raises(WordNotInAcceptableSet):
        rnd.submit("zzzzz")
    assert rnd.guesses_used == 0


def test_secret_must_be_in_final_set(words):
    with pytest.raises(SecretNotInFinalSet):
        Round("brace", words)


def test_hard_mode(words):
    rnd = Round("trace", words, hard_mode=True)
    rnd.submit("crane")
    with pytest.raises(HardModeViolation):
        rnd.submit("grade")
    assert rnd.guesses_used == 1
    assert rnd.submit("brace").code == "RGGGG"


def test_round_candidates_and_recommendation(words):
    rnd = Round("trace", words)
    rnd.submit("crane")
    assert rnd.candidates() == ["trace"]
    assert rnd.recommend(Guesser(words, pool="acceptable")) == [("brace", 0.0), ("trace", 0.0)]


def test_pick_secret_is_repeatable(words):
    first = pick_secret(words.final, seed=7, day=1)
    assert first == pick_secret(words.final, seed=7, day=1)
    assert first in words.final
    days = {pick_secret(words.final, seed=7, day=d) for d in range(1, len(words.final) + 1)}
    assert days == set(words.final)
    with pytest.raises(ValueError):
        pick_secret(words.final, day=0)


def test_assistant_narrows_down_from_typed_feedback(words):
    assistant = Assistant(words)
    assistant.observe("crane", "YGGRG")
    assert assistant.candidates() == ["brace", "trace"]
    assistant.observe("brace", "rgggg")
    assert assistant.candidates() == ["trace"]
    assistant.observe("trace", "GGGGG")
    assert assistant.solved and assistant.over


def test_assistant_rejects_contradicting_feedback(words):
    assistant = Assistant(words)
    assistant.observe("crane", "YGGRG")
    with pytest.raises(ContradictoryConstraint):
        assistant.observe("crony", "GGRRR")
    with pytest.raises(ContradictoryConstraint):
        assistant.observe("crane", "YGGGG")
    assert assistant.guesses_used == 1
    assert assistant.candidates() == ["brace", "trace"]


def test_assistant_rejects_malformed_feedback(words):
    assistant = Assistant(words)
    with pytest.raises(ValueError):
        assistant.observe("crane", "GGX")
    assert assistant.guesses_used == 0


def test_assistant_rejects_short_verdict_sequence(words):
    assistant = Assistant(words)
    with pytest.raises(ValueError):
        assistant.observe("crane", (Verdict.CORRECT,) * 4)
    with pytest.raises(ValueError):
        assistant.observe("crane", ["G"] * 5)
    assert assistant.guesses_used == 0
    assistant.observe("crane", (Verdict.ABSENT,) * 5)
    assert assistant.guesses_used == 1
