import pytest

from alphabet import Verdict
from constraints import ConstraintModel, filter_candidates, is_admissible
from errors import ContradictoryConstraint
from feedback import evaluate

C, W, A = Verdict.CORRECT, Verdict.WRONG_POSITION, Verdict.ABSENT


def model_after(secret, *guesses):
    model = ConstraintModel()
    for guess in guesses:
        model.update(guess, evaluate(secret, guess))
    return model


def test_guess_locks_and_excludes():
    model = model_after("slate", "crane")
    assert model.locked == [None, None, "a", None, "e"]
    assert model.exact_count == {"c": 0, "r": 0, "n": 0}
    assert filter_candidates(model, ["crane", "slate", "trace"]) == ["slate"]


def test_all_absent_guess_drops_words_sharing_letters():
    model = model_after("moldy", "crane")
    assert model.filter(["crane", "slate", "trace", "moldy"]) == ["moldy"]


def test_misplaced_letter_is_forbidden_there_and_required():
    model = model_after("trace", "crane")
    assert model.forbidden_at == {"c": {0}}
    assert model.must_contain == {"c"}
    assert model.filter(["crate", "brace", "grade", "trace"]) == ["brace", "trace"]


def test_exact_count_from_misplaced_and_absent_copies():
    model = model_after("speed", "eerie")
    assert model.exact_count == {"e": 2, "r": 0, "i": 0}
    assert model.forbidden_at == {"e": {0, 1}}
    pool = ["speed", "steed", "geese", "sheep", "eerie"]
    assert model.filter(pool) == ["speed", "steed", "sheep"]


def test_exact_count_from_correct_misplaced_and_absent_copies():
    model = model_after("speed", "geese")
    assert model.locked[2] == "e"
    assert model.exact_count == {"e": 2, "g": 0}
    assert model.forbidden_at == {"e": {1}, "s": {3}}
    assert model.filter(["speed", "geese", "steed", "sheep", "erase"]) == ["speed", "steed", "sheep"]


def test_count_without_absent_copy_is_not_exact():
    model = model_after("speed", "erase")
    assert "e" not in model.exact_count
    assert model.exact_count == {"r": 0, "a": 0}


def test_refilter_is_idempotent():
    pool = ["speed", "steed", "geese", "sheep", "eerie", "crane", "erase"]
    model = model_after("speed", "crane")
    once = model.filter(pool)
    assert model.filter(once) == once


def test_candidates_shrink_every_round():
    pool = ["speed", "steed", "geese", "sheep", "eerie", "crane", "erase", "slate"]
    model = ConstraintModel()
    previous = model.filter(pool)
    assert previous == pool
    for guess in ["slate", "eerie", "steed"]:
        model.update(guess, evaluate("speed", guess))
        current = model.filter(pool)
        assert set(current) <= set(previous)
        previous = current
    assert "speed" in previous


def test_filter_does_not_touch_model():
    model = model_after("trace", "crane")
    before = repr(model)
    model.filter(["trace", "brace", "crate"])
    assert repr(model) == before


def test_contradicting_count_is_rejected_and_nothing_changes():
    model = model_after("speed", "eerie")
    before = repr(model)
    with pytest.raises(ContradictoryConstraint):
        # claims three e's after the secret was shown to hold exactly two
        model.update("geese", (A, W, C, W, W))
    assert repr(model) == before


def test_contradicting_lock_is_rejected():
    model = model_after("slate", "crane")
    with pytest.raises(ContradictoryConstraint):
        model.update("crony", (A, A, C, A, A))
    with pytest.raises(ContradictoryConstraint):
        # 'a' is locked at index 2, so it cannot be anything but correct there
        model.update("plate", (A, C, W, C, C))


def test_correct_where_letter_was_misplaced_is_rejected():
    model = model_after("trace", "crane")
    with pytest.raises(ContradictoryConstraint):
        model.update("crony", (C, C, A, A, A))


def test_absent_letter_already_shown_present_is_rejected():
    model = ConstraintModel()
    model.update("crane", (W, A, A, A, A))
    before = repr(model)
    with pytest.raises(ContradictoryConstraint):
        model.update("cloth", (A, A, A, A, A))
    assert repr(model) == before
    assert model.min_count["c"] == 1
    assert model.must_contain == {"c"}
    assert model.filter(["music", "cloth", "trace"]) == ["music"]


def test_fewer_copies_than_already_shown_is_rejected():
    model = model_after("geese", "sheep")
    assert model.min_count["e"] == 2
    with pytest.raises(ContradictoryConstraint):
        # one e credited, the other absent, after two were already shown
        model.update("erase", (W, A, A, W, A))
    assert "e" not in model.exact_count


def test_exact_count_is_kept_once_known():
    model = model_after("speed", "geese")
    model.update("speed", evaluate("speed", "speed"))
    assert model.exact_count["e"] == 2
    assert model.locked == list("speed")


###############################################################################
# Hard mode
###############################################################################
def test_admissible_keeps_locked_letters():
    model = model_after("slate", "crane")
    last = evaluate("slate", "crane")
    assert is_admissible("plate", last, model)
    assert not is_admissible("crony", last, model)


def test_admissible_needs_misplaced_letters():
    model = model_after("trace", "crane")
    last = evaluate("trace", "crane")
    assert is_admissible("brace", last, model)
    assert not is_admissible("grade", last, model)


def test_admissible_ignores_forbidden_positions_and_counts():
    model = model_after("trace", "crane")
    last = evaluate("trace", "crane")
    # 'c' back at index 0 fails the filter but is still a legal hard-mode guess
    assert not model.allows("crate")
    assert is_admissible("crate", last, model)


def test_first_guess_is_always_admissible():
    assert is_admissible("crane", None, ConstraintModel())
