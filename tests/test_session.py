import pytest

from errors import SessionLogError
from game import Round
from session import GameRecord, SessionLog, Stats


def test_append_and_read_back(tmp_path, words):
    log = SessionLog(tmp_path / "state.yaml")
    assert log.read() == []

    rnd = Round("crane", words)
    rnd.submit("slate")
    rnd.submit("crane")
    log.append(GameRecord.from_round(rnd))
    log.append(GameRecord("SPEED", ["CRANE"]))

    records = log.read()
    assert records == [
        GameRecord("CRANE", ["SLATE", "CRANE"]),
        GameRecord("SPEED", ["CRANE"]),
    ]
    assert records[0].won
    assert not records[1].won


def test_entries_are_separate_documents(tmp_path):
    path = tmp_path / "state.yaml"
    log = SessionLog(path)
    log.append(GameRecord("CRANE", ["CRANE"]))
    log.append(GameRecord("SLATE", ["CRANE", "SLATE"]))
    assert path.read_text(encoding="utf-8").count("---") == 2


def test_broken_log_is_reported(tmp_path):
    path = tmp_path / "state.yaml"
    path.write_text("--- [1, 2]\n", encoding="utf-8")
    with pytest.raises(SessionLogError):
        SessionLog(path).read()

    path.write_text("--- {answer: [unclosed\n", encoding="utf-8")
    with pytest.raises(SessionLogError):
        SessionLog(path).read()


def test_stats():
    stats = Stats.from_records([
        GameRecord("CRANE", ["SLATE", "CRANE"]),
        GameRecord("TRACE", ["SLATE", "CRANE", "TRACE"]),
        GameRecord("SPEED", ["CRANE"] * 6),
    ])
    assert stats.rounds == 3
    assert stats.wins == 2
    assert stats.losses == 1
    assert stats.success_rate == pytest.approx(2 / 3)
    assert stats.average_guesses == pytest.approx(2.5)
    # lost rounds do not count towards word usage
    assert stats.top_words() == [("crane", 2), ("slate", 2), ("trace", 1)]


def test_empty_stats():
    stats = Stats()
    assert stats.success_rate == 0.0
    assert stats.average_guesses == 0.0
    assert stats.top_words() == []
