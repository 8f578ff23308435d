# session.py
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from errors import SessionLogError

log = logging.getLogger(__name__)


@dataclass
class GameRecord:
    answer: str
    guesses: list = field(default_factory=list)

    @property
    def won(self):
        return bool(self.guesses) and self.guesses[-1] == self.answer

    @classmethod
    def from_round(cls, rnd):
        return cls(rnd.secret.upper(), [r.word.upper() for r in rnd.history])

    def to_dict(self):
        return {"answer": self.answer, "guesses": list(self.guesses)}


class SessionLog:
    """One YAML document per finished round, appended to a single file."""

    def __init__(self, path):
        self.path = Path(path)

    def read(self):
        if not self.path.exists():
            return []
        records = []
        try:
            with self.path.open(encoding="utf-8") as f:
                for doc in yaml.safe_load_all(f):
                    if doc is None:
                        continue
                    if not isinstance(doc, dict) or "answer" not in doc:
                        raise SessionLogError(f"{self.path}: every entry needs an 'answer'")
                    records.append(
                        GameRecord(str(doc["answer"]).upper(),
                                   [str(g).upper() for g in doc.get("guesses") or []])
                    )
        except yaml.YAMLError as exc:
            raise SessionLogError(f"{self.path}: {exc}") from exc
        return records

    def append(self, record):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            yaml.safe_dump(record.to_dict(), f, explicit_start=True, sort_keys=False)
        log.info("round %s appended to %s", record.answer, self.path)


###############################################################################
# Stats
###############################################################################
@dataclass
class Stats:
    rounds: int = 0
    wins: int = 0
    win_guesses: int = 0
    word_counts: Counter = field(default_factory=Counter)

    @classmethod
    def from_records(cls, records):
        stats = cls()
        for record in records:
            stats.add(record)
        return stats

    def add(self, record):
        self.rounds += 1
        if record.won:
            self.wins += 1
            self.win_guesses += len(record.guesses)
            # only won rounds count towards the frequent words
            self.word_counts.update(g.lower() for g in record.guesses)

    @property
    def losses(self):
        return self.rounds - self.wins

    @property
    def success_rate(self):
        return self.wins / self.rounds if self.rounds else 0.0

    @property
    def average_guesses(self):
        return self.win_guesses / self.wins if self.wins else 0.0

    def top_words(self, k=5):
        return sorted(self.word_counts.items(), key=lambda kv: (-kv[1], kv[0]))[:k]
