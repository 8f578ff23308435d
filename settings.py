# settings.py
import logging
from dataclasses import dataclass, fields, replace

import yaml
from rich.logging import RichHandler

from errors import ConfigError
from game import DEFAULT_SEED

# config file key -> Settings attribute
_FILE_KEYS = {"difficult": "hard_mode"}


@dataclass(frozen=True)
class Settings:
    random: bool = False
    hard_mode: bool = False
    stats: bool = False
    day: int = 1
    seed: int = DEFAULT_SEED
    word: str = None
    final_set: str = None
    acceptable_set: str = None
    state: str = None
    recommend: bool = False
    top_k: int = 5
    workers: int = 1
    pattern_data: str = None
    candidate_pool: str = "acceptable"

    def merge(self, overrides):
        """Apply command-line values; None means 'not given'."""
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in overrides.items() if k in known and v is not None}
        merged = replace(self, **changes)
        # the explicit (non-default) seed/day are what matters for the conflict check
        merged.validate(
            seed_given="seed" in changes or self.seed != DEFAULT_SEED,
            day_given="day" in changes or self.day != 1,
        )
        return merged

    def validate(self, seed_given=False, day_given=False):
        if self.random and self.word:
            raise ConfigError("random mode and an explicit word cannot be combined")
        if (seed_given or day_given) and not self.random:
            raise ConfigError("seed and day can only be used in random mode")
        if self.day < 1:
            raise ConfigError("day must be a positive integer")
        if self.top_k < 1:
            raise ConfigError("top_k must be at least 1")
        if self.workers < 1:
            raise ConfigError("workers must be at least 1")
        if self.candidate_pool not in ("acceptable", "final"):
            raise ConfigError("candidate_pool must be 'acceptable' or 'final'")


_TYPES = {f.name: f.type for f in fields(Settings)}


def _coerce(key, value):
    expected = _TYPES[key]
    if expected is bool:
        if not isinstance(value, bool):
            raise ConfigError(f"'{key}' must be true or false")
        return value
    if expected is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"'{key}' must be an integer")
        return value
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string")
    return value


def load_settings(path=None):
    if path is None:
        return Settings()
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"config file {path} not found") from None
    except yaml.YAMLError as exc:
        raise ConfigError(f"config file {path}: {exc}") from exc

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")

    values = {}
    for key, value in data.items():
        name = _FILE_KEYS.get(key, key)
        if name not in _TYPES:
            raise ConfigError(f"unknown config key '{key}'")
        if value is None:
            continue
        values[name] = _coerce(name, value)
    return Settings(**values)


def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
