# guesser.py
import logging
import time
from concurrent.futures import ProcessPoolExecutor

import numpy as np

from feedback import N_PATTERNS, compute_pattern
from precompute import PatternTable, build_pattern_matrix

log = logging.getLogger(__name__)


# Entropy calculation
def shannon_entropy(counts):
    total = counts.sum()
    if total <= 1:
        return 0.0
    # summed over sorted bucket sizes so equal splits give bit-equal scores;
    # log2(1/p) keeps a single bucket at +0.0
    p = np.sort(counts[counts > 0]) / total
    return float(np.sum(p * np.log2(1.0 / p)))


def pattern_counts(row, self_index):
    """Histogram of the 243 pattern codes in one matrix row, leaving out the guess itself."""
    counts = np.bincount(row, minlength=N_PATTERNS)
    counts[row[self_index]] -= 1
    return counts


def _sort_key(item):
    return (-item[1], item[0])


###############################################################################
# Ranking
###############################################################################
def _score_rows(words, pattern_matrix, start, stop):
    return [
        (words[i], shannon_entropy(pattern_counts(pattern_matrix[i], i)))
        for i in range(start, stop)
    ]


def _score_shard(words, start, stop):
    # runs in a worker process; rows are rebuilt there instead of pickling the matrix
    out = []
    for i in range(start, stop):
        guess = words[i]
        row = np.fromiter((compute_pattern(guess, w) for w in words), dtype=np.uint8, count=len(words))
        out.append((guess, shannon_entropy(pattern_counts(row, i))))
    return out


def rank_candidates(candidates, table=None, workers=1):
    """
    Score every candidate by the entropy of the feedback it would get from
    the other candidates, each taken in turn as the secret.

    Returns (word, bits) pairs, highest first, ties in alphabetical order.
    """
    words = list(dict.fromkeys(candidates))
    n = len(words)
    if n == 0:
        return []
    if n == 1:
        return [(words[0], 0.0)]

    start = time.perf_counter()
    if workers > 1 and n > workers:
        bounds = np.linspace(0, n, workers + 1, dtype=int)
        with ProcessPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_score_shard, words, int(lo), int(hi))
                for lo, hi in zip(bounds[:-1], bounds[1:])
            ]
            scored = [item for f in futures for item in f.result()]
    else:
        if table is not None and table.covers(words):
            pattern_matrix = table.submatrix(words)
        else:
            pattern_matrix = build_pattern_matrix(words)
        scored = _score_rows(words, pattern_matrix, 0, n)

    scored.sort(key=_sort_key)
    log.debug("ranked %d candidates in %.3fs", n, time.perf_counter() - start)
    return scored


###############################################################################
# Recommendation
###############################################################################
class Guesser:
    def __init__(self, words, top_k=5, workers=1, pool="acceptable", pattern_data=None):
        self.words = words
        self.top_k = top_k
        self.workers = workers
        if pool not in ("acceptable", "final"):
            raise ValueError(f"pool must be 'acceptable' or 'final', got {pool!r}")
        self.pool = pool
        self.table = None
        if pattern_data is not None:
            self.load_table(pattern_data)

    def load_table(self, path):
        try:
            self.table = PatternTable.load(path)
        except FileNotFoundError:
            log.warning("pattern table %s not found, ranking without it", path)
            return
        log.info("loaded pattern table with %d words from %s", len(self.table), path)

    def dictionary(self):
        return self.words.acceptable if self.pool == "acceptable" else self.words.final

    def candidates(self, model):
        remaining = model.filter(self.dictionary())
        log.debug("%d candidates left", len(remaining))
        return remaining

    def recommend(self, model):
        """Top-k (word, bits) for the current constraints; empty if nothing fits."""
        ranked = rank_candidates(self.candidates(model), table=self.table, workers=self.workers)
        return ranked[: self.top_k]
