# precompute.py
import argparse
import logging
import time

import numpy as np

from feedback import compute_pattern
from settings import setup_logging
from wordlists import DEFAULT_ACCEPTABLE, load_wordlist, normalize_words

log = logging.getLogger(__name__)


# --------------------------------------------
# Build the (n x n) matrix of pattern codes
# --------------------------------------------
# pattern_matrix[i, j] = integer code for guess=words[i], secret=words[j]
def build_pattern_matrix(words):
    n = len(words)
    pattern_matrix = np.zeros((n, n), dtype=np.uint8)
    for i in range(n):
        g = words[i]
        for j in range(n):
            pattern_matrix[i, j] = compute_pattern(g, words[j])
    return pattern_matrix


class PatternTable:
    def __init__(self, words, pattern_matrix):
        self.words = list(words)
        self.pattern_matrix = pattern_matrix
        # Make a map word -> index in the precomputed array
        self.index = {w: i for i, w in enumerate(self.words)}

    @classmethod
    def build(cls, words):
        words = sorted(set(words))
        start = time.perf_counter()
        table = cls(words, build_pattern_matrix(words))
        log.info("pattern table for %d words built in %.1fs", len(words), time.perf_counter() - start)
        return table

    @classmethod
    def load(cls, path):
        data = np.load(path, allow_pickle=True)
        words = [str(w) for w in data["words"]]
        return cls(words, data["pattern_matrix"])

    def save(self, path):
        np.savez(path, words=np.array(self.words), pattern_matrix=self.pattern_matrix)

    def covers(self, words):
        return all(w in self.index for w in words)

    def submatrix(self, words):
        idx = np.array([self.index[w] for w in words], dtype=np.int32)
        return self.pattern_matrix[np.ix_(idx, idx)]

    def __len__(self):
        return len(self.words)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Precompute the pattern table for a word list.")
    parser.add_argument("words", nargs="?", default=str(DEFAULT_ACCEPTABLE),
                        help="YAML or text word list (default: data/guessable.yaml)")
    parser.add_argument("-o", "--out", default="pattern_data.npz")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    words = normalize_words(load_wordlist(args.words))
    print(f"Building pattern matrix for {len(words)} words...")
    table = PatternTable.build(words)
    table.save(args.out)
    print(f"Done. Created {args.out} with {len(table)} words.")


if __name__ == "__main__":
    main()
