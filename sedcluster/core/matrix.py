"""
Sparse pairwise distance matrix.

Stores one distance per unordered pair of corpus items under the canonical
key (i, j) with 1 <= i < j. The all-pairs builder can fan rows out across a
thread or process pool; results are always merged by the calling thread, so
each slot is written exactly once regardless of completion order.
"""

import logging
import multiprocessing as mp
import time
from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor, as_completed
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np
from scipy import sparse

from ..errors import InvalidIndexError, PairNotFoundError
from .edit_distance import normalized_edit_distance
from .tokens import Corpus, TokenSequence

logger = logging.getLogger(__name__)

Pair = Tuple[int, int]
Row = Tuple[int, List[Tuple[int, float]]]


def canonical_pair(i: int, j: int) -> Pair:
    """Order a pair as (min, max), rejecting indices below 1 and self pairs."""
    for idx in (i, j):
        if idx < 1:
            raise InvalidIndexError(idx)
    if i == j:
        raise ValueError(f"Self pair ({i},{j}) has no stored distance")
    return (i, j) if i < j else (j, i)


def _row_distances(i: int, head: TokenSequence, tail: Sequence[TokenSequence]) -> Row:
    """Distances from item ``i`` to items i+1..N, given as ``tail``."""
    return i, [
        (i + 1 + offset, normalized_edit_distance(head.tokens, other.tokens))
        for offset, other in enumerate(tail)
    ]


class DistanceMatrix:
    """Write-once mapping of (i, j) -> normalized edit distance with i < j."""

    def __init__(self, size: int = 0) -> None:
        self._rows: Dict[int, Dict[int, float]] = {}
        self._count = 0
        self._size = size

    # ----------------------------
    # Construction
    # ----------------------------
    @classmethod
    def build(
        cls,
        corpus: Corpus,
        workers: int = 1,
        use_processes: bool = False,
    ) -> "DistanceMatrix":
        """
        Compute every unordered pair of ``corpus``.

        Args:
            corpus: Items to compare
            workers: Pool size; 1 computes inline, 0 means one per CPU
            use_processes: Use a process pool instead of threads

        Returns:
            Fully populated matrix with N(N-1)/2 entries
        """
        n = len(corpus)
        matrix = cls(size=n)
        seqs = corpus.sequences
        if workers == 0:
            workers = mp.cpu_count()

        start = time.time()
        if workers <= 1 or n < 3:
            for idx in range(n - 1):
                matrix._add_row(_row_distances(idx + 1, seqs[idx], seqs[idx + 1:]))
        else:
            pool_cls = ProcessPoolExecutor if use_processes else ThreadPoolExecutor
            with pool_cls(max_workers=workers) as executor:
                futures = [
                    executor.submit(_row_distances, idx + 1, seqs[idx], seqs[idx + 1:])
                    for idx in range(n - 1)
                ]
                for future in as_completed(futures):
                    matrix._add_row(future.result())

        logger.info(
            "Computed %d pairwise distances for %d items in %.2fs (workers=%d)",
            len(matrix), n, time.time() - start, max(workers, 1)
        )
        return matrix

    def _add_row(self, row: Row) -> None:
        i, entries = row
        for j, distance in entries:
            self.set(i, j, distance)

    def set(self, i: int, j: int, distance: float) -> None:
        """Store ``distance`` for the pair; each pair may be set only once."""
        i, j = canonical_pair(i, j)
        row = self._rows.setdefault(i, {})
        if j in row:
            raise ValueError(f"Distance for pair ({i},{j}) already stored")
        row[j] = float(distance)
        self._count += 1
        if j > self._size:
            self._size = j

    # ----------------------------
    # Queries
    # ----------------------------
    def lookup(self, i: int, j: int) -> float:
        """Return the distance for (i, j) in either order."""
        if i == j:
            if i < 1:
                raise InvalidIndexError(i)
            # Self pairs are never stored.
            raise PairNotFoundError(i, j)
        key = canonical_pair(i, j)
        try:
            return self._rows[key[0]][key[1]]
        except KeyError:
            raise PairNotFoundError(i, j) from None

    def get(self, i: int, j: int, default: Optional[float] = None) -> Optional[float]:
        try:
            return self.lookup(i, j)
        except PairNotFoundError:
            return default

    def pairs(self) -> Iterator[Tuple[int, int, float]]:
        """Yield (i, j, distance) ascending by i, then j."""
        for i in sorted(self._rows):
            row = self._rows[i]
            for j in sorted(row):
                yield i, j, row[j]

    @property
    def size(self) -> int:
        """Corpus size when built, otherwise the largest index seen."""
        return self._size

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        try:
            i, j = canonical_pair(*pair)
        except (ValueError, TypeError):
            return False
        return j in self._rows.get(i, {})

    def __len__(self) -> int:
        return self._count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DistanceMatrix):
            return NotImplemented
        return self._rows == other._rows

    def __repr__(self) -> str:
        return f"DistanceMatrix(size={self._size}, pairs={self._count})"

    # ----------------------------
    # Hand-off to clustering code
    # ----------------------------
    def to_sparse(self) -> sparse.csr_matrix:
        """Symmetric (size x size) CSR matrix, 0-based, absent pairs implicit."""
        n = self._size
        rows = np.empty(2 * self._count, dtype=np.int64)
        cols = np.empty(2 * self._count, dtype=np.int64)
        data = np.empty(2 * self._count, dtype=np.float64)
        for k, (i, j, d) in enumerate(self.pairs()):
            rows[2 * k], cols[2 * k] = i - 1, j - 1
            rows[2 * k + 1], cols[2 * k + 1] = j - 1, i - 1
            data[2 * k] = data[2 * k + 1] = d
        return sparse.coo_matrix((data, (rows, cols)), shape=(n, n)).tocsr()

    def to_condensed(self) -> np.ndarray:
        """
        Condensed distance vector in ``scipy.spatial.distance`` order,
        suitable for ``scipy.cluster.hierarchy.linkage``.

        Every pair must be present.
        """
        n = self._size
        out = np.empty(n * (n - 1) // 2, dtype=np.float64)
        k = 0
        for i in range(1, n):
            for j in range(i + 1, n + 1):
                out[k] = self.lookup(i, j)
                k += 1
        return out
