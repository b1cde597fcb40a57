"""
Compute-or-reuse orchestration for the distance artifact.

``DistanceService`` owns one corpus path, one artifact path and at most one
in-memory matrix. The matrix is either the one it just computed or one it
lazily read back from the artifact on the first lookup.
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from .config import SedConfig
from .core import codec
from .core.matrix import DistanceMatrix
from .core.tokens import load_corpus
from .errors import InputNotFoundError, InvalidIndexError
from .utils.logging_setup import log_operation

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class DistanceService:
    """
    Edit distances between the lines of one corpus file.

    The reuse check is existence-only: once the distance file exists it is
    trusted, even if it was produced from a different corpus.
    """

    def __init__(self, input_path: Optional[PathLike], distance_path: PathLike,
                 config: Optional[SedConfig] = None):
        """
        Args:
            input_path: Corpus file, one token sequence per line (None when
                the service is only used for lookups)
            distance_path: Sparse distance artifact to write or read
            config: Computation settings (defaults if None)
        """
        self.input_path = Path(input_path) if input_path is not None else None
        self.distance_path = Path(distance_path)
        self.config = config or SedConfig()
        self._matrix: Optional[DistanceMatrix] = None

    def artifact_exists(self) -> bool:
        return self.distance_path.exists()

    def compute_and_persist(self) -> bool:
        """
        Compute all pairwise distances and write the artifact.

        Returns:
            True if distances were computed, False if an existing artifact
            was reused
        """
        if self.config.reuse_existing and self.artifact_exists():
            logger.info("Distance file %s exists, skipping computation", self.distance_path)
            return False
        if self.input_path is None:
            raise InputNotFoundError("No corpus file configured for computation")

        log_operation(logger, "compute_distances",
                      input=str(self.input_path), output=str(self.distance_path))
        start = time.time()

        corpus = load_corpus(self.input_path, encoding=self.config.encoding)
        matrix = DistanceMatrix.build(
            corpus,
            workers=self.config.workers,
            use_processes=self.config.use_processes,
        )
        codec.write(matrix, self.distance_path)
        self._matrix = matrix

        logger.info("Distance computation finished in %.2fs", time.time() - start)
        return True

    @property
    def matrix(self) -> DistanceMatrix:
        """The in-memory matrix, read from the artifact on first access."""
        if self._matrix is None:
            logger.info("Loading distance matrix from %s", self.distance_path)
            self._matrix = codec.read(self.distance_path)
        return self._matrix

    @property
    def is_loaded(self) -> bool:
        return self._matrix is not None

    def get_distance(self, i: int, j: int) -> float:
        """
        Distance between corpus lines ``i`` and ``j`` (1-based, any order).

        Raises:
            InvalidIndexError: If either index is below 1
            ArtifactNotFoundError: If nothing is loaded and the file is missing
            PairNotFoundError: If the pair is not in the matrix
        """
        for idx in (i, j):
            if idx < 1:
                raise InvalidIndexError(idx)
        return self.matrix.lookup(i, j)


def compute_and_persist(input_path: PathLike, output_path: PathLike,
                        config: Optional[SedConfig] = None) -> bool:
    """Compute distances for ``input_path`` into ``output_path`` unless it exists."""
    return DistanceService(input_path, output_path, config).compute_and_persist()


def artifact_exists(output_path: PathLike) -> bool:
    return Path(output_path).exists()
