"""sedcluster - pairwise token edit distances for clustering preprocessing."""

__version__ = "0.1.0"

from .core.tokens import TokenSequence, Corpus, load_corpus
from .core.edit_distance import edit_distance, normalized_edit_distance
from .core.matrix import DistanceMatrix
from .service import DistanceService, compute_and_persist, artifact_exists
from .config import SedConfig
from .errors import (
    SedError,
    InputNotFoundError,
    ArtifactNotFoundError,
    MalformedRecordError,
    PairNotFoundError,
    InvalidIndexError,
)

__all__ = [
    "TokenSequence", "Corpus", "load_corpus",
    "edit_distance", "normalized_edit_distance",
    "DistanceMatrix",
    "DistanceService", "compute_and_persist", "artifact_exists",
    "SedConfig",
    "SedError", "InputNotFoundError", "ArtifactNotFoundError",
    "MalformedRecordError", "PairNotFoundError", "InvalidIndexError",
    "__version__",
]
