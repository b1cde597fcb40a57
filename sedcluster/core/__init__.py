"""Distance kernel, sparse matrix and artifact codec."""

from .tokens import TokenSequence, Corpus, load_corpus
from .edit_distance import edit_distance, normalized_edit_distance
from .matrix import DistanceMatrix, canonical_pair
from . import codec

__all__ = [
    "TokenSequence", "Corpus", "load_corpus",
    "edit_distance", "normalized_edit_distance",
    "DistanceMatrix", "canonical_pair",
    "codec",
]
