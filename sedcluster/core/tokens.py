# sedcluster/core/tokens.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Tuple, Union

from ..errors import InputNotFoundError, InvalidIndexError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenSequence:
    """One corpus item: the whitespace-separated tokens of a single line."""

    tokens: Tuple[str, ...] = ()

    @classmethod
    def from_line(cls, line: str) -> "TokenSequence":
        return cls(tuple(line.split()))

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __getitem__(self, idx: int) -> str:
        return self.tokens[idx]

    def __str__(self) -> str:
        return " ".join(self.tokens)


class Corpus:
    """
    Ordered, immutable collection of token sequences.

    Items are addressed by 1-based line number through ``get``; iteration
    yields them in line order.
    """

    def __init__(self, sequences: Iterable[TokenSequence] = ()) -> None:
        self._items: Tuple[TokenSequence, ...] = tuple(sequences)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Corpus":
        return cls(TokenSequence.from_line(line) for line in lines)

    def get(self, index: int) -> TokenSequence:
        """Return the sequence at 1-based ``index``."""
        if index < 1:
            raise InvalidIndexError(index)
        if index > len(self._items):
            raise IndexError(f"corpus has {len(self._items)} items, asked for {index}")
        return self._items[index - 1]

    @property
    def sequences(self) -> Tuple[TokenSequence, ...]:
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TokenSequence]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Corpus(size={len(self._items)})"


def load_corpus(path: Union[str, Path], encoding: str = "utf-8") -> Corpus:
    """
    Read ``path`` fully, one token sequence per line.

    Lines break on newlines only, so item ``i`` is always line ``i`` even
    when a line holds form feeds or other Unicode line separators.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding=encoding) as fh:
            lines = [line.rstrip("\r\n") for line in fh]
    except (OSError, UnicodeDecodeError) as e:
        raise InputNotFoundError(f"Could not read corpus file {path}: {e}", path=str(path)) from e

    corpus = Corpus.from_lines(lines)
    logger.debug("Loaded %d sequences from %s", len(corpus), path)
    return corpus
