# sedcluster/core/codec.py
"""
Text codec for the sparse distance artifact.

One record per line::

    (i,j) distance

Lines that do not look like a record are ignored. A line that does look
like a record but carries a broken value is a hard error.
"""
from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable, Optional, Union

from ..errors import ArtifactNotFoundError, MalformedRecordError
from .matrix import DistanceMatrix

logger = logging.getLogger(__name__)

RECORD_RE = re.compile(r"^\s*\((\d+),\s*(\d+)\)(.*)$")
DECIMAL_RE = re.compile(r"\s+([0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?\s*$")


def format_distance(distance: float) -> str:
    # Shortest round-trip repr; integral values lose the ".0".
    text = repr(float(distance))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_record(i: int, j: int, distance: float) -> str:
    return f"({i},{j}) {format_distance(distance)}"


def dumps(matrix: DistanceMatrix) -> str:
    return "".join(format_record(i, j, d) + "\n" for i, j, d in matrix.pairs())


def parse_lines(lines: Iterable[str], path: Optional[str] = None) -> DistanceMatrix:
    matrix = DistanceMatrix()
    skipped = 0
    for lineno, line in enumerate(lines, start=1):
        m = RECORD_RE.match(line)
        if m is None:
            skipped += 1
            continue

        raw = m.group(3)
        value = DECIMAL_RE.fullmatch(raw)
        if value is None:
            raise MalformedRecordError(
                f"Unparseable distance {raw.strip()!r} at line {lineno}",
                line_number=lineno, line=line.rstrip("\n"), path=path
            )
        i, j = int(m.group(1)), int(m.group(2))
        distance = float(raw)
        if i < 1 or j < 1 or i == j or distance > 1.0:
            raise MalformedRecordError(
                f"Invalid record at line {lineno}: {line.strip()!r}",
                line_number=lineno, line=line.rstrip("\n"), path=path
            )
        try:
            matrix.set(i, j, distance)
        except ValueError as e:
            raise MalformedRecordError(
                f"Duplicate record at line {lineno}: {line.strip()!r}",
                line_number=lineno, line=line.rstrip("\n"), path=path
            ) from e

    if skipped:
        logger.debug("Skipped %d non-record lines%s", skipped, f" in {path}" if path else "")
    return matrix


def loads(text: str) -> DistanceMatrix:
    # Newline-only split keeps line numbers in errors aligned with the file.
    return parse_lines(text.split("\n"))


def write(matrix: DistanceMatrix, path: Union[str, Path]) -> None:
    """Write ``matrix`` to ``path``; the file appears only once complete."""
    path = Path(path)
    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            for i, j, d in matrix.pairs():
                f.write(format_record(i, j, d))
                f.write("\n")
        os.replace(tmp, path)
    except BaseException:
        if tmp.exists():
            tmp.unlink()
        raise
    logger.info("Wrote %d distances to %s", len(matrix), path)


def read(path: Union[str, Path]) -> DistanceMatrix:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            matrix = parse_lines(f, path=str(path))
    except FileNotFoundError as e:
        raise ArtifactNotFoundError(
            f"Could not open distance matrix file {path}", path=str(path)
        ) from e
    except UnicodeDecodeError as e:
        raise MalformedRecordError(
            f"Distance matrix file {path} is not valid UTF-8: {e}", path=str(path)
        ) from e
    logger.info("Loaded %d distances from %s", len(matrix), path)
    return matrix
