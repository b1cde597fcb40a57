"""
Token-level Levenshtein distance.

Tokens are compared by exact string equality; there is no character-level
edit distance inside a token. The normalized form divides by the length of
the longer sequence so items of different lengths are comparable.
"""

from typing import Sequence


def edit_distance(a: Sequence[str], b: Sequence[str]) -> int:
    """
    Minimum number of token insertions, deletions and substitutions
    turning ``a`` into ``b``.

    Evaluates the (m+1) x (n+1) table one row at a time; ``prev`` holds
    row i-1 and ``cur`` row i.
    """
    m, n = len(a), len(b)
    prev = list(range(n + 1))
    for i in range(1, m + 1):
        cur = [i] + [0] * n
        ai = a[i - 1]
        for j in range(1, n + 1):
            cost = 0 if ai == b[j - 1] else 1
            cur[j] = min(
                prev[j] + 1,         # deletion
                cur[j - 1] + 1,      # insertion
                prev[j - 1] + cost,  # substitution
            )
        prev = cur
    return prev[n]


def normalized_edit_distance(a: Sequence[str], b: Sequence[str]) -> float:
    """
    Edit distance divided by ``max(len(a), len(b))``, in [0, 1].

    If either sequence is empty the distance is 1.0, including when both are.
    """
    m, n = len(a), len(b)
    if m == 0 or n == 0:
        return 1.0
    return edit_distance(a, b) / max(m, n)
