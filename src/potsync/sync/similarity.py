"""Lexical similarity between message identifiers.

Python 3.11+. Zero external dependencies.
"""

__all__ = ["levenshtein_distance", "similarity"]


def levenshtein_distance(a: str, b: str) -> int:
    """Character-level edit distance with unit-cost insert, delete, substitute.

    Uses two rolling rows, so memory is linear in the shorter string.

    Example:
        >>> levenshtein_distance("kitten", "sitting")
        3
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Normalized similarity in [0, 1]: 1 - distance / max(len(a), len(b)).

    Two empty strings are identical and score 1.0.

    Example:
        >>> similarity("Delete file", "Delete selected file")
        0.55
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    score = 1.0 - levenshtein_distance(a, b) / longest
    return min(1.0, max(0.0, score))
