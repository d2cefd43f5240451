"""
Frequency ranking helpers shared by the analyzers.
"""

from collections import Counter
from typing import Hashable, Iterable, List, Mapping, TypeVar

K = TypeVar('K', bound=Hashable)


def count_first_seen(values: Iterable[K]) -> Counter:
    """Count occurrences; iteration order of the result is first-seen order."""
    return Counter(values)


def top_keys(counts: Mapping[K, int], n: int) -> List[K]:
    """
    Return the n most frequent keys, highest count first.

    sorted() is stable, so equal counts keep first-seen order.
    """
    ranked = sorted(counts.items(), key=lambda x: x[1], reverse=True)
    return [key for key, _ in ranked[:n]]
