"""Lexical similarity primitives."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

import numpy as np

from stackit.utils.text import tokenize


def _jaccard(set1: set[str], set2: set[str]) -> float:
    union = set1 | set2
    if not union:
        return 0.0
    return len(set1 & set2) / len(union)


def jaccard_similarity(text1: str, text2: str) -> float:
    """Jaccard similarity over the unique tokens of two strings."""
    return _jaccard(set(tokenize(text1)), set(tokenize(text2)))


def cosine_similarity(text1: str, text2: str) -> float:
    """Cosine similarity between the word-frequency vectors of two strings."""
    counts1 = Counter(tokenize(text1))
    counts2 = Counter(tokenize(text2))
    if not counts1 or not counts2:
        return 0.0

    vocabulary = list(counts1.keys() | counts2.keys())
    vector1 = np.array([counts1[word] for word in vocabulary], dtype=np.int64)
    vector2 = np.array([counts2[word] for word in vocabulary], dtype=np.int64)

    # Integer arithmetic until the single sqrt keeps cosine(a, a) at exactly 1.
    dot = int(vector1 @ vector2)
    squared_norms = int(vector1 @ vector1) * int(vector2 @ vector2)
    if squared_norms == 0:
        return 0.0
    return dot / float(np.sqrt(squared_norms))


def tag_similarity(tags1: Iterable[str], tags2: Iterable[str]) -> float:
    """Case-insensitive Jaccard similarity between two tag collections.

    Two empty collections are fully similar; one empty collection matches
    nothing.
    """
    set1 = {tag.lower() for tag in tags1}
    set2 = {tag.lower() for tag in tags2}
    if not set1 and not set2:
        return 1.0
    if not set1 or not set2:
        return 0.0
    return _jaccard(set1, set2)
