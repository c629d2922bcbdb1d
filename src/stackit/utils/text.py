"""Text helpers: tokenization, keyword extraction and word n-grams."""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterator, List, Sequence

# Common English words that carry no ranking signal.
STOP_WORDS = frozenset(
    [
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
        "by", "from", "up", "about", "into", "through", "during", "before", "after",
        "above", "below", "between", "among", "is", "are", "was", "were", "be", "been",
        "being", "have", "has", "had", "do", "does", "did", "will", "would", "could",
        "should", "may", "might", "must", "can", "this", "that", "these", "those",
        "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them",
    ]
)

_PUNCTUATION = re.compile(r"[^\w\s]")


def tokenize(text: str) -> List[str]:
    """Lower-case ``text`` and split it on whitespace runs."""
    return text.lower().split()


def extract_keywords(text: str, max_keywords: int = 10) -> List[str]:
    """Return the most frequent meaningful words of ``text``.

    Punctuation is stripped, and words of two characters or less as well as
    stop words are dropped. Words are ordered by descending frequency; equally
    frequent words keep the order in which they first appear.
    """
    if max_keywords <= 0:
        return []

    words = [
        word
        for word in _PUNCTUATION.sub("", text.lower()).split()
        if len(word) > 2 and word not in STOP_WORDS
    ]
    return [word for word, _ in Counter(words).most_common(max_keywords)]


def word_ngrams(words: Sequence[str], *, max_n: int = 4) -> Iterator[str]:
    """Yield every contiguous phrase of 1 to ``max_n`` words."""
    for start in range(len(words)):
        for end in range(start + 1, min(start + max_n, len(words)) + 1):
            yield " ".join(words[start:end])
