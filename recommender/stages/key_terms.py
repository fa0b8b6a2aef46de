"""
Key term extraction for lexical scoring.

tokenize() is shared with the TF-IDF corpus so that a key term and a corpus token
are always produced by the same normalization.
"""

import re
from typing import List, Optional

_PUNCTUATION = re.compile(r"[^\w\s]|_")

MIN_TERM_LENGTH = 3

STOP_WORDS = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "all", "any", "can",
    "had", "her", "was", "one", "our", "out", "has", "his", "how", "its",
    "may", "who", "did", "get", "him", "she", "too", "use", "this", "that",
    "with", "from", "they", "have", "were", "been", "their", "what", "when",
    "which", "will", "there", "would", "about", "into", "than", "then",
    "them", "these", "those", "also", "such", "your", "more", "most",
})


def tokenize(text: Optional[str]) -> List[str]:
    """Lower-case, strip punctuation and split on whitespace. Keeps every token."""
    if not text:
        return []
    return _PUNCTUATION.sub(" ", text.lower()).split()


def extract_key_terms(text: Optional[str], max_terms: int = 20) -> List[str]:
    """
    Bounded list of salient terms from a document.

    Drops tokens shorter than MIN_TERM_LENGTH and stop words, deduplicates in
    first-seen order and truncates to ``max_terms``. Empty or blank text gives [].
    """
    terms: List[str] = []
    seen = set()
    for token in tokenize(text):
        if len(token) < MIN_TERM_LENGTH or token in STOP_WORDS or token in seen:
            continue
        seen.add(token)
        terms.append(token)
        if len(terms) >= max_terms:
            break
    return terms
