"""
Lexical ranking: TF-IDF over item descriptions.

The corpus holds the reference description first and then each candidate's
description in input order. A candidate's score is the sum of TF-IDF weights of
the reference's key terms in that candidate's document; the candidate's own
distinctive terms are not considered.
"""

import logging
from typing import List, Sequence

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer

from ...models.item import CatalogItem
from ...models.scoring import ScoredItem, rank_scored
from ..key_terms import extract_key_terms, tokenize

logger = logging.getLogger(__name__)


def smoothed_idf(document_frequency: np.ndarray, n_docs: int) -> np.ndarray:
    """1 + ln(N / (1 + df)); positive for any term, including ones absent from every document."""
    return 1.0 + np.log(n_docs / (1.0 + document_frequency))


def key_term_scores(key_terms: Sequence[str], documents: Sequence[str]) -> np.ndarray:
    """
    Summed TF-IDF weight of ``key_terms`` in each document.

    The vectorizer only counts (raw tf, no normalization) over a vocabulary fixed
    to the key terms; idf comes from smoothed_idf. Returns one score per document.
    """
    if not key_terms or not documents:
        return np.zeros(len(documents))

    vectorizer = TfidfVectorizer(
        tokenizer=tokenize,
        lowercase=False,
        token_pattern=None,
        vocabulary=list(key_terms),
        use_idf=False,
        norm=None,
    )
    tf = vectorizer.fit_transform(documents)
    document_frequency = np.asarray((tf > 0).sum(axis=0)).ravel()
    idf = smoothed_idf(document_frequency, len(documents))
    return np.asarray(tf @ idf).ravel()


def rank_by_description(
    reference: CatalogItem,
    candidates: List[CatalogItem],
    limit: int,
    max_terms: int = 20,
) -> List[CatalogItem]:
    """
    Rank candidates by TF-IDF similarity to the reference description.

    Candidates without a description are ignored; if none remain the result is [].
    Ties (including all-zero scores) keep input order.
    """
    with_text = [c for c in candidates if c.has_text]
    if not with_text:
        return []

    key_terms = extract_key_terms(reference.descriptive_text, max_terms)
    documents = [reference.descriptive_text or ""] + [c.descriptive_text for c in with_text]
    # Row 0 is the reference, so candidate i is row i + 1
    scores = key_term_scores(key_terms, documents)[1:]
    scored = [
        ScoredItem(item=candidate, score=float(score), position=i)
        for i, (candidate, score) in enumerate(zip(with_text, scores))
    ]
    logger.debug(
        "[lexical] reference=%s key_terms=%d candidates=%d",
        reference.id, len(key_terms), len(with_text),
    )
    return rank_scored(scored, limit)
