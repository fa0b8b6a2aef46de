"""
Lexical (TF-IDF), metadata and similarity helpers.

The metadata case follows the three-book walkthrough: a reference without a
description, one candidate sharing two title words and the author (score 11),
one unrelated candidate (score 0).
"""

import math

import pytest

from recommender.models.config import RecommendationConfig
from recommender.models.scoring import ScoredItem, rank_scored
from recommender.stages.ranking.lexical import key_term_scores, rank_by_description
from recommender.stages.ranking.metadata import metadata_score, rank_by_metadata
from recommender.utils.similarity import cosine_similarity

from .conftest import make_item


class TestCosineSimilarity:
    def test_identical_vectors(self):
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_opposite_vectors(self):
        assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_zero_and_empty_vectors_score_zero(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0
        assert cosine_similarity([], [1.0]) == 0.0

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])

    def test_range(self):
        vectors = [[0.3, -0.7, 0.2], [5.0, 5.0, 5.0], [-1.0, 0.5, 9.0]]
        for vector in vectors:
            assert -1.0 <= cosine_similarity([1.0, -2.0, 0.5], vector) <= 1.0


class TestRankScored:
    def test_ties_keep_input_order_and_excluded_dropped(self):
        a, b, c = make_item("a"), make_item("b"), make_item("c")
        scored = [
            ScoredItem(item=a, score=1.0, position=0),
            ScoredItem(item=b, score=1.0, position=1),
            ScoredItem(item=c, score=5.0, position=2, excluded=True),
        ]
        assert [i.id for i in rank_scored(scored, 5)] == ["a", "b"]

    def test_non_positive_limit(self):
        scored = [ScoredItem(item=make_item("a"), score=1.0, position=0)]
        assert rank_scored(scored, 0) == []


class TestKeyTermScores:
    def test_idf_smoothing(self):
        scores = key_term_scores(["apple", "cherry"], ["apple banana", "apple cherry", "durian"])
        # 1 + ln(N / (1 + df))
        apple_idf = 1 + math.log(3 / 3)
        cherry_idf = 1 + math.log(3 / 2)
        assert list(scores) == pytest.approx([apple_idf, apple_idf + cherry_idf, 0.0])

    def test_raw_term_counts(self):
        scores = key_term_scores(["rome"], ["rome rome empire", "Rome."])
        rome_idf = 1 + math.log(2 / 3)
        assert list(scores) == pytest.approx([2 * rome_idf, rome_idf])

    def test_only_key_terms_weighted(self):
        scores = key_term_scores(["rome"], ["rome", "empire empire empire"])
        assert scores[1] == 0.0

    def test_no_key_terms(self):
        assert list(key_term_scores([], ["anything", "else"])) == [0.0, 0.0]


class TestRankByDescription:
    def test_shared_terms_rank_first(self, catalog_items):
        reference = catalog_items[0]  # deep learning / neural networks
        candidates = [catalog_items[2], catalog_items[1]]  # Rome first in input
        ranked = rank_by_description(reference, candidates, limit=2)
        assert [i.id for i in ranked] == ["w2", "w3"]

    def test_candidates_without_text_are_ignored(self, catalog_items):
        reference = catalog_items[0]
        no_text = make_item("x", "No Description")
        assert rank_by_description(reference, [no_text], limit=5) == []

    def test_limit_respected(self, catalog_items):
        reference = catalog_items[0]
        ranked = rank_by_description(reference, catalog_items[1:], limit=1)
        assert len(ranked) == 1

    def test_all_zero_scores_keep_input_order(self):
        reference = make_item("r", text="quantum chromodynamics")
        candidates = [make_item("a", text="gardening tips"), make_item("b", text="bread baking")]
        assert [i.id for i in rank_by_description(reference, candidates, 5)] == ["a", "b"]


class TestMetadata:
    """Title words, creator and publisher overlap."""

    @pytest.fixture(autouse=True)
    def setup(self):
        self.reference = make_item("b1", "Intro to X", "A. Smith", text="")
        self.b2 = make_item("b2", "Intro to Y", "A. Smith")
        self.b3 = make_item("b3", "Unrelated", "Z")

    def test_three_book_walkthrough(self):
        assert metadata_score(self.reference, self.b2) == 11
        assert metadata_score(self.reference, self.b3) == 0
        ranked = rank_by_metadata(self.reference, [self.b3, self.b2], limit=2)
        assert [i.id for i in ranked] == ["b2", "b3"]

    def test_publisher_match_adds_two(self):
        reference = make_item("r", "Alpha", publisher="Iwanami")
        candidate = make_item("c", "Beta", publisher="Iwanami")
        assert metadata_score(reference, candidate) == 2

    def test_repeated_reference_title_words_count_each_time(self):
        reference = make_item("r", "Python Python Cookbook", "X")
        candidate = make_item("c", "Python Tricks", "Y")
        assert metadata_score(reference, candidate) == 6
        assert metadata_score(candidate, reference) == 3

    def test_empty_creator_is_not_a_match(self):
        assert metadata_score(make_item("r", "Alpha"), make_item("c", "Beta")) == 0

    def test_custom_weights(self):
        config = RecommendationConfig(weight_title_word=1.0, weight_creator=10.0, weight_publisher=0.0)
        assert metadata_score(self.reference, self.b2, config) == 12

    def test_limit_respected(self):
        assert len(rank_by_metadata(self.reference, [self.b2, self.b3], limit=1)) == 1
