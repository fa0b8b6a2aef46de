"""Key term extraction and tokenization."""

from recommender.stages.key_terms import MIN_TERM_LENGTH, STOP_WORDS, extract_key_terms, tokenize


class TestTokenize:
    def test_lowercases_and_strips_punctuation(self):
        assert tokenize("Hello, World! It's_new.") == ["hello", "world", "it", "s", "new"]

    def test_empty_and_none(self):
        assert tokenize("") == []
        assert tokenize(None) == []


class TestExtractKeyTerms:
    """Bounded, deduplicated, stop-word-free key terms."""

    def test_drops_short_tokens_and_stop_words(self):
        terms = extract_key_terms("The cat and the hat sat on a mat with gusto")
        assert terms == ["cat", "hat", "sat", "mat", "gusto"]
        assert all(len(t) >= MIN_TERM_LENGTH for t in terms)
        assert not set(terms) & STOP_WORDS

    def test_first_seen_order_without_duplicates(self):
        assert extract_key_terms("Rome rome ROME empire Rome") == ["rome", "empire"]

    def test_bounded_by_max_terms(self):
        text = " ".join(f"word{i}" for i in range(50))
        assert len(extract_key_terms(text, max_terms=20)) == 20
        assert extract_key_terms(text, max_terms=3) == ["word0", "word1", "word2"]

    def test_idempotent(self):
        text = "Bayesian statistics for practitioners, statistics again."
        assert extract_key_terms(text) == extract_key_terms(text)

    def test_blank_text_gives_no_terms(self):
        assert extract_key_terms("") == []
        assert extract_key_terms("   ") == []
        assert extract_key_terms(None) == []
