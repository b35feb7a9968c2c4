"""
Unit Tests for Concept Extraction
=================================
"""

import pytest
from hypothesis import given, strategies as st

from conceptgraph.constants import STOP_WORDS
from conceptgraph.tokenizer import ConceptExtractor


@pytest.fixture
def extractor():
    return ConceptExtractor()


class TestExtract:
    """Tests for ConceptExtractor.extract."""

    def test_basic(self, extractor):
        assert extractor.extract("machine learning artificial intelligence") == [
            "machine", "learning", "artificial", "intelligence"
        ]

    def test_stop_words_removed_case_insensitively(self, extractor):
        assert extractor.extract("The cat AND the Hat") == ["cat", "Hat"]

    def test_casing_preserved(self, extractor):
        assert extractor.extract("Neural NETWORKS") == ["Neural", "NETWORKS"]

    def test_order_and_duplicates_preserved(self, extractor):
        assert extractor.extract("data model data") == ["data", "model", "data"]

    def test_whitespace_runs(self, extractor):
        assert extractor.extract("  alpha\t\tbeta\n gamma  ") == ["alpha", "beta", "gamma"]

    def test_punctuation_kept_on_token(self, extractor):
        # One whitespace token is one concept; no further splitting
        assert extractor.extract("hello, world.") == ["hello,", "world."]

    @pytest.mark.parametrize("text", ["", "   ", None, 42, ["a", "b"], b"bytes"])
    def test_degenerate_input(self, extractor, text):
        assert extractor.extract(text) == []

    def test_only_stop_words(self, extractor):
        assert extractor.extract("the and or a an in on at to for") == []

    def test_custom_stop_words(self):
        extractor = ConceptExtractor(stop_words=["Foo"])
        assert extractor.extract("foo the bar") == ["the", "bar"]

    def test_is_stop_word(self, extractor):
        assert extractor.is_stop_word("THE")
        assert not extractor.is_stop_word("theory")

    def test_default_stop_words(self):
        assert ConceptExtractor.DEFAULT_STOP_WORDS == frozenset(
            {'the', 'and', 'or', 'a', 'an', 'in', 'on', 'at', 'to', 'for'}
        )


class TestExtractProperties:
    """Property-based tests using hypothesis."""

    words = st.lists(
        st.one_of(st.sampled_from(sorted(STOP_WORDS)), st.text(alphabet="abcXYZ", min_size=1, max_size=6)),
        max_size=20
    )

    @given(words)
    def test_stop_word_free_and_order_preserving(self, tokens):
        concepts = ConceptExtractor().extract(" ".join(tokens))
        assert all(c.lower() not in STOP_WORDS for c in concepts)
        assert concepts == [t for t in tokens if t.lower() not in STOP_WORDS]
