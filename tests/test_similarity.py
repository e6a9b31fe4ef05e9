"""
Unit Tests for the lexical similarity function.
"""

import pytest

from exam_scoring.similarity import SimilarityPolicy, normalize, similarity, tokenize

STRICT = SimilarityPolicy()
LENIENT = SimilarityPolicy.lenient()

SAMPLE_PAIRS = [
    ("", ""),
    ("", "nonempty"),
    ("The sky is blue", "sky is blue"),
    ("quick fox", "quick dog"),
    ("apple banana", "car truck"),
    ("Photosynthesis converts light into chemical energy", "plants convert light energy"),
    ("a an", "to of"),
]


class TestNormalizeAndTokenize:
    """Tests for the text preparation helpers."""

    def test_normalize_when_mixed_case_and_padding_then_lowercases_and_strips(self):
        assert normalize("  Hello World \n") == "hello world"

    def test_normalize_when_none_then_returns_empty(self):
        assert normalize(None) == ""

    def test_tokenize_when_filter_on_then_drops_tokens_shorter_than_three(self):
        assert tokenize("the sky is blue", STRICT) == {"the", "sky", "blue"}

    def test_tokenize_when_filter_off_then_keeps_every_token(self):
        assert tokenize("the sky is blue", LENIENT) == {"the", "sky", "is", "blue"}

    def test_tokenize_when_duplicates_and_whitespace_runs_then_collapses(self):
        assert tokenize("blue \t blue\n sky", STRICT) == {"blue", "sky"}


class TestSimilarity:
    """Tests for similarity() under the default policy."""

    @pytest.mark.parametrize("text", ["", "x", "the quick fox", "  Mixed CASE  "])
    def test_similarity_when_same_text_then_returns_one(self, text):
        assert similarity(text, text, STRICT) == 1.0

    def test_similarity_when_only_case_and_padding_differ_then_returns_one(self):
        assert similarity("  Hello World ", "hello world", STRICT) == 1.0

    def test_similarity_when_one_side_empty_then_returns_zero(self):
        assert similarity("", "nonempty", STRICT) == 0.0
        assert similarity("nonempty", "   ", STRICT) == 0.0

    def test_similarity_when_tokens_disjoint_then_returns_zero(self):
        assert similarity("apple banana", "car truck", STRICT) == 0.0

    def test_similarity_when_partial_overlap_then_returns_jaccard(self):
        assert similarity("quick fox", "quick dog", STRICT) == pytest.approx(1 / 3)

    def test_similarity_when_short_words_filtered_then_ignores_them(self):
        # {the, sky, blue} vs {sky, blue}
        assert similarity("The sky is blue", "sky is blue", STRICT) == pytest.approx(2 / 3)

    def test_similarity_when_every_token_filtered_then_returns_zero(self):
        assert similarity("a an", "to of", STRICT) == 0.0

    def test_similarity_when_duplicate_words_then_counts_them_once(self):
        assert similarity("blue blue sky", "sky blue", STRICT) == 1.0

    @pytest.mark.parametrize("a,b", SAMPLE_PAIRS)
    def test_similarity_when_arguments_swapped_then_same_score(self, a, b):
        for policy in (STRICT, LENIENT):
            assert similarity(a, b, policy) == similarity(b, a, policy)

    @pytest.mark.parametrize("a,b", SAMPLE_PAIRS)
    def test_similarity_when_any_input_then_within_unit_interval(self, a, b):
        for policy in (STRICT, LENIENT):
            assert 0.0 <= similarity(a, b, policy) <= 1.0


class TestSimilarityVariants:
    """Tests for the lenient policy and the substring bonus."""

    def test_similarity_when_filter_off_then_short_words_count(self):
        policy = SimilarityPolicy(drop_short_tokens=False)
        # {the, sky, is, blue} vs {sky, is, blue}
        assert similarity("The sky is blue", "sky is blue", policy) == pytest.approx(0.75)

    def test_similarity_when_substring_bonus_on_and_contained_then_returns_bonus(self):
        assert similarity("The sky is blue", "sky is blue", LENIENT) == 0.8

    def test_similarity_when_substring_bonus_on_and_not_contained_then_uses_jaccard(self):
        assert similarity("quick fox", "quick dog", LENIENT) == pytest.approx(1 / 3)

    def test_similarity_when_substring_bonus_on_and_answer_empty_then_returns_zero(self):
        assert similarity("The sky is blue", "", LENIENT) == 0.0

    def test_similarity_when_bonus_score_out_of_range_then_clamped(self):
        policy = SimilarityPolicy(substring_bonus=True, substring_bonus_score=1.5)
        assert similarity("sky is blue", "the sky is blue", policy) == 1.0

    def test_from_settings_when_environment_untouched_then_canonical_policy(self):
        policy = SimilarityPolicy.from_settings()
        assert policy.drop_short_tokens is True
        assert policy.min_token_length == 3
        assert policy.substring_bonus is False
