"""Unit tests for translation quality scoring."""

import pytest

from flowloc.core.models import TextContext
from flowloc.scoring.quality import QualityScorer, score, average_score


class TestScore:
    """Test single-pair scoring."""

    def test_missing_translation_scores_zero(self):
        assert score("Hello", None) == 0
        assert score("Hello", "") == 0

    def test_base_score(self):
        # Ratio 4.0 is outside the bonus window and there are no brackets
        assert score("Hi", "Hi there") == 70

    def test_length_ratio_bonus(self):
        assert score("Hello", "Hallo") == 80

    def test_length_ratio_bounds_exclusive(self):
        assert score("abcd", "ab") == 70
        assert score("ab", "abcd") == 70

    def test_bracket_bonus(self):
        assert score("Hello {name}", "Hallo {name}") == 90

    def test_bracket_count_mismatch(self):
        assert score("Hello {name}", "Hallo name") == 80

    def test_brackets_only_counted(self):
        # Same count, different kinds and positions still earns the bonus
        assert score("(a) b", "[a] b") == 90

    def test_no_bracket_bonus_without_brackets(self):
        assert score("Hello", "(Hallo)") == 80

    def test_node_name_bonus(self):
        assert score("Start", "Begin", TextContext.NODE, "name") == 85
        assert score("Start", "Begin", "node", "name") == 85

    def test_node_bonus_needs_name_field(self):
        assert score("Start", "Begin", TextContext.NODE, "notes") == 80
        assert score("Start", "Begin", TextContext.WORKFLOW, "name") == 80

    def test_capped_at_hundred(self):
        value = score("Start {x}", "Begin {x}", TextContext.NODE, "name")
        assert value == 95
        assert 0 <= value <= QualityScorer.MAX_SCORE

    def test_empty_original(self):
        assert score("", "something") == 70

    @pytest.mark.parametrize("original,translated", [
        ("a", "b" * 100),
        ("{}{}{}", "{}{}{}"),
        ("x" * 50, "y"),
    ])
    def test_always_in_range(self, original, translated):
        assert 0 <= score(original, translated, "node", "name") <= 100


class TestAverageScore:
    """Test averaging."""

    def test_empty(self):
        assert average_score([]) == 0

    def test_rounds_half_up(self):
        assert average_score([80, 85]) == 83
        assert average_score([70, 71]) == 71

    def test_rounds_down_below_half(self):
        assert average_score([70, 70, 71]) == 70

    def test_accepts_generator(self):
        assert QualityScorer.average_score(s for s in (90, 80)) == 85
