"""Tests for the incrementality calculator."""

import pytest
from mediabuy.incrementality.calculator import (
    RECOMMENDATION_MESSAGES,
    calculate_incrementality,
    evaluate_incrementality,
    format_lift,
    recommend,
    recommendation_message,
)
from mediabuy.incrementality.schema import (
    GroupMetrics,
    IncrementalityResult,
    IncrementalityTest,
    Recommendation,
)


def make_test(control_conversions, test_conversions, control_spend=0.0, test_spend=1000.0):
    return IncrementalityTest(
        control_group=GroupMetrics(conversions=control_conversions, spend=control_spend),
        test_group=GroupMetrics(conversions=test_conversions, spend=test_spend),
    )


class TestCalculateIncrementality:
    """Test calculate_incrementality."""

    def test_holdout_scale_up(self, holdout_test):
        """Test 100 vs 150 conversions is a significant 50% lift."""
        result = calculate_incrementality(holdout_test)

        assert isinstance(result, IncrementalityResult)
        assert result.lift_absolute == 50
        assert result.lift == pytest.approx(50.0)
        assert result.p_value < 0.05
        assert result.confidence == pytest.approx(1 - result.p_value)
        assert result.is_significant is True
        assert result.recommendation == Recommendation.SCALE_UP

    def test_small_lift_needs_more_data(self):
        """Test 100 vs 102 conversions is not significant."""
        result = calculate_incrementality(make_test(100, 102))

        assert result.lift == pytest.approx(2.0)
        assert result.p_value > 0.05
        assert result.is_significant is False
        assert result.recommendation == Recommendation.MORE_DATA_NEEDED

    def test_significant_negative_lift_scales_down(self):
        """Test a significant 25% drop recommends scaling down."""
        result = calculate_incrementality(make_test(200, 150))

        assert result.lift == pytest.approx(-25.0)
        assert result.lift_absolute == -50
        assert result.is_significant is True
        assert result.recommendation == Recommendation.SCALE_DOWN

    def test_significant_modest_lift_maintains(self):
        """Test a significant 10% lift recommends maintaining."""
        result = calculate_incrementality(make_test(1000, 1100))

        assert result.lift == pytest.approx(10.0)
        assert result.is_significant is True
        assert result.recommendation == Recommendation.MAINTAIN

    def test_zero_control_conversions(self):
        """Test lift is 0 rather than infinite when control had no conversions."""
        result = calculate_incrementality(make_test(0, 50))

        assert result.lift == 0.0
        assert result.lift_absolute == 50
        assert result.is_significant is True
        assert result.recommendation == Recommendation.MAINTAIN

    def test_confidence_capped(self):
        """Test confidence never exceeds 99.9%."""
        result = calculate_incrementality(make_test(100, 1000))

        assert result.p_value == 0.001
        assert result.confidence == pytest.approx(0.999)

    def test_no_conversions_anywhere(self):
        """Test an empty test is not significant and has zero confidence."""
        result = calculate_incrementality(make_test(0, 0))

        assert result.lift == 0.0
        assert result.p_value == 1.0
        assert result.confidence == 0.0
        assert result.recommendation == Recommendation.MORE_DATA_NEEDED

    def test_efficiency_scenario_swap(self):
        """Test swapping groups flips the lift sign but keeps the p-value."""
        forward = calculate_incrementality(make_test(50, 80, control_spend=1000, test_spend=1000))
        swapped = calculate_incrementality(make_test(80, 50, control_spend=1000, test_spend=1000))

        assert forward.lift > 0 > swapped.lift
        assert forward.lift_absolute == -swapped.lift_absolute
        assert forward.p_value == pytest.approx(swapped.p_value)
        assert forward.is_significant == swapped.is_significant

    def test_deterministic(self, holdout_test):
        """Test repeated evaluation returns identical results."""
        assert calculate_incrementality(holdout_test) == calculate_incrementality(holdout_test)

    def test_evaluate_alias(self, holdout_test):
        """Test evaluate_incrementality is the same operation."""
        assert evaluate_incrementality(holdout_test) == calculate_incrementality(holdout_test)


class TestRecommend:
    """Test recommendation priority."""

    @pytest.mark.parametrize(
        "lift,is_significant,expected",
        [
            (50.0, False, Recommendation.MORE_DATA_NEEDED),
            (-50.0, False, Recommendation.MORE_DATA_NEEDED),
            (20.1, True, Recommendation.SCALE_UP),
            (20.0, True, Recommendation.MAINTAIN),
            (-10.0, True, Recommendation.MAINTAIN),
            (-10.1, True, Recommendation.SCALE_DOWN),
            (0.0, True, Recommendation.MAINTAIN),
        ],
    )
    def test_thresholds(self, lift, is_significant, expected):
        """Test significance gates first, then the lift thresholds."""
        assert recommend(lift, is_significant) == expected


class TestFormatting:
    """Test display helpers."""

    @pytest.mark.parametrize(
        "lift,expected",
        [
            (12.345, "+12.3%"),
            (0.0, "+0.0%"),
            (-4.0, "-4.0%"),
            (150.0, "+150.0%"),
        ],
    )
    def test_format_lift(self, lift, expected):
        """Test lift is signed with one decimal place."""
        assert format_lift(lift) == expected

    def test_every_recommendation_has_message(self):
        """Test each recommendation maps to advice text."""
        for recommendation in Recommendation:
            assert recommendation_message(recommendation) == RECOMMENDATION_MESSAGES[recommendation]

    def test_more_data_message(self):
        """Test the not-significant advice."""
        assert "not statistically significant" in recommendation_message(
            Recommendation.MORE_DATA_NEEDED
        )


class TestDegenerateInputs:
    """Test well-typed but degenerate tests degrade instead of raising."""

    def test_negative_control_conversions(self):
        """Test a negative holdout total gives p = 1."""
        result = calculate_incrementality(make_test(-5, 2, control_spend=0, test_spend=10))

        assert result.p_value == 1.0
        assert result.recommendation == Recommendation.MORE_DATA_NEEDED

    def test_spend_cancelling_out(self):
        """Test spends summing to zero give p = 1."""
        result = calculate_incrementality(make_test(5, 2, control_spend=100, test_spend=-100))

        assert result.p_value == 1.0
        assert result.recommendation == Recommendation.MORE_DATA_NEEDED
