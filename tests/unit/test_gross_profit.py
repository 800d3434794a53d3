"""Unit tests for the gross profit calculator and optimal commission advisor"""

import dataclasses
import pytest
from decimal import Decimal
from brokerage_gateway.domain.models import CalculationInput, Profitability
from brokerage_gateway.domain.gross_profit import (
    calculate_gross_profit,
    calculate_optimal_commission,
    classify_profitability,
)
from brokerage_gateway.domain.exceptions import InvalidNumericInputError


def test_calculate_gross_profit_reference_deal(sample_deal: CalculationInput):
    """Test 2M EGP deal: 50k actual/communicated, 30k broker"""
    result = calculate_gross_profit(sample_deal)

    # platform cost = 50000 - 30000 = 20000; gross profit = 50000 - 20000
    assert result.gross_profit == Decimal("30000")
    assert result.gross_profit_percentage == Decimal("1.5")
    assert result.profitability == Profitability.MEDIUM
    assert result.breakdown.calculated_commission == Decimal("50000")


def test_calculate_gross_profit_platform_margin(sample_deal: CalculationInput):
    """Test platform margin is actual minus broker commission"""
    result = calculate_gross_profit(sample_deal)

    assert result.platform_margin == Decimal("20000")
    assert result.platform_margin_percentage == Decimal("1")
    assert result.breakdown.platform_share == result.platform_margin
    assert result.breakdown.broker_share == Decimal("30000")


def test_calculate_gross_profit_echoes_commissions(sample_deal: CalculationInput):
    result = calculate_gross_profit(sample_deal)

    assert result.actual_commission == Decimal("50000")
    assert result.communicated_commission == Decimal("50000")
    assert result.broker_commission == Decimal("30000")
    assert result.breakdown.deal_value == Decimal("2000000")
    assert result.breakdown.commission_rate == Decimal("2.5")
    assert result.breakdown.bonus_commission_rate == Decimal("0")


def test_calculate_gross_profit_no_broker_cancels_out():
    """Test actual == communicated with no broker leaves zero gross profit"""
    result = calculate_gross_profit(
        CalculationInput.from_values(100, 100, 0, 10000, "2.5")
    )

    assert result.gross_profit == Decimal("0")
    assert result.profitability == Profitability.LOW


def test_calculate_gross_profit_bonus_rate_only_affects_breakdown():
    """Test bonus rate adds to calculated commission but not to gross profit"""
    without_bonus = calculate_gross_profit(
        CalculationInput.from_values(25000, 25000, 15000, 1000000, 2)
    )
    with_bonus = calculate_gross_profit(
        CalculationInput.from_values(25000, 25000, 15000, 1000000, 2, "0.5")
    )

    assert without_bonus.breakdown.calculated_commission == Decimal("20000")
    assert with_bonus.breakdown.calculated_commission == Decimal("25000")  # 20000 + 5000
    assert with_bonus.gross_profit == without_bonus.gross_profit


@pytest.mark.parametrize("deal_value", ["0", "-500000"])
def test_calculate_gross_profit_non_positive_deal_value(deal_value: str):
    """Test zero or negative deal value yields zero percentages instead of an error"""
    result = calculate_gross_profit(
        CalculationInput.from_values(5000, 1000, 3000, deal_value, "2.5")
    )

    assert result.gross_profit == Decimal("7000")
    assert result.gross_profit_percentage == Decimal("0")
    assert result.platform_margin_percentage == Decimal("0")


@pytest.mark.parametrize(
    "gross_profit, expected",
    [
        ("200", Profitability.HIGH),  # exactly 2%
        ("199.99", Profitability.MEDIUM),  # 1.9999%
        ("100", Profitability.MEDIUM),  # exactly 1%
        ("99.99", Profitability.LOW),  # 0.9999%
        ("0", Profitability.LOW),
        ("-0.01", Profitability.LOSS),
    ],
)
def test_calculate_gross_profit_classification_boundaries(make_deal, gross_profit: str, expected: Profitability):
    """Test tier thresholds on a 10,000 deal"""
    result = calculate_gross_profit(make_deal(gross_profit))

    assert result.gross_profit == Decimal(gross_profit)
    assert result.profitability == expected


def test_classify_profitability_loss_wins_over_percentage():
    """Test negative gross profit is LOSS even with zero percentage"""
    assert classify_profitability(Decimal("-1"), Decimal("0")) == Profitability.LOSS
    assert classify_profitability(Decimal("-1"), Decimal("5")) == Profitability.LOSS


def test_calculate_gross_profit_accepts_raw_numbers():
    """Test fields given as ints/strings/floats are converted to Decimal"""
    params = CalculationInput(
        actual_commission=50000,
        communicated_commission="50000",
        broker_commission=30000.0,
        deal_value=2000000,
        commission_rate=2.5,
    )
    result = calculate_gross_profit(params)

    assert isinstance(result.gross_profit, Decimal)
    assert result.gross_profit == Decimal("30000")
    assert result.breakdown.calculated_commission == Decimal("50000")


def test_calculate_gross_profit_float_precision():
    """Test currency sums stay exact where binary floats would drift"""
    result = calculate_gross_profit(
        CalculationInput.from_values(0.1, 0.3, 0.2, 100, 1)
    )

    # 0.1 - (0.3 - 0.2) is 2.7e-17 in float arithmetic
    assert result.gross_profit == Decimal("0")


def test_calculate_gross_profit_non_numeric_input():
    """Test non-numeric field fails the whole calculation"""
    params = CalculationInput(
        actual_commission=Decimal("100"),
        communicated_commission=Decimal("100"),
        broker_commission="lots",
        deal_value=Decimal("10000"),
        commission_rate=Decimal("2.5"),
    )

    with pytest.raises(InvalidNumericInputError, match="broker_commission"):
        calculate_gross_profit(params)


def test_calculate_gross_profit_is_deterministic(sample_deal: CalculationInput):
    """Test repeated calls produce equal results"""
    assert calculate_gross_profit(sample_deal) == calculate_gross_profit(sample_deal)


def test_calculation_result_is_immutable(sample_deal: CalculationInput):
    result = calculate_gross_profit(sample_deal)

    with pytest.raises(dataclasses.FrozenInstanceError):
        result.gross_profit = Decimal("1")  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.breakdown.platform_share = Decimal("1")  # type: ignore[misc]


def test_calculate_optimal_commission_default_target():
    """Test default 1.5% target on a 2M deal"""
    result = calculate_optimal_commission(2000000)

    assert result.recommended_commission_rate == Decimal("3.0")  # 1.5 + 1.5 broker
    assert result.recommended_broker_rate == Decimal("1.5")
    assert result.projected_gross_profit == Decimal("30000")
    assert result.projected_revenue == Decimal("60000")


def test_calculate_optimal_commission_custom_target():
    result = calculate_optimal_commission("2000000", "2")

    assert result.recommended_commission_rate == Decimal("3.5")
    assert result.projected_gross_profit == Decimal("40000")
    assert result.projected_revenue == Decimal("70000")


def test_calculate_optimal_commission_non_numeric():
    with pytest.raises(InvalidNumericInputError):
        calculate_optimal_commission("two million")


def test_calculate_gross_profit_extreme_exponent_is_input_error():
    """Test a tiny deal value fails conversion instead of overflowing the division"""
    with pytest.raises(InvalidNumericInputError, match="deal_value"):
        calculate_gross_profit(CalculationInput.from_values("1", "0", "0", "1e-999999", "1"))

    raw = CalculationInput(
        actual_commission="1",
        communicated_commission="0",
        broker_commission="0",
        deal_value="1e-999999",
        commission_rate="1",
    )
    with pytest.raises(InvalidNumericInputError):
        calculate_gross_profit(raw)


def test_calculate_gross_profit_at_exponent_bounds():
    """Test the largest and smallest accepted magnitudes compute without error"""
    tiny_deal = calculate_gross_profit(CalculationInput.from_values("9e999", "0", "0", "1e-999", "9e999"))

    assert tiny_deal.gross_profit_percentage == Decimal("9e2000")
    assert tiny_deal.profitability == Profitability.HIGH
    assert tiny_deal.breakdown.calculated_commission == Decimal("0.09")  # 1e-999 * 9e999 / 100
