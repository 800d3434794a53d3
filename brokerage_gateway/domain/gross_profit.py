"""Gross profit engine - core business logic for commission splits on deals"""

from dataclasses import replace
from decimal import Decimal
from typing import Any, Dict, Iterable, List
from brokerage_gateway.domain.models import (
    CalculationInput,
    CalculationResult,
    CommissionBreakdown,
    OptimalCommission,
    PortfolioSummary,
    Profitability,
    SimulationImpact,
    SimulationResult,
)
from brokerage_gateway.utils.decimal_utils import HUNDRED, ZERO, percentage_of, to_decimal

# Profitability thresholds, as percent of deal value
HIGH_PROFIT_THRESHOLD = Decimal("2")
MEDIUM_PROFIT_THRESHOLD = Decimal("1")

# Broker rate assumed by the optimal commission advisor
STANDARD_BROKER_RATE = Decimal("1.5")
DEFAULT_TARGET_GROSS_PROFIT_PERCENTAGE = Decimal("1.5")

# Portfolio recommendation thresholds
LOSS_SHARE_LIMIT = Decimal("10")
LOW_SHARE_LIMIT = Decimal("30")
MIN_AVERAGE_GROSS_PROFIT_PERCENTAGE = Decimal("1")
MIN_HIGH_PROFIT_SHARE = Decimal("0.3")

LOSS_WARNING = (
    "Critical: More than 10% of deals are generating losses. "
    "Review commission structures immediately."
)
LOW_PROFITABILITY_WARNING = (
    "Warning: More than 30% of deals have low profitability. "
    "Consider optimizing broker commission rates."
)
LOW_MARGIN_WARNING = (
    "Average gross profit margin is below 1%. "
    "Recommend increasing commission rates or reducing broker rates."
)
HIGH_VALUE_FOCUS_SUGGESTION = (
    "Less than 30% of deals are highly profitable. "
    "Focus on higher-value deals and premium projects."
)


def classify_profitability(gross_profit: Decimal, gross_profit_percentage: Decimal) -> Profitability:
    """
    Map a deal's gross profit to a profitability tier.

    Evaluated in order, first match wins:
    - gross profit below zero: LOSS (regardless of percentage)
    - 2%+ of deal value:       HIGH
    - 1%+ of deal value:       MEDIUM
    - otherwise:               LOW
    """
    if gross_profit < ZERO:
        return Profitability.LOSS
    elif gross_profit_percentage >= HIGH_PROFIT_THRESHOLD:
        return Profitability.HIGH
    elif gross_profit_percentage >= MEDIUM_PROFIT_THRESHOLD:
        return Profitability.MEDIUM
    else:
        return Profitability.LOW


def calculate_gross_profit(params: CalculationInput) -> CalculationResult:
    """
    Calculate gross profit for a deal.

    Formula:
        Gross Profit = Actual Commission - (Communicated Commission - Broker Commission)

    The rate-derived calculated commission is reported in the breakdown for
    comparison against the actual commission; it does not enter the formula.
    A deal value of zero or less yields 0% for both percentages.

    Raises:
        InvalidNumericInputError: a field is not a finite number
    """
    actual_commission = to_decimal(params.actual_commission, "actual_commission")
    communicated_commission = to_decimal(params.communicated_commission, "communicated_commission")
    broker_commission = to_decimal(params.broker_commission, "broker_commission")
    deal_value = to_decimal(params.deal_value, "deal_value")
    commission_rate = to_decimal(params.commission_rate, "commission_rate")
    bonus_commission_rate = to_decimal(params.bonus_commission_rate, "bonus_commission_rate")

    base_commission = percentage_of(deal_value, commission_rate)
    bonus_commission = percentage_of(deal_value, bonus_commission_rate)
    calculated_commission = base_commission + bonus_commission

    platform_cost = communicated_commission - broker_commission
    gross_profit = actual_commission - platform_cost

    platform_margin = actual_commission - broker_commission

    if deal_value > ZERO:
        gross_profit_percentage = gross_profit / deal_value * HUNDRED
        platform_margin_percentage = platform_margin / deal_value * HUNDRED
    else:
        gross_profit_percentage = ZERO
        platform_margin_percentage = ZERO

    return CalculationResult(
        gross_profit=gross_profit,
        gross_profit_percentage=gross_profit_percentage,
        platform_margin_percentage=platform_margin_percentage,
        actual_commission=actual_commission,
        communicated_commission=communicated_commission,
        broker_commission=broker_commission,
        profitability=classify_profitability(gross_profit, gross_profit_percentage),
        breakdown=CommissionBreakdown(
            deal_value=deal_value,
            commission_rate=commission_rate,
            bonus_commission_rate=bonus_commission_rate,
            calculated_commission=calculated_commission,
            broker_share=broker_commission,
            platform_share=platform_margin,
        ),
    )


def calculate_optimal_commission(
    deal_value: Any,
    target_gross_profit_percentage: Any = DEFAULT_TARGET_GROSS_PROFIT_PERCENTAGE,
) -> OptimalCommission:
    """
    Recommend a commission structure that nets the target gross profit.

    The broker is paid the standard 1.5%, so the total commission rate is the
    target percentage plus the broker rate.
    """
    deal_value = to_decimal(deal_value, "deal_value")
    target = to_decimal(target_gross_profit_percentage, "target_gross_profit_percentage")

    total_rate = target + STANDARD_BROKER_RATE

    return OptimalCommission(
        recommended_commission_rate=total_rate,
        recommended_broker_rate=STANDARD_BROKER_RATE,
        projected_gross_profit=percentage_of(deal_value, target),
        projected_revenue=percentage_of(deal_value, total_rate),
    )


def _empty_distribution() -> Dict[Profitability, int]:
    return {
        Profitability.HIGH: 0,
        Profitability.MEDIUM: 0,
        Profitability.LOW: 0,
        Profitability.LOSS: 0,
    }


def build_recommendations(
    distribution: Dict[Profitability, int],
    average_gross_profit_percentage: Decimal,
    deal_count: int,
) -> List[str]:
    """
    Generate advisory messages for a portfolio.

    Rules are independent; any subset may apply:
    - >10% of deals at a loss
    - >30% of deals with low profitability
    - average gross profit percentage below 1%
    - fewer than 30% of deals highly profitable
    """
    if deal_count == 0:
        return []

    recommendations = []
    loss_share = Decimal(distribution[Profitability.LOSS]) / deal_count * HUNDRED
    low_share = Decimal(distribution[Profitability.LOW]) / deal_count * HUNDRED

    if loss_share > LOSS_SHARE_LIMIT:
        recommendations.append(LOSS_WARNING)
    if low_share > LOW_SHARE_LIMIT:
        recommendations.append(LOW_PROFITABILITY_WARNING)
    if average_gross_profit_percentage < MIN_AVERAGE_GROSS_PROFIT_PERCENTAGE:
        recommendations.append(LOW_MARGIN_WARNING)
    if distribution[Profitability.HIGH] < deal_count * MIN_HIGH_PROFIT_SHARE:
        recommendations.append(HIGH_VALUE_FOCUS_SUGGESTION)

    return recommendations


def analyze_portfolio_performance(deals: Iterable[CalculationInput]) -> PortfolioSummary:
    """
    Aggregate gross profit results across many deals.

    An empty portfolio returns zero totals, zero tier counts and no
    recommendations.
    """
    results = [calculate_gross_profit(deal) for deal in deals]
    distribution = _empty_distribution()

    if not results:
        return PortfolioSummary(
            total_gross_profit=ZERO,
            average_gross_profit_percentage=ZERO,
            total_revenue=ZERO,
            total_broker_commissions=ZERO,
            total_platform_margin=ZERO,
            profitability_distribution=distribution,
            recommendations=(),
            deal_count=0,
        )

    for result in results:
        distribution[result.profitability] += 1

    deal_count = len(results)
    average_gross_profit_percentage = (
        sum((r.gross_profit_percentage for r in results), ZERO) / deal_count
    )

    return PortfolioSummary(
        total_gross_profit=sum((r.gross_profit for r in results), ZERO),
        average_gross_profit_percentage=average_gross_profit_percentage,
        total_revenue=sum((r.actual_commission for r in results), ZERO),
        total_broker_commissions=sum((r.broker_commission for r in results), ZERO),
        total_platform_margin=sum((r.platform_margin for r in results), ZERO),
        profitability_distribution=distribution,
        recommendations=tuple(
            build_recommendations(distribution, average_gross_profit_percentage, deal_count)
        ),
        deal_count=deal_count,
    )


def simulate_commission_changes(
    current_params: CalculationInput,
    new_broker_commission_rate: Any,
) -> SimulationResult:
    """
    Re-run the calculation with the broker paid a different rate.

    The new broker commission is the rate applied to the deal value; all other
    inputs are unchanged. Improvement means the tier strictly rises along
    LOSS < LOW < MEDIUM < HIGH.
    """
    current = calculate_gross_profit(current_params)

    new_broker_commission = percentage_of(
        current.breakdown.deal_value,
        to_decimal(new_broker_commission_rate, "new_broker_commission_rate"),
    )
    projected = calculate_gross_profit(
        replace(current_params, broker_commission=new_broker_commission)
    )

    return SimulationResult(
        current=current,
        projected=projected,
        impact=SimulationImpact(
            gross_profit_change=projected.gross_profit - current.gross_profit,
            gross_profit_percentage_change=(
                projected.gross_profit_percentage - current.gross_profit_percentage
            ),
            profitability_improvement=projected.profitability.is_improvement_over(
                current.profitability
            ),
        ),
    )
