"""Domain models - immutable dataclasses for commission and profit calculations"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Tuple
from brokerage_gateway.utils.decimal_utils import ZERO, Numeric, to_decimal


class Profitability(str, Enum):
    """Profitability tier of a deal, ordered LOSS < LOW < MEDIUM < HIGH"""

    LOSS = "LOSS"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _PROFITABILITY_ORDER.index(self)

    def is_improvement_over(self, other: "Profitability") -> bool:
        return self.rank > other.rank


_PROFITABILITY_ORDER = (
    Profitability.LOSS,
    Profitability.LOW,
    Profitability.MEDIUM,
    Profitability.HIGH,
)


class ProjectType(str, Enum):
    """Real estate project categories with distinct market commission rates"""

    RESIDENTIAL = "RESIDENTIAL"
    COMMERCIAL = "COMMERCIAL"
    MIXED_USE = "MIXED_USE"
    VACATION_HOMES = "VACATION_HOMES"


@dataclass(frozen=True)
class CalculationInput:
    """
    Commission figures recorded for a single deal.

    Fields may hold raw numbers or numeric strings; the calculator converts
    each one to Decimal. from_values converts eagerly instead.
    """

    actual_commission: Numeric
    communicated_commission: Numeric
    broker_commission: Numeric
    deal_value: Numeric
    commission_rate: Numeric
    bonus_commission_rate: Numeric = ZERO

    @classmethod
    def from_values(
        cls,
        actual_commission: Any,
        communicated_commission: Any,
        broker_commission: Any,
        deal_value: Any,
        commission_rate: Any,
        bonus_commission_rate: Any = 0,
    ) -> "CalculationInput":
        """Build an input from raw numbers or strings, converting each to Decimal"""
        return cls(
            actual_commission=to_decimal(actual_commission, "actual_commission"),
            communicated_commission=to_decimal(communicated_commission, "communicated_commission"),
            broker_commission=to_decimal(broker_commission, "broker_commission"),
            deal_value=to_decimal(deal_value, "deal_value"),
            commission_rate=to_decimal(commission_rate, "commission_rate"),
            bonus_commission_rate=to_decimal(bonus_commission_rate, "bonus_commission_rate"),
        )


@dataclass(frozen=True)
class CommissionBreakdown:
    """Rate-derived commission and the broker/platform split"""

    deal_value: Decimal
    commission_rate: Decimal
    bonus_commission_rate: Decimal
    calculated_commission: Decimal  # expected from rates, not used in gross profit
    broker_share: Decimal
    platform_share: Decimal


@dataclass(frozen=True)
class CalculationResult:
    """Gross profit outcome for a single deal"""

    gross_profit: Decimal
    gross_profit_percentage: Decimal
    platform_margin_percentage: Decimal
    actual_commission: Decimal
    communicated_commission: Decimal
    broker_commission: Decimal
    profitability: Profitability
    breakdown: CommissionBreakdown

    @property
    def platform_margin(self) -> Decimal:
        return self.breakdown.platform_share


@dataclass(frozen=True)
class OptimalCommission:
    """Commission structure that yields a target gross profit percentage"""

    recommended_commission_rate: Decimal
    recommended_broker_rate: Decimal
    projected_gross_profit: Decimal
    projected_revenue: Decimal


@dataclass(frozen=True)
class PortfolioSummary:
    """Aggregated performance across a set of deals"""

    total_gross_profit: Decimal
    average_gross_profit_percentage: Decimal
    total_revenue: Decimal
    total_broker_commissions: Decimal
    total_platform_margin: Decimal
    profitability_distribution: Mapping[Profitability, int]
    recommendations: Tuple[str, ...]
    deal_count: int

    def __post_init__(self) -> None:
        # Read-only copy; the caller's dict cannot alter the summary afterwards
        object.__setattr__(
            self,
            "profitability_distribution",
            MappingProxyType(dict(self.profitability_distribution)),
        )


@dataclass(frozen=True)
class SimulationImpact:
    """Difference between projected and current outcomes"""

    gross_profit_change: Decimal
    gross_profit_percentage_change: Decimal
    profitability_improvement: bool


@dataclass(frozen=True)
class SimulationResult:
    """Current vs projected outcome for a hypothetical broker rate"""

    current: CalculationResult
    projected: CalculationResult
    impact: SimulationImpact


@dataclass(frozen=True)
class MarketRateRecommendation:
    """Market-standard commission rates (percent of deal value)"""

    recommended_rate: Decimal
    broker_rate: Decimal
    platform_rate: Decimal


@dataclass(frozen=True)
class TaxBreakdown:
    """Egyptian tax deductions applied to gross profit"""

    corporate_tax: Decimal
    vat_tax: Decimal
    net_profit: Decimal
