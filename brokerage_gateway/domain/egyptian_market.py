"""Egyptian real estate market rates and tax deductions"""

from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union
from brokerage_gateway.domain.models import MarketRateRecommendation, ProjectType, TaxBreakdown
from brokerage_gateway.utils.decimal_utils import percentage_of, to_decimal

# (base rate, broker rate) in percent of deal value
PROJECT_TYPE_RATES: Mapping[ProjectType, Tuple[Decimal, Decimal]] = MappingProxyType({
    ProjectType.RESIDENTIAL: (Decimal("2.5"), Decimal("1.5")),
    ProjectType.VACATION_HOMES: (Decimal("3.0"), Decimal("2.0")),
    ProjectType.COMMERCIAL: (Decimal("2.0"), Decimal("1.2")),
    ProjectType.MIXED_USE: (Decimal("2.8"), Decimal("1.8")),
})

DEFAULT_PROJECT_TYPE = ProjectType.RESIDENTIAL

PREMIUM_LOCATIONS: Tuple[str, ...] = (
    "العاصمة الإدارية الجديدة",  # New Administrative Capital
    "الساحل الشمالي",  # North Coast
    "شرم الشيخ",  # Sharm El Sheikh
    "القاهرة الجديدة",  # New Cairo
)
PREMIUM_BASE_RATE_SURCHARGE = Decimal("0.5")
PREMIUM_BROKER_RATE_SURCHARGE = Decimal("0.3")

CORPORATE_TAX_RATE = Decimal("22.5")
VAT_RATE = Decimal("14")  # VAT on commission services


def resolve_project_type(project_type: Union[ProjectType, str, None]) -> ProjectType:
    """Map a project type tag onto a known ProjectType, defaulting to RESIDENTIAL"""
    if isinstance(project_type, ProjectType):
        return project_type
    try:
        return ProjectType(project_type)
    except ValueError:
        return DEFAULT_PROJECT_TYPE


def is_premium_location(location: Optional[str]) -> bool:
    """True if the location text mentions any premium area"""
    if not location:
        return False
    return any(premium in location for premium in PREMIUM_LOCATIONS)


def calculate_egyptian_commission(
    deal_value: Any,
    project_type: Union[ProjectType, str, None],
    location: Optional[str],
) -> MarketRateRecommendation:
    """
    Recommend commission rates by Egyptian market standards.

    Rates by project type (base / broker):
    - RESIDENTIAL:    2.5% / 1.5% (also used for unknown types)
    - VACATION_HOMES: 3.0% / 2.0%
    - COMMERCIAL:     2.0% / 1.2%
    - MIXED_USE:      2.8% / 1.8%

    Premium locations add 0.5% to the base rate and 0.3% to the broker rate.
    The platform keeps the difference.
    """
    # Rates do not depend on deal value, but it must still be numeric
    to_decimal(deal_value, "deal_value")

    base_rate, broker_rate = PROJECT_TYPE_RATES[resolve_project_type(project_type)]

    if is_premium_location(location):
        base_rate += PREMIUM_BASE_RATE_SURCHARGE
        broker_rate += PREMIUM_BROKER_RATE_SURCHARGE

    return MarketRateRecommendation(
        recommended_rate=base_rate,
        broker_rate=broker_rate,
        platform_rate=base_rate - broker_rate,
    )


def calculate_egyptian_taxes(gross_profit: Any) -> TaxBreakdown:
    """
    Apply Egyptian corporate tax (22.5%) and VAT (14%) to gross profit.

    Both taxes are taken from the same gross profit base, not compounded.
    Negative gross profit yields negative tax figures.
    """
    gross_profit = to_decimal(gross_profit, "gross_profit")

    corporate_tax = percentage_of(gross_profit, CORPORATE_TAX_RATE)
    vat_tax = percentage_of(gross_profit, VAT_RATE)

    return TaxBreakdown(
        corporate_tax=corporate_tax,
        vat_tax=vat_tax,
        net_profit=gross_profit - corporate_tax - vat_tax,
    )
