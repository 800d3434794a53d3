"""Pydantic schemas for API request/response validation"""

from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from brokerage_gateway.domain.models import (
    CalculationInput,
    CalculationResult,
    MarketRateRecommendation,
    OptimalCommission,
    PortfolioSummary,
    Profitability,
    SimulationResult,
    TaxBreakdown,
)


class CalculationRequest(BaseModel):
    """Commission figures of a single deal"""

    actual_commission: Decimal = Field(..., description="Commission actually received")
    communicated_commission: Decimal = Field(..., description="Commission disclosed to the developer")
    broker_commission: Decimal = Field(..., description="Commission paid to the broker")
    deal_value: Decimal = Field(..., description="Deal value in EGP")
    commission_rate: Decimal = Field(..., description="Agreed commission rate, percent")
    bonus_commission_rate: Decimal = Field(Decimal("0"), description="Bonus commission rate, percent")

    def to_domain(self) -> CalculationInput:
        return CalculationInput(
            actual_commission=self.actual_commission,
            communicated_commission=self.communicated_commission,
            broker_commission=self.broker_commission,
            deal_value=self.deal_value,
            commission_rate=self.commission_rate,
            bonus_commission_rate=self.bonus_commission_rate,
        )


class BreakdownSchema(BaseModel):
    """Rate-derived commission and broker/platform split"""

    deal_value: Decimal
    commission_rate: Decimal
    bonus_commission_rate: Decimal
    calculated_commission: Decimal
    broker_share: Decimal
    platform_share: Decimal


class CalculationResponse(BaseModel):
    """Response for POST /v1/gross-profit"""

    gross_profit: Decimal
    gross_profit_percentage: Decimal
    actual_commission: Decimal
    communicated_commission: Decimal
    broker_commission: Decimal
    platform_margin: Decimal
    platform_margin_percentage: Decimal
    profitability: Profitability
    breakdown: BreakdownSchema

    @classmethod
    def from_domain(cls, result: CalculationResult) -> "CalculationResponse":
        b = result.breakdown
        return cls(
            gross_profit=result.gross_profit,
            gross_profit_percentage=result.gross_profit_percentage,
            actual_commission=result.actual_commission,
            communicated_commission=result.communicated_commission,
            broker_commission=result.broker_commission,
            platform_margin=result.platform_margin,
            platform_margin_percentage=result.platform_margin_percentage,
            profitability=result.profitability,
            breakdown=BreakdownSchema(
                deal_value=b.deal_value,
                commission_rate=b.commission_rate,
                bonus_commission_rate=b.bonus_commission_rate,
                calculated_commission=b.calculated_commission,
                broker_share=b.broker_share,
                platform_share=b.platform_share,
            ),
        )


class OptimalCommissionRequest(BaseModel):
    """Request body for POST /v1/gross-profit/optimal"""

    deal_value: Decimal
    target_gross_profit_percentage: Optional[Decimal] = Field(
        None, description="Target gross profit, percent of deal value (defaults to configured target)"
    )


class OptimalCommissionResponse(BaseModel):
    """Response for POST /v1/gross-profit/optimal"""

    recommended_commission_rate: Decimal
    recommended_broker_rate: Decimal
    projected_gross_profit: Decimal
    projected_revenue: Decimal

    @classmethod
    def from_domain(cls, result: OptimalCommission) -> "OptimalCommissionResponse":
        return cls(
            recommended_commission_rate=result.recommended_commission_rate,
            recommended_broker_rate=result.recommended_broker_rate,
            projected_gross_profit=result.projected_gross_profit,
            projected_revenue=result.projected_revenue,
        )


class SimulationRequest(BaseModel):
    """Request body for POST /v1/gross-profit/simulate"""

    deal: CalculationRequest
    new_broker_commission_rate: Decimal = Field(..., description="Hypothetical broker rate, percent")


class SimulationImpactSchema(BaseModel):
    gross_profit_change: Decimal
    gross_profit_percentage_change: Decimal
    profitability_improvement: bool


class SimulationResponse(BaseModel):
    """Response for POST /v1/gross-profit/simulate"""

    current: CalculationResponse
    projected: CalculationResponse
    impact: SimulationImpactSchema

    @classmethod
    def from_domain(cls, result: SimulationResult) -> "SimulationResponse":
        return cls(
            current=CalculationResponse.from_domain(result.current),
            projected=CalculationResponse.from_domain(result.projected),
            impact=SimulationImpactSchema(
                gross_profit_change=result.impact.gross_profit_change,
                gross_profit_percentage_change=result.impact.gross_profit_percentage_change,
                profitability_improvement=result.impact.profitability_improvement,
            ),
        )


class PortfolioRequest(BaseModel):
    """Request body for POST /v1/portfolio/analysis"""

    deals: List[CalculationRequest]


class PortfolioResponse(BaseModel):
    """Response for POST /v1/portfolio/analysis"""

    deal_count: int
    total_gross_profit: Decimal
    average_gross_profit_percentage: Decimal
    total_revenue: Decimal
    total_broker_commissions: Decimal
    total_platform_margin: Decimal
    profitability_distribution: Dict[Profitability, int]
    recommendations: List[str]

    @classmethod
    def from_domain(cls, summary: PortfolioSummary) -> "PortfolioResponse":
        return cls(
            deal_count=summary.deal_count,
            total_gross_profit=summary.total_gross_profit,
            average_gross_profit_percentage=summary.average_gross_profit_percentage,
            total_revenue=summary.total_revenue,
            total_broker_commissions=summary.total_broker_commissions,
            total_platform_margin=summary.total_platform_margin,
            profitability_distribution=dict(summary.profitability_distribution),
            recommendations=list(summary.recommendations),
        )


class MarketRateResponse(BaseModel):
    """Response for GET /v1/market/commission-rates"""

    recommended_rate: Decimal
    broker_rate: Decimal
    platform_rate: Decimal

    @classmethod
    def from_domain(cls, result: MarketRateRecommendation) -> "MarketRateResponse":
        return cls(
            recommended_rate=result.recommended_rate,
            broker_rate=result.broker_rate,
            platform_rate=result.platform_rate,
        )


class TaxRequest(BaseModel):
    """Request body for POST /v1/market/taxes"""

    gross_profit: Decimal


class TaxResponse(BaseModel):
    """Response for POST /v1/market/taxes"""

    corporate_tax: Decimal
    vat_tax: Decimal
    net_profit: Decimal

    @classmethod
    def from_domain(cls, result: TaxBreakdown) -> "TaxResponse":
        return cls(
            corporate_tax=result.corporate_tax,
            vat_tax=result.vat_tax,
            net_profit=result.net_profit,
        )
