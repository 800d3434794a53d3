"""POST /v1/portfolio/analysis - Aggregate profitability across deals"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from brokerage_gateway.api.v1.schemas import PortfolioRequest, PortfolioResponse
from brokerage_gateway.api.dependencies import get_request_id, get_settings
from brokerage_gateway.config import Settings
from brokerage_gateway.domain.gross_profit import analyze_portfolio_performance
from brokerage_gateway.domain.exceptions import InvalidNumericInputError
from brokerage_gateway.infrastructure.observability.metrics import (
    invalid_input_counter,
    portfolio_size_histogram,
)
from brokerage_gateway.infrastructure.observability.logging import log_portfolio_analysis

router = APIRouter()


@router.post("/portfolio/analysis", response_model=PortfolioResponse)
def create_portfolio_analysis(
    request_body: PortfolioRequest,
    request: Request,
    app_settings: Settings = Depends(get_settings),
):
    """
    Analyze gross profit performance across a batch of deals.

    Returns:
        Totals, average gross profit percentage, count per profitability
        tier and advisory recommendations
    """
    start_time = time.time()
    request_id = get_request_id(request)

    if len(request_body.deals) > app_settings.portfolio_max_deals:
        raise HTTPException(
            status_code=413,
            detail=f"Portfolio exceeds {app_settings.portfolio_max_deals} deals",
        )

    try:
        summary = analyze_portfolio_performance(deal.to_domain() for deal in request_body.deals)
    except InvalidNumericInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    portfolio_size_histogram.observe(summary.deal_count)
    log_portfolio_analysis(request_id, summary.deal_count, len(summary.recommendations), duration_ms)

    return PortfolioResponse.from_domain(summary)
