"""POST /v1/gross-profit - single deal profit, optimal commission and simulation endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from brokerage_gateway.api.v1.schemas import (
    CalculationRequest,
    CalculationResponse,
    OptimalCommissionRequest,
    OptimalCommissionResponse,
    SimulationRequest,
    SimulationResponse,
)
from brokerage_gateway.api.dependencies import get_request_id, get_settings
from brokerage_gateway.config import Settings
from brokerage_gateway.domain.gross_profit import (
    calculate_gross_profit,
    calculate_optimal_commission,
    simulate_commission_changes,
)
from brokerage_gateway.domain.exceptions import InvalidNumericInputError
from brokerage_gateway.infrastructure.observability.metrics import (
    invalid_input_counter,
    record_calculation,
    record_simulation,
)
from brokerage_gateway.infrastructure.observability.logging import log_calculation

router = APIRouter()


@router.post("/gross-profit", response_model=CalculationResponse)
def create_gross_profit_calculation(request_body: CalculationRequest, request: Request):
    """
    Calculate gross profit and profitability tier for one deal.

    Gross Profit = Actual Commission - (Communicated Commission - Broker Commission)
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = calculate_gross_profit(request_body.to_domain())
    except InvalidNumericInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_calculation(result)
    log_calculation(
        request_id, "gross_profit", result.profitability.value, str(result.gross_profit), duration_ms
    )

    return CalculationResponse.from_domain(result)


@router.post("/gross-profit/optimal", response_model=OptimalCommissionResponse)
def create_optimal_commission(
    request_body: OptimalCommissionRequest,
    request: Request,
    app_settings: Settings = Depends(get_settings),
):
    """
    Recommend commission and broker rates that reach a target gross profit.

    The broker is assumed to take the standard 1.5%.
    """
    request_id = get_request_id(request)
    target = request_body.target_gross_profit_percentage
    if target is None:
        target = app_settings.default_target_gross_profit_percentage

    try:
        result = calculate_optimal_commission(request_body.deal_value, target)
    except InvalidNumericInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return OptimalCommissionResponse.from_domain(result)


@router.post("/gross-profit/simulate", response_model=SimulationResponse)
def create_commission_simulation(request_body: SimulationRequest, request: Request):
    """
    Compare current profit against a hypothetical broker commission rate.

    Returns both outcomes and whether the profitability tier improves.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = simulate_commission_changes(
            request_body.deal.to_domain(), request_body.new_broker_commission_rate
        )
    except InvalidNumericInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_simulation(result)
    log_calculation(
        request_id,
        "simulation",
        result.projected.profitability.value,
        str(result.projected.gross_profit),
        duration_ms,
    )

    return SimulationResponse.from_domain(result)
