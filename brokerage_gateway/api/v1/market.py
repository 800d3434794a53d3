"""Egyptian market endpoints - commission rate lookup and tax deductions"""

import logging
from decimal import Decimal
from fastapi import APIRouter, HTTPException, Query, Request

from brokerage_gateway.api.v1.schemas import MarketRateResponse, TaxRequest, TaxResponse
from brokerage_gateway.api.dependencies import get_request_id
from brokerage_gateway.domain.egyptian_market import calculate_egyptian_commission, calculate_egyptian_taxes
from brokerage_gateway.domain.exceptions import InvalidNumericInputError
from brokerage_gateway.infrastructure.observability.metrics import invalid_input_counter

router = APIRouter()


@router.get("/market/commission-rates", response_model=MarketRateResponse)
def get_market_commission_rates(
    request: Request,
    deal_value: Decimal = Query(..., description="Deal value in EGP"),
    project_type: str = Query("RESIDENTIAL", description="RESIDENTIAL, COMMERCIAL, MIXED_USE or VACATION_HOMES"),
    location: str = Query("", description="Project location, free text"),
):
    """
    Recommend base, broker and platform commission rates.

    Unknown project types use residential rates. Premium locations add a
    surcharge to the base and broker rates.
    """
    try:
        result = calculate_egyptian_commission(deal_value, project_type, location)
    except InvalidNumericInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid input: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return MarketRateResponse.from_domain(result)


@router.post("/market/taxes", response_model=TaxResponse)
def create_tax_calculation(request_body: TaxRequest, request: Request):
    """Apply corporate tax (22.5%) and VAT (14%) to a gross profit figure"""
    try:
        result = calculate_egyptian_taxes(request_body.gross_profit)
    except InvalidNumericInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid input: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return TaxResponse.from_domain(result)
