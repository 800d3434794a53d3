"""Pytest fixtures for testing"""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from brokerage_gateway.api.main import create_app
from brokerage_gateway.domain.models import CalculationInput


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def sample_deal() -> CalculationInput:
    """2,000,000 EGP residential deal at 2.5% with 30,000 paid to the broker"""
    return CalculationInput(
        actual_commission=Decimal("50000"),
        communicated_commission=Decimal("50000"),
        broker_commission=Decimal("30000"),
        deal_value=Decimal("2000000"),
        commission_rate=Decimal("2.5"),
    )


@pytest.fixture
def sample_deal_payload() -> dict:
    """JSON body equivalent of sample_deal"""
    return {
        "actual_commission": "50000",
        "communicated_commission": "50000",
        "broker_commission": "30000",
        "deal_value": "2000000",
        "commission_rate": "2.5",
    }


@pytest.fixture
def make_deal():
    """Factory for deals whose gross profit equals the given amount"""

    def _make_deal(gross_profit: str, deal_value: str = "10000") -> CalculationInput:
        # communicated == broker, so gross profit == actual commission
        return CalculationInput.from_values(
            actual_commission=gross_profit,
            communicated_commission="0",
            broker_commission="0",
            deal_value=deal_value,
            commission_rate="2.5",
        )

    return _make_deal
