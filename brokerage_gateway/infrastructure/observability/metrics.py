"""Prometheus metrics for monitoring deal profitability and engine usage"""

from prometheus_client import Counter, Histogram
from brokerage_gateway.domain.models import CalculationResult, SimulationResult

# Calculation metrics
calculation_counter = Counter(
    "brokerage_gross_profit_calculations_total",
    "Gross profit calculations by profitability tier",
    ["profitability"],  # HIGH | MEDIUM | LOW | LOSS
)

simulation_counter = Counter(
    "brokerage_commission_simulations_total",
    "Broker rate simulations",
    ["outcome"],  # improved | unchanged_or_worse
)

portfolio_size_histogram = Histogram(
    "brokerage_portfolio_deals",
    "Number of deals per portfolio analysis",
    buckets=[0, 1, 10, 50, 100, 500, 1000, 5000, 10000],
)

invalid_input_counter = Counter(
    "brokerage_invalid_input_total",
    "Requests rejected for non-numeric input",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(result: CalculationResult) -> None:
    """Record the profitability tier of a calculated deal"""
    calculation_counter.labels(profitability=result.profitability.value).inc()


def record_simulation(result: SimulationResult) -> None:
    """Record whether a simulated broker rate improves profitability"""
    outcome = "improved" if result.impact.profitability_improvement else "unchanged_or_worse"
    simulation_counter.labels(outcome=outcome).inc()
