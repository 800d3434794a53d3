"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from brokerage_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_calculation(
    request_id: str,
    step: str,
    profitability: str,
    gross_profit: str,
    duration_ms: float,
) -> None:
    """Log a single-deal calculation outcome"""
    logging.info(
        "Calculation completed",
        extra={
            "request_id": request_id,
            "step": step,
            "profitability": profitability,
            "gross_profit": gross_profit,
            "duration_ms": duration_ms,
        },
    )


def log_portfolio_analysis(
    request_id: str,
    deal_count: int,
    recommendation_count: int,
    duration_ms: float,
) -> None:
    """Log portfolio analysis outcome"""
    logging.info(
        "Portfolio analysis completed",
        extra={
            "request_id": request_id,
            "step": "portfolio_analysis",
            "deal_count": deal_count,
            "recommendation_count": recommendation_count,
            "duration_ms": duration_ms,
        },
    )
