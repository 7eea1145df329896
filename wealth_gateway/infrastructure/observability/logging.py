"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from wealth_gateway.config import settings


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

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_snapshot(
    request_id: str,
    user_id: str | None,
    period_start: str,
    skipped_records: int,
    duration_ms: float,
) -> None:
    """Log structured snapshot outcome for analysis"""
    logging.info(
        "Snapshot built",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "snapshot_complete",
            "period_start": period_start,
            "skipped_records": skipped_records,
            "duration_ms": duration_ms,
        },
    )


def log_forecast(
    request_id: str,
    horizons: list[int],
    negative_surplus: bool,
    duration_ms: float,
) -> None:
    """Log structured forecast outcome"""
    logging.info(
        "Forecast computed",
        extra={
            "request_id": request_id,
            "step": "forecast_complete",
            "horizons": horizons,
            "negative_surplus": negative_surplus,
            "duration_ms": duration_ms,
        },
    )
