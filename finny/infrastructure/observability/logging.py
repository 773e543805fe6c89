"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from finny.config import settings


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


def log_entry_created(request_id: str, user_id: str, kind: str, entry_id: str, amount: float, frequency: str) -> None:
    """Log a new income, expense or bill"""
    logging.info(
        "Entry created",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "entry_created",
            "entry_kind": kind,
            "entry_id": entry_id,
            "amount": amount,
            "frequency": frequency,
        },
    )


def log_bill_payment(request_id: str, user_id: str, bill_id: str, on_time: bool, level: int, experience: int) -> None:
    """Log a recorded bill payment and the resulting XP state"""
    logging.info(
        "Bill payment recorded",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "bill_payment",
            "bill_id": bill_id,
            "on_time": on_time,
            "level": level,
            "experience": experience,
        },
    )


def log_experience_change(user_id: str, level: int, experience: int, source: str) -> None:
    """Log a persisted level/experience change"""
    logging.info(
        "Experience updated",
        extra={
            "user_id": user_id,
            "step": "experience_update",
            "level": level,
            "experience": experience,
            "source": source,
        },
    )
