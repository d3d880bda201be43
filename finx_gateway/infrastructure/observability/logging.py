"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "finx-gateway"


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


def log_snapshot_update(request_id: str, step: str, risk_score: int, free_cash_flow: float) -> None:
    """Log a snapshot mutation with the resulting headline figures"""
    logging.info(
        "Snapshot updated",
        extra={
            "request_id": request_id,
            "step": step,
            "risk_score": risk_score,
            "free_cash_flow": free_cash_flow,
        },
    )


def log_simulation(request_id: str, scenario: str, risk_score_delta: int, duration_ms: float) -> None:
    """Log a what-if simulation outcome"""
    logging.info(
        "Simulation completed",
        extra={
            "request_id": request_id,
            "step": "simulation_complete",
            "scenario": scenario,
            "risk_score_delta": risk_score_delta,
            "duration_ms": duration_ms,
        },
    )


def log_chat(request_id: str, message_count: int, reply_chars: int, duration_ms: float) -> None:
    """Log an advisor chat round trip"""
    logging.info(
        "Advisor reply received",
        extra={
            "request_id": request_id,
            "step": "chat_complete",
            "message_count": message_count,
            "reply_chars": reply_chars,
            "duration_ms": duration_ms,
        },
    )
