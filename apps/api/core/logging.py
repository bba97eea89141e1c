"""
Structured logging configuration.

One JSON object per line in production so submission and prophecy events
can be filtered by `service`, `environment` and the `extra_fields` that
handlers attach (submission_id, character, status_code, ...).
Local runs get a readable single-line text format instead.
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict
from core.config import settings

SERVICE_NAME = "doomsayer-api"


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON line tagged with the service and environment."""

    def __init__(self, service: str = SERVICE_NAME, environment: str = None):
        super().__init__()
        self.service = service
        self.environment = environment or settings.ENVIRONMENT

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": self.service,
            "environment": self.environment,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Context passed via extra={"extra_fields": {...}}; never overrides the envelope
        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            for key, value in extra_fields.items():
                log_data.setdefault(key, value)

        return json.dumps(log_data, default=str)


def use_json_format() -> bool:
    return settings.LOG_FORMAT == "json" or settings.ENVIRONMENT == "production"


def setup_logging():
    """
    Configure the root logger once for the API, migrations and scripts.

    Returns:
        The root logger
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    if use_json_format():
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            f"%(asctime)s [{SERVICE_NAME}] %(levelname)s %(name)s: %(message)s"
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # The request middleware already logs every call with timing
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.INFO)

    return root_logger
