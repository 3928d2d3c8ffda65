"""Logging setup for amort-gen.

Engine records carry the loan they concern as record attributes, set with
``extra=loan_context(...)``. The JSON formatter emits them as fields and the
standard formatter appends them to the line, so a batch run can be filtered
by loan.
"""

import logging
import sys
from typing import Any

CONTEXT_FIELDS = ("loan_id", "installment_number")


def loan_context(loan_id: object, installment_number: int | None = None) -> dict[str, Any]:
    """Build the ``extra`` mapping that tags a log record with its loan."""
    context: dict[str, Any] = {"loan_id": loan_id}
    if installment_number is not None:
        context["installment_number"] = installment_number
    return context


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure logging for amort-gen.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        "standard" for human-readable lines, "json" for one JSON object per line.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = LoanContextFormatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("amort_gen").setLevel(log_level)

    # Faker logs every provider lookup at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    return {
        name: getattr(record, name)
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


class LoanContextFormatter(logging.Formatter):
    """Standard formatter that appends ``[loan=... installment=...]`` when present."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _record_context(record)
        if not context:
            return line
        tags = " ".join(
            f"{'loan' if name == 'loan_id' else 'installment'}={value}"
            for name, value in context.items()
        )
        return f"{line} [{tags}]"


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        import json
        from datetime import datetime, timezone

        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(_record_context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)
