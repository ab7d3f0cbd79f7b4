"""Logging for rasterops operators.

Operators log through stdlib loggers (``logging.getLogger(__name__)``) and
attach their structured fields with ``extra=``; see log_operation(). An
application that wants structured output calls configure_logging(), which
routes those records through structlog so the fields, plus any request
context bound with set_correlation_context(), land in the rendered event.

Example:
    configure_logging(level="INFO", log_format="json")
    set_correlation_context(request_id="req-42", identifier="page-0001.tif")
    crop(raster, CropSpec(x=0, y=0, width=64, height=64))
    # {"operation": "crop", "input_size": [512, 512], "output_size": [64, 64],
    #  "request_id": "req-42", "identifier": "page-0001.tif", ...}
"""

import logging
import sys
import time
from typing import cast

import structlog
from structlog.types import Processor

from rasterops.config import settings

# Fields every operator event carries in LogRecord extras
OPERATION_FIELDS: tuple[str, ...] = (
    "operation",
    "input_size",
    "output_size",
    "elapsed_ms",
)

_HANDLER_NAME = "rasterops"


def set_correlation_context(
    request_id: str | None = None,
    identifier: str | None = None,
) -> None:
    """Bind request context to every event logged from this context.

    Args:
        request_id: Unique identifier for the derivative request
        identifier: Source image identifier
    """
    context = {"request_id": request_id, "identifier": identifier}
    structlog.contextvars.bind_contextvars(
        **{key: value for key, value in context.items() if value is not None}
    )


def clear_correlation_context() -> None:
    """Forget all request context bound in this context."""
    structlog.contextvars.clear_contextvars()


def log_operation(
    logger: logging.Logger,
    operation: str,
    input_size: tuple[int, int],
    output_size: tuple[int, int],
    start: float,
    message: str,
    *args: object,
) -> None:
    """Log a completed operator call at INFO with its structured fields.

    Args:
        logger: The operator module's logger.
        operation: Operator name, e.g. "crop".
        input_size: (width, height) of the input raster.
        output_size: (width, height) of the result.
        start: time.perf_counter() value taken before the work started.
        message: %-style message; "<operation>(): " and the elapsed time
            are added around it.
        *args: Arguments for message.
    """
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"{operation}(): {message} in %.1f msec",
        *args,
        elapsed_ms,
        extra={
            "operation": operation,
            "input_size": tuple(input_size),
            "output_size": tuple(output_size),
            "elapsed_ms": round(elapsed_ms, 1),
        },
    )


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def build_formatter(log_format: str) -> structlog.stdlib.ProcessorFormatter:
    """Build the stdlib formatter that renders records through structlog.

    Records from plain stdlib loggers get OPERATION_FIELDS lifted out of
    their extras; records from structlog loggers arrive pre-processed.

    Args:
        log_format: "json" for one JSON object per line, anything else for
            colored console output.
    """
    renderer: Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            *_shared_processors(),
            structlog.stdlib.ExtraAdder(allow=OPERATION_FIELDS),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )


def configure_logging(
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Route stdlib and structlog events through one structlog formatter.

    Safe to call repeatedly; the handler installed by a previous call is
    replaced.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to settings.LOG_LEVEL.
        log_format: Output format ("console" or "json").
                    Defaults to settings.LOG_FORMAT.
    """
    level = level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(build_formatter(log_format))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper()))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger for application code around the operators.

    Args:
        name: Logger name. If None, uses the calling module's name.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
