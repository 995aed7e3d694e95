"""
Centralized logging configuration for the Folio analytics layer.

All modules log through structlog. Applications embedding the analytics
core call configure_logging() once at startup; library code only asks for
loggers and never configures output itself. Output goes to stderr by
default so it never mixes with data a host writes to stdout.
"""
import logging
import sys
from typing import Any, Optional, TextIO

import orjson
import structlog
from structlog.types import EventDict, FilteringBoundLogger, WrappedLogger


class RoundFloats:
    """
    Processor rounding float fields, including those nested in dicts and lists.

    Returns, ratios and bucket totals carry full float precision; records
    only need enough digits to be read and compared.
    """

    def __init__(self, digits: int = 4):
        self.digits = digits

    def _round(self, value: Any) -> Any:
        if isinstance(value, float):
            return round(value, self.digits)
        if isinstance(value, dict):
            return {key: self._round(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._round(item) for item in value]
        return value

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        return {key: self._round(value) for key, value in event_dict.items()}


def _orjson_dumps(obj: Any, **kwargs: Any) -> str:
    return orjson.dumps(obj, **kwargs).decode()


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    float_digits: Optional[int] = 4,
    stream: Optional[TextIO] = None,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the analytics layer.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON lines; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        float_digits: Digits kept for float fields; None keeps full precision
        stream: Output stream, defaults to sys.stderr
        extra_processors: Additional structlog processors, run before rendering
    """
    log_level = getattr(logging, level.upper())

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if float_digits is not None:
        processors.append(RoundFloats(float_digits))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer(serializer=_orjson_dumps))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_analytics_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the analytics subsystem.

    Used by the per-instrument coordinator so that every record it emits
    can be filtered apart from the host application's own logging. The
    logger stays lazy, so configure_logging() may run after it is created.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger for analytics decisions
    """
    return structlog.get_logger(
        name,
        logger_name=name,
        subsystem="analytics",
        audit_trail=True,
    )


def log_classification_decision(
    logger: FilteringBoundLogger,
    dimension: str,
    category: str,
    rule: str,
    buckets: dict[str, float],
    instrument_id: Optional[str] = None,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a fund classification decision with standardized format.

    Args:
        logger: Structlog logger instance
        dimension: Which judgement was made ("asset_class" or "region")
        category: Resulting category label
        rule: Name of the rule that matched
        buckets: Accumulated bucket weights the rules were evaluated on
        instrument_id: Instrument being classified, when known
        context: Additional context data
    """
    bound_logger = logger.bind(
        dimension=dimension,
        category=category,
        rule=rule,
        buckets=buckets,
        instrument_id=instrument_id,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Classification decision")
