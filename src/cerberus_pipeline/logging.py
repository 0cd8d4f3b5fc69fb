"""Structured logging configuration for the Cerberus pipeline.

Provides JSON-formatted logs for production and human-readable
logs for development.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .config import get_settings

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.funcName:
            log_data["function"] = record.funcName
        if record.lineno:
            log_data["line"] = record.lineno

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable log formatter for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging() -> None:
    """Configure logging based on settings."""
    settings = get_settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # stdout carries command output such as --json records
    handler = logging.StreamHandler(sys.stderr)

    if settings.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    # Suppress noisy loggers
    logging.getLogger("markdown_it").setLevel(logging.WARNING)

    logger = get_logger(__name__)
    logger.debug(
        "Logging initialized",
        extra={
            "environment": settings.environment,
            "log_level": settings.log_level,
            "log_format": settings.log_format,
        },
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds context to all log messages."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        """Process the logging message and add extra context."""
        extra = dict(kwargs.get("extra") or {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def get_context_logger(name: str, **context: Any) -> LoggerAdapter:
    """Get a logger with additional context.

    Args:
        name: Logger name
        **context: Context fields to add to all log messages

    Returns:
        Logger adapter with context

    Usage:
        logger = get_context_logger(__name__, document_type="entity")
        logger.info("Parsed profile")  # Includes document_type
    """
    return LoggerAdapter(get_logger(name), context)


# =========================
# Convenience functions
# =========================


def log_document_parsed(
    document_type: str, identifier: str, records: int
) -> None:
    """Log a successfully parsed document.

    Args:
        document_type: Kind of document (country, entity, legislation, focuspoint)
        identifier: Slug or path of the document
        records: Number of records the document produced
    """
    logger = get_logger("cerberus_pipeline.parsing")
    logger.info(
        f"Parsed {document_type} {identifier}: {records} records",
        extra={
            "document_type": document_type,
            "identifier": identifier,
            "records": records,
            "event": "document_parsed",
        },
    )


def log_document_skipped(document_type: str, identifier: str, reason: str) -> None:
    """Log a document that produced no record."""
    logger = get_logger("cerberus_pipeline.parsing")
    logger.info(
        f"Skipped {document_type} {identifier}: {reason}",
        extra={
            "document_type": document_type,
            "identifier": identifier,
            "reason": reason,
            "event": "document_skipped",
        },
    )


def log_resolution_summary(scope: str, resolved: int, total: int) -> None:
    """Log the outcome of a resolution pass.

    Args:
        scope: What was resolved (connections, linked entities, ...)
        resolved: References resolved after the pass
        total: References inspected
    """
    logger = get_logger("cerberus_pipeline.resolution")
    logger.info(
        f"Resolved {resolved}/{total} {scope}",
        extra={
            "scope": scope,
            "resolved": resolved,
            "total": total,
            "event": "resolution_summary",
        },
    )


def log_name_collision(key: str, kept_slug: str, dropped_slug: str) -> None:
    """Log two entities competing for the same lookup key."""
    logger = get_logger("cerberus_pipeline.resolution")
    logger.warning(
        f"Name collision on {key!r}: keeping {kept_slug}, dropping {dropped_slug}",
        extra={
            "key": key,
            "kept_slug": kept_slug,
            "dropped_slug": dropped_slug,
            "event": "name_collision",
        },
    )


def log_graph_built(node_count: int, edge_count: int, dangling: int) -> None:
    """Log the size of a built relationship graph."""
    logger = get_logger("cerberus_pipeline.graph")
    logger.info(
        f"Graph built: {node_count} nodes, {edge_count} edges",
        extra={
            "node_count": node_count,
            "edge_count": edge_count,
            "dangling": dangling,
            "event": "graph_built",
        },
    )
