"""
Structured logging for cdap.

Provides a pre-configured logger that emits JSON-structured log records
with request context (namespace, resource, operation) for easy filtering
in log aggregation tools. Secret payloads are never passed to it.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Attach any extras injected via CdapLogger.log_operation
        for key in ("request_id", "namespace", "resource", "operation", "status_code"):
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class CdapLogger:
    """Convenience wrapper around :mod:`logging` for resource operations."""

    def __init__(self, name: str = "cdap") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        namespace: str | None = None,
        resource: str | None = None,
        operation: str | None = None,
        status_code: int | None = None,
        request_id: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Emit a structured log record with resource operation context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            namespace: CDAP namespace the operation targets.
            resource: Resource kind (e.g. 'secure_key').
            operation: Operation name (e.g. 'create').
            status_code: HTTP status of a failed call, if any.
            request_id: Optional correlation ID; auto-generated if omitted.
            exc_info: Whether to include exception info.
        """
        extra = {
            "namespace": namespace,
            "resource": resource,
            "operation": operation,
            "status_code": status_code,
            "request_id": request_id or uuid.uuid4().hex[:12],
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.INFO, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, **kwargs)


# Module-level singleton
cdap_logger = CdapLogger()
