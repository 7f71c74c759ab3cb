"""Structured logging for Campaign Access.

Every module logs through structlog. ``setup_logging`` installs the
processor chain once per process: log level, UTC timestamp, request
correlation, credential redaction, then a JSON or console renderer.
Security decisions (login outcomes, rejected profiles) go through
``AuditLogger`` so they carry a stable ``event_type``.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import structlog

from campaign_access.core.config import LoggingConfig

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_var: ContextVar[str | None] = ContextVar("user_id", default=None)

SENSITIVE_KEYS = frozenset({
    "password", "secret", "token", "api_key", "apikey",
    "authorization", "credential", "private_key", "secret_key",
})

REDACTED = "[REDACTED]"


def add_context_info(
    logger: structlog.BoundLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Attach the current request and user IDs, if bound."""
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id

    user_id = user_id_var.get()
    if user_id:
        event_dict.setdefault("user_id", user_id)

    return event_dict


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in SENSITIVE_KEYS)


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: REDACTED if _is_sensitive(str(key)) else _redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_redact(item) for item in value]
    return value


def sanitize_event(
    logger: structlog.BoundLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Replace credential-like values anywhere in the event."""
    return _redact(event_dict)


def _renderer(format: str) -> Any:
    if format == "json":
        # Korean labels stay readable in the output
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    log_file: str | None = None,
    service_name: str = "campaign-access",
    sanitize_logs: bool = True,
) -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: ``json`` or ``console``
        log_file: Optional file that also receives standard library records
        service_name: Service name reported in the startup event
        sanitize_logs: Redact credential-like keys
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_context_info,
    ]
    if sanitize_logs:
        processors.append(sanitize_event)
    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _renderer(format),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    logging.basicConfig(format="%(message)s", level=log_level, handlers=handlers, force=True)

    structlog.get_logger("campaign_access").info(
        "Logging configured",
        service=service_name,
        level=level,
        format=format,
        log_file=log_file,
    )


def setup_logging_from_config(config: LoggingConfig) -> None:
    """Configure logging from the ``logging`` settings section."""
    setup_logging(level=config.level, format=config.format, log_file=config.file)


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Return a structlog logger, optionally bound to ``initial_context``."""
    logger = structlog.get_logger(name)
    return logger.bind(**initial_context) if initial_context else logger


def set_request_context(
    request_id: str | None = None,
    user_id: str | None = None,
) -> None:
    """Bind request correlation IDs for the current context."""
    if request_id is not None:
        request_id_var.set(request_id)
    if user_id is not None:
        user_id_var.set(user_id)


def clear_request_context() -> None:
    request_id_var.set(None)
    user_id_var.set(None)


def generate_request_id() -> str:
    return str(uuid.uuid4())


class AuditLogger:
    """
    Audit trail for authentication and access-control decisions.

    Successful logins are logged at info level, every rejection at warning
    level.
    """

    def __init__(self, service: str = "campaign-access"):
        self.logger = get_logger("audit", service=service, audit=True)

    def log_auth_event(
        self,
        event: str,
        login_id: str | None = None,
        success: bool = True,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Log a login outcome (``auth.<event>``)."""
        emit = self.logger.info if success else self.logger.warning
        emit(
            f"auth.{event}",
            event_type="authentication",
            login_id=login_id,
            success=success,
            **(details or {}),
        )

    def log_access_event(
        self,
        resource: str,
        action: str,
        user_id: str | None = None,
        granted: bool = True,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Log an access-control decision (``access.<action>``)."""
        emit = self.logger.info if granted else self.logger.warning
        emit(
            f"access.{action}",
            event_type="access_control",
            resource=resource,
            user_id=user_id,
            granted=granted,
            **(details or {}),
        )


audit_logger = AuditLogger()


__all__ = [
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "set_request_context",
    "clear_request_context",
    "generate_request_id",
    "AuditLogger",
    "audit_logger",
    "request_id_var",
    "user_id_var",
]
