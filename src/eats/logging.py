"""
Centralized logging configuration using structlog

Every log line passes through two project processors: one stamps the current
request id and caller, the other masks credentials. Storage errors are logged
with ``error=str(e)``, and SQLAlchemy renders bound parameters into that text,
so password hashes would otherwise reach the logs.
"""

import base64
import logging
import re
import secrets
import sys
import time
from contextvars import ContextVar
from typing import Any

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)

REDACTED = "[REDACTED]"

# Event keys whose values are never written out
SECRET_FIELDS = frozenset({"password", "token", "jwt", "code", "api_key", "secret"})

_SECRET_PATTERNS = (
    re.compile(r"\$argon2[a-z]*\$[\w$=,+/.-]+"),
    re.compile(r"\beyJ[\w-]+\.[\w-]+\.[\w-]+"),
)


def add_request_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Stamp the request id and authenticated user id, when known."""
    _ = logger, method_name

    request_id = request_id_ctx.get()
    if request_id:
        event_dict["request_id"] = request_id

    user_id = user_id_ctx.get()
    if user_id:
        event_dict["user_id"] = user_id

    return event_dict


def scrub_secrets(text: str) -> str:
    """Mask argon2 hashes and JWTs embedded in free text such as driver errors."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(REDACTED, text)
    return text


def redact_secrets(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    _ = logger, method_name

    for key, value in event_dict.items():
        if key in SECRET_FIELDS and value is not None:
            event_dict[key] = REDACTED
        elif isinstance(value, str):
            event_dict[key] = scrub_secrets(value)
    return event_dict


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure structlog on top of the stdlib root logger.

    Args:
        debug: Human-readable console output instead of JSON lines.
        level: Explicit level name; defaults to DEBUG when ``debug`` else INFO.
    """
    if level:
        log_level = logging.getLevelName(level.upper())
    else:
        log_level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_request_context,
        structlog.processors.TimeStamper(fmt="ISO", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        redact_secrets,
    ]

    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Compact request id: microsecond timestamp plus 2 random bytes.

    Format: 14-character urlsafe base64 string (e.g., 'AAYHzJ3bqgBxQw')
    """
    timestamp_us = int(time.time() * 1_000_000)
    combined = timestamp_us.to_bytes(8, byteorder="big") + secrets.token_bytes(2)
    return base64.urlsafe_b64encode(combined).decode("ascii").rstrip("=")


def set_request_context(request_id: str | None = None) -> str:
    """Start a request's logging context and return its id."""
    request_id = request_id or generate_request_id()
    request_id_ctx.set(request_id)
    user_id_ctx.set(None)
    return request_id


def bind_user_id(user_id: str | int | None) -> None:
    """Attach the authenticated user to subsequent log lines of this request."""
    user_id_ctx.set(str(user_id) if user_id is not None else None)


def clear_request_context() -> None:
    request_id_ctx.set(None)
    user_id_ctx.set(None)


def get_request_id() -> str | None:
    return request_id_ctx.get()
