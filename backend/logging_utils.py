"""
PATH: backend/logging_utils.py

LOGGING HELPERS

Wired in settings.LOGGING:
- SensitiveDataFilter: redacts `extra={...}` values whose key looks sensitive
  (password, token, secret, api key, credit card, ssn, email).
- StructuredFormatter: appends the remaining `extra` context as JSON so that
  `logger.info("Order created", extra={"order_id": ...})` stays greppable.
"""

from __future__ import annotations

import json
import logging

REDACTED = "[REDACTED]"

SENSITIVE_KEY_PARTS = (
    "password",
    "token",
    "secret",
    "apikey",
    "api_key",
    "creditcard",
    "credit_card",
    "ssn",
    "email",
)

# Attributes every LogRecord carries; anything else came from `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


def is_sensitive_key(key: str) -> bool:
    lowered = str(key).lower()
    return any(part in lowered for part in SENSITIVE_KEY_PARTS)


def extra_context(record: logging.LogRecord) -> dict:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED_ATTRS}


def sanitize_context(context: dict | None) -> dict:
    if not context:
        return {}
    return {k: (REDACTED if is_sensitive_key(k) else v) for k, v in context.items()}


class SensitiveDataFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for key in extra_context(record):
            if is_sensitive_key(key):
                setattr(record, key, REDACTED)
        return True


class StructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = extra_context(record)
        if not context:
            return base
        return f"{base} {json.dumps(context, default=str, ensure_ascii=False)}"
