"""
PATH: backend/exceptions.py

API ERROR NORMALIZATION

One error shape for every endpoint:
- 400 validation: {"success": false, "error": "Invalid data", "field_errors": {...}}
- 401 / 403 / 404 / 405 / 429: {"success": false, "error": "<detail>"}
- anything unexpected: logged, then 500 with a generic message (no internals leak)
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"
INVALID_DATA_MESSAGE = "Invalid data"


def error_response(message: str, *, http_status: int, field_errors: dict | None = None) -> Response:
    """
    Canonical API error response.
    """
    body: dict = {"success": False, "error": message}
    if field_errors:
        body["field_errors"] = field_errors
    return Response(body, status=http_status)


def _plain_errors(detail):
    """
    ErrorDetail tree -> plain JSON. Leaves are lists of message strings;
    nested serializers stay dicts and list items are keyed by index
    ({"items": {"1": {"quantity": ["..."]}}}). Valid list items are omitted.
    """
    if isinstance(detail, dict):
        return {str(k): _plain_errors(v) for k, v in detail.items()}
    if isinstance(detail, list):
        if any(isinstance(v, (dict, list)) for v in detail):
            return {str(i): _plain_errors(v) for i, v in enumerate(detail) if v}
        return [str(m) for m in detail]
    return [str(detail)]


def _as_field_errors(detail) -> dict:
    if isinstance(detail, dict):
        return _plain_errors(detail)
    if isinstance(detail, list):
        return {"non_field_errors": [str(m) for m in detail]}
    return {"non_field_errors": [str(detail)]}


def api_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        detail = exc.message_dict if hasattr(exc, "error_dict") else exc.messages
        exc = exceptions.ValidationError(detail=detail)

    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled API error",
            extra={"view": view.__class__.__name__ if view else None},
        )
        return error_response(
            GENERIC_ERROR_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            "success": False,
            "error": INVALID_DATA_MESSAGE,
            "field_errors": _as_field_errors(exc.detail),
        }
        return response

    detail = response.data.get("detail") if isinstance(response.data, dict) else None
    response.data = {"success": False, "error": str(detail or exc)}
    return response
