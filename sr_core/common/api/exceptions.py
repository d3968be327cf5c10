# sr_core/common/api/exceptions.py
"""
Every API failure leaves as

    {"error": {"code", "message", "details", "request_id"}}

Database errors are handled here rather than by DRF: failures while
connecting become ``connection_error``, anything raised inside a write
becomes ``transaction_error``. Both are 500s and carry the driver's message.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db import DatabaseError, InterfaceError, OperationalError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Request failed."

# checked in order; first match wins
_ERROR_CODES: tuple[tuple[type | tuple[type, ...], str], ...] = (
    (ValidationError, "validation_error"),
    (NotAuthenticated, "not_authenticated"),
    (AuthenticationFailed, "authentication_failed"),
    ((PermissionDenied, DjangoPermissionDenied), "permission_denied"),
    ((Http404, NotFound), "not_found"),
)


def ensure_request_id(request) -> str:
    """Request id of ``request``, minting one on first use."""
    if request is None:
        return uuid.uuid4().hex
    rid = getattr(request, "request_id", None)
    if not rid:
        rid = request.request_id = uuid.uuid4().hex
    return rid


def error_response(request, *, code: str, message: str, details: Any = None,
                   status_code: int, headers=None) -> Response:
    body = {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": ensure_request_id(request),
        }
    }
    return Response(body, status=status_code, headers=headers)


class TransactionError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Database transaction failed."
    default_code = "transaction_error"


class DatabaseConnectionError(APIException):
    """Server down, pool exhausted or connect timeout."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Database connection unavailable."
    default_code = "connection_error"


def error_code(exc: Exception) -> str:
    for exc_types, code in _ERROR_CODES:
        if isinstance(exc, exc_types):
            return code
    return getattr(exc, "default_code", None) or "api_error"


def split_message(data) -> tuple[str, Any]:
    """
    DRF error data -> (message, details).

    A ``detail`` entry becomes the message and the remaining keys, if any,
    the details. A one-item list becomes the message. Anything else is
    reported whole under the fallback message.
    """
    if isinstance(data, dict) and "detail" in data:
        detail = data["detail"]
        if isinstance(detail, list) and len(detail) == 1:
            detail = detail[0]
        extra = {k: v for k, v in data.items() if k != "detail"}
        return str(detail), extra or None
    if isinstance(data, list) and len(data) == 1:
        return str(data[0]), None
    return FALLBACK_MESSAGE, data


def _driver_detail(exc: DatabaseError) -> str | None:
    # psycopg keeps the DETAIL line (e.g. the violating key) on the wrapped error
    diag = getattr(exc.__cause__, "diag", None)
    return getattr(diag, "message_detail", None)


def _database_failure(exc: DatabaseError, request) -> Response:
    if isinstance(exc, (OperationalError, InterfaceError)):
        kind: type[APIException] = DatabaseConnectionError
    else:
        kind = TransactionError
    logger.error("%s request_id=%s: %s", kind.default_code, ensure_request_id(request), exc)

    return error_response(
        request,
        code=kind.default_code,
        message=str(exc) or str(kind.default_detail),
        details={"detail": _driver_detail(exc)},
        status_code=kind.status_code,
    )


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")

    if isinstance(exc, DatabaseError):
        return _database_failure(exc, request)

    response = drf_exception_handler(exc, context)
    if response is None:
        logger.exception("unhandled error request_id=%s", ensure_request_id(request), exc_info=exc)
        return error_response(
            request,
            code="server_error",
            message="Unexpected server error.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    message, details = split_message(response.data)
    return error_response(
        request,
        code=error_code(exc),
        message=message,
        details=details,
        status_code=response.status_code,
        headers=response.headers,
    )
