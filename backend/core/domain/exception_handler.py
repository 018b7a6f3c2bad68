"""
core.domain.exception_handler — DRF-compatible global exception handler.

Maps domain exceptions from ``core.domain.exceptions`` to proper
DRF ``Response`` objects so that views don't need per-endpoint
try/except boilerplate.  Django's request-level rejections (an
oversized or malformed body) become 413 / 400.  Anything else that is
neither a DRF nor a domain exception is logged with its traceback
and answered with a generic 500 body; the raw error text never
reaches the client.

Register in ``settings.py``::

    REST_FRAMEWORK = {
        ...
        'EXCEPTION_HANDLER': 'core.domain.exception_handler.domain_exception_handler',
    }
"""

from __future__ import annotations

import logging

from django.core.exceptions import RequestDataTooBig, SuspiciousOperation
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_default_handler

from core.domain.exceptions import (
    AuthenticationError,
    Conflict,
    DomainError,
    NotFound,
    PermissionDenied,
    ReferentialError,
)

logger = logging.getLogger(__name__)

# Domain exception → HTTP status code
_STATUS_MAP: dict[type, int] = {
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    PermissionDenied:    status.HTTP_403_FORBIDDEN,
    NotFound:            status.HTTP_404_NOT_FOUND,
    Conflict:            status.HTTP_409_CONFLICT,
    ReferentialError:    status.HTTP_400_BAD_REQUEST,
    DomainError:         status.HTTP_400_BAD_REQUEST,  # catch-all base class last
}

# Request-level rejections raised by Django while reading the body
_REQUEST_ERROR_MAP: dict[type, tuple[int, str, str]] = {
    RequestDataTooBig: (
        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, "PAYLOAD_TOO_LARGE", "Request body is too large.",
    ),
    SuspiciousOperation: (
        status.HTTP_400_BAD_REQUEST, "BAD_REQUEST", "Malformed request.",
    ),  # base class of RequestDataTooBig, keep last
}

GENERIC_ERROR_MESSAGE = "Internal server error."


def domain_exception_handler(exc: Exception, context: dict) -> Response | None:
    """
    DRF exception handler that also handles ``core.domain.exceptions``.

    The default DRF handler is called first.  If it returns ``None``
    (meaning DRF doesn't recognise the exception), we check whether
    it's one of our domain exceptions and return an appropriate response.
    """
    # Let DRF handle its own exceptions (ValidationError, AuthN, etc.)
    response = drf_default_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    view_name = type(view).__name__ if view is not None else "unknown"

    for exc_class, (status_code, code, message) in _REQUEST_ERROR_MAP.items():
        if isinstance(exc, exc_class):
            logger.warning("Rejected request in %s: %s", view_name, exc)
            return Response({"detail": message, "code": code}, status=status_code)

    # Check domain exceptions, most specific first
    for exc_class, status_code in _STATUS_MAP.items():
        if isinstance(exc, exc_class):
            logger.warning(
                "Domain exception [%s] in %s: %s",
                type(exc).__name__,
                view_name,
                exc,
            )
            return Response(
                {"detail": str(exc), "code": exc.code},
                status=status_code,
            )

    logger.exception("Unhandled exception in %s", view_name, exc_info=exc)
    return Response(
        {"detail": GENERIC_ERROR_MESSAGE},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
