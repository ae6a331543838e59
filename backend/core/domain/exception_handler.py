"""
core.domain.exception_handler — DRF-compatible global exception handler.

Maps domain exceptions from ``core.domain.exceptions`` and DRF's own
exceptions to one JSON envelope so that views don't need per-endpoint
try/except boilerplate::

    {"message": "Case is already closed.", "error": "AlreadyClosed"}

Validation failures additionally carry the per-field details::

    {"message": "...", "error": "MissingField", "fields": {"item": [...]}}

Register in ``settings.py``::

    REST_FRAMEWORK = {
        ...
        'EXCEPTION_HANDLER': 'core.domain.exception_handler.domain_exception_handler',
    }
"""

from __future__ import annotations

import logging

from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_default_handler

from core.domain.exceptions import (
    AuthenticationFailed,
    Conflict,
    DomainError,
    NotFound,
    PermissionDenied,
    UpstreamError,
)

logger = logging.getLogger(__name__)

# Domain exception → HTTP status code (most specific first)
_STATUS_MAP: dict[type, int] = {
    AuthenticationFailed: 401,
    PermissionDenied:     403,
    NotFound:             404,
    Conflict:             409,
    UpstreamError:        500,
    DomainError:          400,  # catch-all base class last
}

# DRF exception → error code exposed to clients (most specific first)
_DRF_CODE_MAP: dict[type, str] = {
    drf_exceptions.NotAuthenticated:     "Unauthenticated",
    drf_exceptions.AuthenticationFailed: "InvalidToken",
    drf_exceptions.PermissionDenied:     "Forbidden",
    drf_exceptions.NotFound:             "NotFound",
    drf_exceptions.ValidationError:      "ValidationError",
}

# Serializer error codes that mean "the client left a field out"
_MISSING_FIELD_CODES = {"required", "blank", "null"}

_INTERNAL_ERROR_MESSAGE = "Internal server error."


def _flatten_codes(codes) -> set[str]:
    if isinstance(codes, dict):
        return set().union(*(_flatten_codes(v) for v in codes.values())) if codes else set()
    if isinstance(codes, (list, tuple)):
        return set().union(*(_flatten_codes(v) for v in codes)) if codes else set()
    return {str(codes)}


def _error_code_for(exc: drf_exceptions.APIException) -> str:
    if isinstance(exc, drf_exceptions.ValidationError):
        if _flatten_codes(exc.get_codes()) & _MISSING_FIELD_CODES:
            return "MissingField"
        return "ValidationError"
    for exc_class, code in _DRF_CODE_MAP.items():
        if isinstance(exc, exc_class):
            return code
    return exc.default_code


def _message_for(exc: drf_exceptions.APIException) -> str:
    detail = exc.detail
    if isinstance(exc, drf_exceptions.ValidationError):
        return "Invalid input."
    # simplejwt's InvalidToken carries a dict with a nested "detail"
    if isinstance(detail, dict):
        return str(detail.get("detail", exc.default_detail))
    if isinstance(detail, list):
        return str(detail[0]) if detail else str(exc.default_detail)
    return str(detail)


def domain_exception_handler(exc: Exception, context: dict) -> Response | None:
    """
    DRF exception handler that also handles ``core.domain.exceptions``.

    The default DRF handler is called first so headers such as
    ``WWW-Authenticate`` are preserved; its body is then rewritten into
    the ``{"message", "error"}`` envelope.  Domain exceptions are mapped
    through ``_STATUS_MAP``.  Anything else is logged and answered with
    a generic 500 that leaks no internals.
    """
    response = drf_default_handler(exc, context)
    if response is not None:
        if isinstance(exc, drf_exceptions.APIException):
            body = {"message": _message_for(exc), "error": _error_code_for(exc)}
            if isinstance(exc, drf_exceptions.ValidationError):
                body["fields"] = response.data
        else:
            # Django's Http404 / PermissionDenied, already translated by DRF
            body = {
                "message": str(response.data.get("detail", "")),
                "error": "NotFound" if response.status_code == 404 else "Forbidden",
            }
        response.data = body
        return response

    for exc_class, status_code in _STATUS_MAP.items():
        if isinstance(exc, exc_class):
            logger.warning(
                "Domain exception [%s/%s] in %s: %s",
                exc_class.__name__,
                exc.code,
                context.get("view", "unknown"),
                exc,
            )
            return Response(
                {"message": exc.message, "error": exc.code},
                status=status_code,
            )

    logger.exception(
        "Unhandled exception in %s", context.get("view", "unknown"), exc_info=exc
    )
    return Response(
        {"message": _INTERNAL_ERROR_MESSAGE},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
