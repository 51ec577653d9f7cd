from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    MethodNotAllowed,
    NotFound,
    ParseError,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

SERVER_ERROR_MESSAGE = "Something went wrong"

# Codes for the DRF exceptions the storefront can raise; anything else falls
# back to the status class.
STATUS_CODE_DEFAULTS: Dict[int, Tuple[str, str]] = {
    status.HTTP_400_BAD_REQUEST: ("VALIDATION_ERROR", "Validation failed"),
    status.HTTP_404_NOT_FOUND: ("NOT_FOUND", "Resource not found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("METHOD_NOT_ALLOWED", "Method not allowed"),
    status.HTTP_406_NOT_ACCEPTABLE: ("NOT_ACCEPTABLE", "Not acceptable"),
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: (
        "UNSUPPORTED_MEDIA_TYPE",
        "Unsupported media type",
    ),
}


class ApplicationError(Exception):
    """
    Domain error raised by services and rendered through ``error_response``.

    Args:
        code: Machine readable error code; its status comes from ERROR_STATUS_MAP
            unless ``status_code`` is given.
        message: Human readable explanation, shown to the shopper as-is.
        details: Optional structured context for clients.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details

    def to_response(self) -> Response:
        return error_response(
            self.code, self.message, self.details, http_status=self.status_code
        )


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """DRF ``EXCEPTION_HANDLER``: every error leaves the API in the same envelope."""

    bound_logger = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        bound_logger.info("Handled application error", code=exc.code)
        return exc.to_response()

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(_django_validation_detail(exc))

    response = drf_exception_handler(exc, context)
    if response is None:
        bound_logger.exception("Unhandled exception bubbled to global handler")
        return error_response(
            "SERVER_ERROR",
            SERVER_ERROR_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code, message, details = _describe(exc, response.data, response.status_code)
    bound_logger.info("Converted API exception", code=code, status=response.status_code)
    return error_response(
        code,
        message,
        details,
        http_status=response.status_code,
        headers=dict(response.headers) if response.headers else None,
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view is not None:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _django_validation_detail(exc: DjangoValidationError) -> Any:
    if hasattr(exc, "message_dict"):
        return exc.message_dict
    return list(exc.messages)


def _describe(exc: Exception, payload: Any, status_code: int) -> Tuple[str, str, Any]:
    if isinstance(exc, (ValidationError, ParseError)):
        fallback = "Validation failed" if isinstance(exc, ValidationError) else "Malformed request"
        return "VALIDATION_ERROR", _message(payload, fallback), payload
    if isinstance(exc, (NotFound, Http404)):
        return "NOT_FOUND", _message(payload, "Resource not found"), None
    if isinstance(exc, MethodNotAllowed):
        return "METHOD_NOT_ALLOWED", _message(payload, "Method not allowed"), None

    if status_code >= 500:
        return "SERVER_ERROR", SERVER_ERROR_MESSAGE, None
    code, fallback = STATUS_CODE_DEFAULTS.get(status_code, ("UNKNOWN_ERROR", "Request failed"))
    return code, _message(payload, fallback), None


def _message(payload: Any, fallback: str) -> str:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return fallback


__all__ = ["ApplicationError", "global_exception_handler"]
