"""DRF exception handler that turns domain errors into HTTP responses."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    TransientError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    TransientError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: DomainError) -> int:
    for error_class in type(exc).__mro__:
        if error_class in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_class]
    return status.HTTP_400_BAD_REQUEST


def domain_exception_handler(exc, context):  # type: ignore
    if not isinstance(exc, DomainError):
        return exception_handler(exc, context)

    http_status = status_for(exc)
    view = context.get("view")
    logger.info(
        "%s in %s: %s",
        exc.__class__.__name__,
        view.__class__.__name__ if view else "unknown view",
        exc.message,
    )
    headers = {"Retry-After": "1"} if isinstance(exc, TransientError) else None
    return Response(
        {"detail": exc.message, "code": exc.code},
        status=http_status,
        headers=headers,
    )
