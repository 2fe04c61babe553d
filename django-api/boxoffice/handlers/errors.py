"""Map domain errors to HTTP responses.

Registered as the DRF ``EXCEPTION_HANDLER``. Serializer validation failures
are reshaped into the same ``VALIDATION_ERROR`` body the services raise;
anything else falls through to the framework default.
"""

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from boxoffice.domain.errors import (
    DomainError,
    ErrorCode,
    SeatUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TIER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EMPTY_SELECTION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_BOOKING_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SEAT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BOOKING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PAYMENT_INTENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.SEAT_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorCode.LOCKED: status.HTTP_423_LOCKED,
}


def domain_error_response(exc: DomainError) -> Response:
    body = {"code": exc.code.value, "message": exc.message}
    if isinstance(exc, ValidationError):
        body["fields"] = exc.fields
    if isinstance(exc, SeatUnavailableError):
        body["seatIds"] = exc.seat_ids
    return Response(body, status=STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST))


def _flatten(detail) -> dict[str, list[str]]:
    if isinstance(detail, dict):
        return {
            str(field): [str(m) for m in (msgs if isinstance(msgs, list) else [msgs])]
            for field, msgs in detail.items()
        }
    if isinstance(detail, list):
        return {"non_field_errors": [str(m) for m in detail]}
    return {"non_field_errors": [str(detail)]}


def exception_handler(exc, context):
    if isinstance(exc, exceptions.ValidationError):
        exc = ValidationError(_flatten(exc.detail))
    if isinstance(exc, DomainError):
        logger.info("Request rejected: %s", exc)
        return domain_error_response(exc)
    return drf_exception_handler(exc, context)
