"""Error taxonomy for booking workflows and its HTTP rendering."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Base class for failures reported to API clients."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "booking_error"
    default_detail = "The booking request could not be processed."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class BookingValidationError(BookingError):
    default_code = "validation_error"
    default_detail = "Invalid booking request."


class BookingNotFound(BookingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "not_found"
    default_detail = "Booking not found."


class ProductNotFound(BookingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "product_not_found"
    default_detail = "Product not found."


class BookingForbidden(BookingError):
    status_code = status.HTTP_403_FORBIDDEN
    default_code = "forbidden"
    default_detail = "Unauthorized"


class OutOfStock(BookingError):
    default_code = "out_of_stock"
    default_detail = "Product is out of stock."


class DateConflict(BookingError):
    default_code = "date_conflict"
    default_detail = "Product is already booked for the selected date range."


class ProductLocked(BookingError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "product_locked"
    default_detail = "Product is busy with another booking, please retry."


class UnexpectedBookingError(BookingError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "unexpected"
    default_detail = "Something went wrong, please try again later."


def booking_exception_handler(exc, context):
    """DRF exception handler that renders :class:`BookingError`.

    Anything else goes through DRF's default handler.
    """
    if isinstance(exc, BookingError):
        view = context.get("view")
        logger.info(
            "Booking request rejected in %s: %s",
            view.__class__.__name__ if view else "unknown view",
            exc.default_code,
        )
        return Response(
            {"error": exc.detail, "code": exc.default_code},
            status=exc.status_code,
        )
    return exception_handler(exc, context)
