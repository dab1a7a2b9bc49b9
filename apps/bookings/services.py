"""Interval index: overlap queries over booked date ranges."""

from __future__ import annotations

from datetime import date

from django.db.models import Q, QuerySet  # type: ignore

from shared.domain.value_objects import DateRange

from .models import Booking


def overlap_filter(start: date, end: date) -> Q:
    """Q object matching bookings whose range overlaps [start, end].

    Boundaries are inclusive, a booking ending on ``start`` conflicts.
    """
    return Q(start_booking_date__lte=end) & Q(end_booking_date__gte=start)


def find_overlapping(
    product_id,
    start: date,
    end: date,
    *,
    exclude_booking_id=None,
) -> QuerySet:
    """Bookings on the product that overlap the period.

    The scope is product-global: bookings of every principal count, so a
    room can never be double-booked by anyone.
    """
    DateRange(start, end)  # validates start <= end

    bookings_qs = Booking.objects.filter(product_id=product_id).filter(overlap_filter(start, end))

    if exclude_booking_id is not None:
        bookings_qs = bookings_qs.exclude(pk=exclude_booking_id)

    return bookings_qs


def has_overlap(product_id, start: date, end: date, exclude_booking_id=None) -> bool:
    """True if any booking on the product overlaps [start, end]."""

    return find_overlapping(
        product_id,
        start,
        end,
        exclude_booking_id=exclude_booking_id,
    ).exists()
