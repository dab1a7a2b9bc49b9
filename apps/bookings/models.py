"""Booking domain models."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange


class Booking(models.Model):
    """Reservation of one stock unit of a product for a date range."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    customer_name = models.CharField(max_length=255)
    customer_email = models.EmailField()
    start_booking_date = models.DateField()
    end_booking_date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_booking_date__gte=models.F("start_booking_date")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(
                fields=["product", "start_booking_date", "end_booking_date"],
                name="booking_product_dates_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for product {self.product_id} ({self.dates})"

    @property
    def dates(self) -> DateRange:
        return DateRange(self.start_booking_date, self.end_booking_date)

    def is_owned_by(self, principal_id) -> bool:
        return self.user_id is not None and str(self.user_id) == str(principal_id)
