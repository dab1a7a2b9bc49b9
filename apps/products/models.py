"""Product (room) models."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Product(models.Model):
    """A bookable room type with a finite stock of units."""

    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    room_name = models.CharField(max_length=255)
    room_capacity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price = models.PositiveIntegerField(help_text=_("Price in currency minor units."))
    stock = models.PositiveIntegerField(
        default=0,
        help_text=_("Number of interchangeable units still available for booking."),
    )
    description = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Product")
        verbose_name_plural = _("Products")
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="product_stock_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(room_capacity__gte=1),
                name="product_capacity_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.room_name} (stock {self.stock})"

    @property
    def in_stock(self) -> bool:
        return self.stock > 0
