"""Admin registration for products."""

from __future__ import annotations

from django.contrib import admin, messages

from apps.bookings.exceptions import BookingError

from .inventory import adjust_stock
from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("room_name", "room_capacity", "price", "stock", "seller", "created_at")
    list_filter = ("room_capacity",)
    search_fields = ("room_name", "description", "seller__email")
    readonly_fields = ("created_at", "updated_at")
    actions = ("add_one_unit", "remove_one_unit")

    @admin.action(description="Add one unit of stock")
    def add_one_unit(self, request, queryset):
        for product in queryset:
            adjust_stock(product.pk, 1)
        self.message_user(request, f"Restocked {queryset.count()} product(s).")

    @admin.action(description="Remove one unit of stock")
    def remove_one_unit(self, request, queryset):
        for product in queryset:
            try:
                adjust_stock(product.pk, -1)
            except BookingError as exc:
                self.message_user(request, f"{product}: {exc.detail}", level=messages.WARNING)
