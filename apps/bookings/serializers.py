"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.products.serializers import ProductSerializer

from .models import Booking


class BookingDatesSerializer(serializers.Serializer):
    """Date range shared by create and update requests."""

    start_booking_date = serializers.DateField()
    end_booking_date = serializers.DateField()
    customer_name = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate(self, attrs):  # type: ignore
        if attrs["end_booking_date"] < attrs["start_booking_date"]:
            raise serializers.ValidationError(
                {"end_booking_date": ["End date must be on or after the start date."]}
            )
        return attrs


class BookingCreateSerializer(BookingDatesSerializer):
    """Booking request from a customer or a guest."""

    product_id = serializers.IntegerField(min_value=1)
    customer_email = serializers.EmailField(required=False, allow_blank=True)

    def validate(self, attrs):  # type: ignore
        attrs = super().validate(attrs)
        request = self.context.get("request")
        authenticated = bool(request and request.user and request.user.is_authenticated)
        if not authenticated and not attrs.get("customer_email"):
            raise serializers.ValidationError(
                {"customer_email": ["This field is required for guest bookings."]}
            )
        return attrs


class BookingUpdateSerializer(BookingDatesSerializer):
    """New date range for an existing booking."""


class BookingSerializer(serializers.ModelSerializer):
    """Booking representation returned by the API."""

    product_id = serializers.ReadOnlyField()
    user_id = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "customer_name",
            "customer_email",
            "start_booking_date",
            "end_booking_date",
            "product_id",
            "user_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingWithProductSerializer(BookingSerializer):
    """Listing variant embedding the booked product."""

    product = ProductSerializer(read_only=True)

    class Meta(BookingSerializer.Meta):
        fields = BookingSerializer.Meta.fields + ["product"]
        read_only_fields = fields
