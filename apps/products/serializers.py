"""Serializers for the products domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Product


class ProductSerializer(serializers.ModelSerializer):
    seller_id = serializers.ReadOnlyField(source="seller.id")

    class Meta:
        model = Product
        fields = [
            "id",
            "room_name",
            "room_capacity",
            "price",
            "stock",
            "description",
            "seller_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
