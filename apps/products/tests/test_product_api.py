"""Tests for the read-only product catalogue."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.products.models import Product
from apps.users.models import User


class ProductAPITests(APITestCase):
    def setUp(self) -> None:
        self.seller = User.objects.create_user(
            email="seller@example.com",
            password="SellerPass123",
            role=User.RoleChoices.SELLER,
        )
        self.product = Product.objects.create(
            seller=self.seller,
            room_name="Garden room",
            room_capacity=3,
            price=15000,
            stock=4,
        )

    def test_anyone_can_list_products(self) -> None:
        response = self.client.get(reverse("product-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["stock"], 4)
        self.assertEqual(response.data[0]["seller_id"], self.seller.id)

    def test_product_detail_and_missing(self) -> None:
        response = self.client.get(reverse("product-detail", args=[self.product.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["room_name"], "Garden room")

        missing = self.client.get(reverse("product-detail", args=[9999]))
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)

    def test_catalogue_is_read_only(self) -> None:
        self.client.force_authenticate(self.seller)
        response = self.client.post(reverse("product-list"), {"room_name": "New"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
