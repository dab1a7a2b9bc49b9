"""Tests for the inventory store."""

from __future__ import annotations

from django.db import transaction
from django.test import SimpleTestCase, TestCase

from apps.bookings.exceptions import OutOfStock, ProductNotFound
from apps.products.inventory import InventoryStore, adjust_stock
from apps.products.models import Product


class InventoryStoreTests(TestCase):
    def setUp(self) -> None:
        self.product = Product.objects.create(room_name="Studio", room_capacity=2, price=8000, stock=2)
        self.store = InventoryStore()

    def test_decrement_until_empty(self) -> None:
        with transaction.atomic():
            handle = self.store.lock_product(self.product.pk)
            self.store.decrement_stock(handle)
            self.store.decrement_stock(handle)
            self.assertEqual(self.store.get_stock(handle), 0)
            with self.assertRaises(OutOfStock):
                self.store.decrement_stock(handle)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 0)

    def test_restore_stock(self) -> None:
        with transaction.atomic():
            handle = self.store.lock_product(self.product.pk)
            self.store.restore_stock(handle)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 3)

    def test_missing_product(self) -> None:
        with transaction.atomic():
            with self.assertRaises(ProductNotFound):
                self.store.lock_product(123456)

    def test_lock_timeout_is_ignored_without_postgres(self) -> None:
        store = InventoryStore(lock_timeout=0.5)
        with transaction.atomic():
            handle = store.lock_product(self.product.pk)
        self.assertEqual(handle.pk, self.product.pk)

    def test_adjust_stock(self) -> None:
        self.assertEqual(adjust_stock(self.product.pk, 3).stock, 5)
        self.assertEqual(adjust_stock(self.product.pk, -5).stock, 0)
        with self.assertRaises(OutOfStock):
            adjust_stock(self.product.pk, -1)


class InventoryStoreOutsideTransactionTests(SimpleTestCase):
    def test_lock_requires_transaction(self) -> None:
        with self.assertRaises(RuntimeError):
            InventoryStore(using="default").lock_product(1)
