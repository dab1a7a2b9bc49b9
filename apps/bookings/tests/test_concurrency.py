"""Concurrent booking tests.

Two threads race for the same product on separate connections. PostgreSQL
serialises them on the product row lock, SQLite on the write lock taken by
BEGIN IMMEDIATE; either way the loser sees the winner's committed booking.
"""

from __future__ import annotations

import threading
from datetime import date

from django.db import connection
from django.test import TransactionTestCase

from apps.bookings.application.command_handlers import BookingTransactionManager, CreateBookingCommand
from apps.bookings.exceptions import BookingError, DateConflict, OutOfStock
from apps.bookings.models import Booking
from apps.products.models import Product
from apps.users.models import User


class ConcurrentBookingTests(TransactionTestCase):
    def setUp(self) -> None:
        self.users = [
            User.objects.create_user(email=f"racer{i}@example.com", password="pass") for i in range(2)
        ]

    def _race(self, product: Product, ranges) -> list:
        barrier = threading.Barrier(len(ranges))
        results: list = [None] * len(ranges)

        def worker(index: int, start: date, end: date) -> None:
            try:
                barrier.wait()
                results[index] = BookingTransactionManager().create(
                    CreateBookingCommand(
                        product_id=product.pk,
                        start_booking_date=start,
                        end_booking_date=end,
                        principal_id=self.users[index].pk,
                    )
                )
            except BookingError as exc:
                results[index] = exc
            finally:
                connection.close()

        threads = [
            threading.Thread(target=worker, args=(i, start, end)) for i, (start, end) in enumerate(ranges)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return results

    def test_overlapping_creates_one_wins(self) -> None:
        product = Product.objects.create(room_name="Loft", room_capacity=2, price=10000, stock=5)

        results = self._race(
            product,
            [(date(2024, 1, 1), date(2024, 1, 5)), (date(2024, 1, 3), date(2024, 1, 8))],
        )

        winners = [r for r in results if isinstance(r, Booking)]
        losers = [r for r in results if isinstance(r, DateConflict)]
        self.assertEqual(len(winners), 1, results)
        self.assertEqual(len(losers), 1, results)
        product.refresh_from_db()
        self.assertEqual(product.stock, 4)

    def test_last_unit_goes_to_one_request(self) -> None:
        product = Product.objects.create(room_name="Attic", room_capacity=1, price=4000, stock=1)

        results = self._race(
            product,
            [(date(2024, 1, 1), date(2024, 1, 2)), (date(2024, 6, 1), date(2024, 6, 2))],
        )

        self.assertEqual(len([r for r in results if isinstance(r, Booking)]), 1, results)
        self.assertEqual(len([r for r in results if isinstance(r, OutOfStock)]), 1, results)
        product.refresh_from_db()
        self.assertEqual(product.stock, 0)
