"""Tests for the interval index overlap queries."""

from __future__ import annotations

from datetime import date

from django.test import TestCase

from apps.bookings.models import Booking
from apps.bookings.services import find_overlapping, has_overlap
from apps.products.models import Product
from apps.users.models import User


class IntervalIndexTests(TestCase):
    def setUp(self) -> None:
        self.alice = User.objects.create_user(email="alice@example.com", password="pass")
        self.bob = User.objects.create_user(email="bob@example.com", password="pass")
        self.room = Product.objects.create(room_name="Single", room_capacity=1, price=5000, stock=10)
        self.other_room = Product.objects.create(room_name="Suite", room_capacity=4, price=30000, stock=10)
        self.booking = self._book(self.room, self.alice, date(2024, 1, 10), date(2024, 1, 15))

    def _book(self, product, user, start, end) -> Booking:
        return Booking.objects.create(
            product=product,
            user=user,
            customer_name=user.email,
            customer_email=user.email,
            start_booking_date=start,
            end_booking_date=end,
        )

    def test_overlap_cases(self) -> None:
        cases = [
            ((date(2024, 1, 1), date(2024, 1, 9)), False),
            ((date(2024, 1, 1), date(2024, 1, 10)), True),
            ((date(2024, 1, 12), date(2024, 1, 13)), True),
            ((date(2024, 1, 5), date(2024, 1, 20)), True),
            ((date(2024, 1, 15), date(2024, 1, 16)), True),
            ((date(2024, 1, 16), date(2024, 1, 20)), False),
        ]
        for (start, end), expected in cases:
            with self.subTest(start=start, end=end):
                self.assertEqual(has_overlap(self.room.pk, start, end), expected)

    def test_scope_is_product_global(self) -> None:
        self._book(self.room, self.bob, date(2024, 2, 1), date(2024, 2, 3))

        self.assertTrue(has_overlap(self.room.pk, date(2024, 2, 2), date(2024, 2, 2)))
        self.assertFalse(has_overlap(self.other_room.pk, date(2024, 2, 2), date(2024, 2, 2)))

    def test_excluded_booking_is_ignored(self) -> None:
        self.assertFalse(
            has_overlap(
                self.room.pk,
                date(2024, 1, 10),
                date(2024, 1, 15),
                exclude_booking_id=self.booking.pk,
            )
        )

    def test_find_overlapping_lists_conflicts(self) -> None:
        second = self._book(self.room, self.bob, date(2024, 1, 16), date(2024, 1, 18))

        overlapping = find_overlapping(self.room.pk, date(2024, 1, 14), date(2024, 1, 16))

        self.assertEqual(set(overlapping), {self.booking, second})

    def test_inverted_range_raises(self) -> None:
        with self.assertRaises(ValueError):
            has_overlap(self.room.pk, date(2024, 1, 20), date(2024, 1, 10))
