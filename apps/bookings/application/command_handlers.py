"""
Booking Command Handlers

The use cases of the booking domain. Each mutation runs inside one
DjangoUnitOfWork so the product stock change and the booking row are
committed or rolled back together.

Commands:
- CreateBookingCommand: Book one unit of a product for a date range
- UpdateBookingCommand: Move an existing booking to new dates
- DeleteBookingCommand: Remove a booking

Strategy for create/update:
1. Start database transaction (atomic)
2. Lock the product row with SELECT FOR UPDATE (pessimistic lock)
3. Check stock, then check the interval index for overlaps
4. Mutate stock and the booking row
5. Commit, or roll everything back on any failure
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date

import structlog
from django.contrib.auth import get_user_model
from django.db.models import QuerySet

from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import DateRange
from apps.bookings.domain.policies import StockPolicy
from apps.bookings.exceptions import (
    BookingError,
    BookingForbidden,
    BookingNotFound,
    BookingValidationError,
    DateConflict,
    OutOfStock,
    UnexpectedBookingError,
)
from apps.bookings.models import Booking
from apps.bookings.services import find_overlapping, has_overlap
from apps.products.inventory import InventoryStore
from apps.users.services import AccountProvisioner

logger = structlog.get_logger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    principal_id is the authenticated caller, None for anonymous guests.
    When customer_email is given the booking belongs to the account with
    that email, which is created as a guest account if needed.
    """
    product_id: int
    start_booking_date: date
    end_booking_date: date
    principal_id: int | None = None
    customer_name: str = ''
    customer_email: str = ''


@dataclass
class UpdateBookingCommand:
    """Command to move a booking to a new date range"""
    booking_id: int
    principal_id: int
    start_booking_date: date
    end_booking_date: date
    customer_name: str | None = None


@dataclass
class DeleteBookingCommand:
    """Command to delete a booking"""
    booking_id: int
    principal_id: int


# ===== Transaction Manager =====

class BookingTransactionManager:
    """
    Orchestrates availability check, overlap check, stock mutation and
    booking persistence as one atomic unit.

    Validation and ownership checks fail fast before a transaction is
    opened. Business-rule failures (BookingError) propagate unchanged after
    rollback; any other exception is logged and replaced by
    UnexpectedBookingError so internal details never reach clients.
    """

    def __init__(
        self,
        inventory: InventoryStore | None = None,
        accounts: AccountProvisioner | None = None,
        policy: StockPolicy | None = None,
    ):
        self.inventory = inventory or InventoryStore.from_settings()
        self.accounts = accounts or AccountProvisioner()
        self.policy = policy or StockPolicy.from_settings()

    # ----- mutations -----

    def create(self, command: CreateBookingCommand) -> Booking:
        dates = self._date_range(command.start_booking_date, command.end_booking_date)
        if not command.customer_email and command.principal_id is None:
            raise BookingValidationError("customer_email is required for guest bookings.")

        with self._transaction(
            "create",
            product_id=command.product_id,
            principal_id=command.principal_id,
            dates=str(dates),
        ) as uow:
            owner, customer_name, customer_email = self._resolve_owner(command)

            product = self.inventory.lock_product(command.product_id)
            if self.inventory.get_stock(product) <= 0:
                raise OutOfStock()

            self._ensure_no_overlap(product.pk, dates)

            self.inventory.decrement_stock(product)
            booking = Booking.objects.create(
                user=owner,
                product=product,
                customer_name=customer_name,
                customer_email=customer_email,
                start_booking_date=dates.start_date,
                end_booking_date=dates.end_date,
            )
            remaining = product.stock
            uow.on_commit(
                lambda: logger.info(
                    "booking_created",
                    booking_id=booking.pk,
                    product_id=product.pk,
                    user_id=owner.pk,
                    stock_left=remaining,
                )
            )

        return booking

    def update(self, command: UpdateBookingCommand) -> Booking:
        dates = self._date_range(command.start_booking_date, command.end_booking_date)
        booking = self._owned_booking(command.booking_id, command.principal_id)

        with self._transaction(
            "update",
            booking_id=booking.pk,
            product_id=booking.product_id,
            dates=str(dates),
        ) as uow:
            product = self.inventory.lock_product(booking.product_id)

            # The booking may have been deleted while we waited for the lock
            booking = Booking.objects.filter(pk=booking.pk).first()
            if booking is None:
                raise BookingNotFound()

            if self.policy.consume_on_update and self.inventory.get_stock(product) <= 0:
                raise OutOfStock()

            self._ensure_no_overlap(product.pk, dates, exclude_booking_id=booking.pk)

            if self.policy.consume_on_update:
                self.inventory.decrement_stock(product)

            booking.start_booking_date = dates.start_date
            booking.end_booking_date = dates.end_date
            update_fields = ["start_booking_date", "end_booking_date", "updated_at"]
            if command.customer_name:
                booking.customer_name = command.customer_name
                update_fields.append("customer_name")
            booking.save(update_fields=update_fields)

            uow.on_commit(
                lambda: logger.info(
                    "booking_updated",
                    booking_id=booking.pk,
                    product_id=product.pk,
                    dates=str(dates),
                )
            )

        return booking

    def delete(self, command: DeleteBookingCommand) -> None:
        booking = self._owned_booking(command.booking_id, command.principal_id)

        with self._transaction(
            "delete",
            booking_id=booking.pk,
            product_id=booking.product_id,
        ) as uow:
            if self.policy.restore_on_delete:
                product = self.inventory.lock_product(booking.product_id)
                self.inventory.restore_stock(product)

            deleted, _ = Booking.objects.filter(pk=booking.pk).delete()
            if not deleted:
                raise BookingNotFound()

            booking_id = booking.pk
            uow.on_commit(lambda: logger.info("booking_deleted", booking_id=booking_id))

    # ----- reads -----

    def get(self, booking_id, principal_id) -> Booking:
        booking = (
            Booking.objects.select_related("product")
            .filter(pk=booking_id, user_id=principal_id)
            .first()
        )
        if booking is None:
            raise BookingNotFound()
        return booking

    def list_for(self, principal_id) -> QuerySet:
        return Booking.objects.select_related("product").filter(user_id=principal_id)

    # ----- helpers -----

    @contextmanager
    def _transaction(self, operation: str, **context):
        log = logger.bind(operation=operation, **context)
        try:
            with DjangoUnitOfWork() as uow:
                yield uow
        except BookingError as exc:
            log.warning("booking_rejected", code=exc.default_code)
            raise
        except Exception as exc:
            log.exception("booking_transaction_failed", error=repr(exc))
            raise UnexpectedBookingError() from exc

    @staticmethod
    def _date_range(start: date, end: date) -> DateRange:
        try:
            return DateRange(start, end)
        except ValueError as exc:
            raise BookingValidationError(
                "end_booking_date must be on or after start_booking_date."
            ) from exc

    @staticmethod
    def _owned_booking(booking_id, principal_id) -> Booking:
        booking = Booking.objects.filter(pk=booking_id).first()
        if booking is None:
            raise BookingNotFound()
        if not booking.is_owned_by(principal_id):
            raise BookingForbidden()
        return booking

    def _resolve_owner(self, command: CreateBookingCommand):
        if command.customer_email:
            owner = self.accounts.resolve(command.customer_email, command.customer_name)
        else:
            owner = get_user_model().objects.filter(pk=command.principal_id).first()
            if owner is None:
                raise BookingValidationError("Unknown principal.")

        customer_name = command.customer_name or owner.display_name
        customer_email = command.customer_email or owner.email
        return owner, customer_name, customer_email

    @staticmethod
    def _ensure_no_overlap(product_id, dates: DateRange, exclude_booking_id=None) -> None:
        if not has_overlap(product_id, dates.start_date, dates.end_date, exclude_booking_id):
            return
        conflicting = list(
            find_overlapping(
                product_id,
                dates.start_date,
                dates.end_date,
                exclude_booking_id=exclude_booking_id,
            ).values_list("pk", flat=True)[:5]
        )
        logger.info(
            "booking_date_conflict",
            product_id=product_id,
            dates=str(dates),
            conflicting_bookings=conflicting,
        )
        raise DateConflict()
