"""
Unit of Work Pattern

Manages database transactions and ensures that post-commit callbacks
run only after a successful commit.
"""

from abc import ABC, abstractmethod
from typing import Callable, List
import logging

from django.db import transaction

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""
        pass

    @abstractmethod
    def on_commit(self, callback: Callable[[], None]):
        """Register a callback to run once the transaction is committed"""
        pass


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Everything executed inside the ``with`` block shares one
    ``transaction.atomic()`` block, so row locks taken with
    ``select_for_update`` are held until the block exits.

    Usage:
        with DjangoUnitOfWork() as uow:
            product = inventory.lock_product(product_id)
            inventory.decrement_stock(product)
            booking = Booking.objects.create(...)
            uow.on_commit(lambda: logger.info("created %s", booking.pk))
            # Transaction commits here
        # Callbacks run after commit
    """

    def __init__(self, using: str | None = None):
        self._using = using
        self._callbacks: List[Callable[[], None]] = []
        self._transaction = None

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic(using=self._using)
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def commit(self):
        """
        Schedule post-commit callbacks

        Callbacks are handed to Django's transaction.on_commit() so they
        only fire once the outermost transaction has been committed.
        """
        logger.debug(f"Committing transaction with {len(self._callbacks)} callbacks")

        callbacks = self._callbacks.copy()
        self._callbacks.clear()

        for callback in callbacks:
            transaction.on_commit(callback, using=self._using)

    def rollback(self):
        """Rollback changes and discard callbacks"""
        logger.warning(f"Rolling back transaction, discarding {len(self._callbacks)} callbacks")
        self._callbacks.clear()

    def on_commit(self, callback: Callable[[], None]):
        self._callbacks.append(callback)
