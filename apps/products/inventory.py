"""Inventory store: locked read-modify-write access to product stock."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.db import OperationalError, connections, router, transaction  # type: ignore

from apps.bookings.exceptions import OutOfStock, ProductLocked, ProductNotFound

from .models import Product

logger = logging.getLogger(__name__)


class InventoryStore:
    """Stock counts guarded by a transaction-scoped product row lock.

    Every method expects to run inside ``transaction.atomic()``; the lock
    taken by :meth:`lock_product` is released when that block commits or
    rolls back. Concurrent lockers of the same product wait, other
    products are unaffected.
    """

    def __init__(self, lock_timeout: float | None = None, using: str | None = None):
        self.lock_timeout = lock_timeout
        self.using = using or router.db_for_write(Product)

    @classmethod
    def from_settings(cls) -> "InventoryStore":
        return cls(lock_timeout=settings.BOOKINGS.get("LOCK_TIMEOUT"))

    def lock_product(self, product_id) -> Product:
        """Return the product row locked for update.

        The returned instance is the handle passed to the other methods.
        """
        connection = connections[self.using]
        if not connection.in_atomic_block:
            raise RuntimeError("lock_product() must be called inside transaction.atomic()")

        self._apply_lock_timeout(connection)
        logger.debug("Acquiring lock on product %s", product_id)
        try:
            product = (
                Product.objects.using(self.using)
                .select_for_update()
                .filter(pk=product_id)
                .first()
            )
        except OperationalError as exc:
            if self.lock_timeout is None:
                raise
            logger.warning(
                "Timed out after %ss waiting for lock on product %s",
                self.lock_timeout,
                product_id,
            )
            raise ProductLocked() from exc

        if product is None:
            raise ProductNotFound()
        logger.debug("Locked product %s (stock=%s)", product_id, product.stock)
        return product

    def get_stock(self, handle: Product) -> int:
        return handle.stock

    def decrement_stock(self, handle: Product) -> None:
        if handle.stock <= 0:
            raise OutOfStock()
        handle.stock -= 1
        handle.save(using=self.using, update_fields=["stock", "updated_at"])

    def restore_stock(self, handle: Product) -> None:
        handle.stock += 1
        handle.save(using=self.using, update_fields=["stock", "updated_at"])

    def _apply_lock_timeout(self, connection) -> None:
        if self.lock_timeout is None:
            return
        if connection.vendor != "postgresql":
            logger.debug(
                "Lock timeout is not supported on %s, waiting without a bound",
                connection.vendor,
            )
            return
        # SET LOCAL lasts until the end of the current transaction
        with connection.cursor() as cursor:
            cursor.execute(f"SET LOCAL lock_timeout = {int(self.lock_timeout * 1000)}")


@transaction.atomic
def adjust_stock(product_id, delta: int) -> Product:
    """Change a product's stock by ``delta`` under the row lock.

    Used by sellers and the admin to restock rooms without racing
    concurrent bookings.
    """
    store = InventoryStore.from_settings()
    product = store.lock_product(product_id)
    if product.stock + delta < 0:
        raise OutOfStock()
    product.stock += delta
    product.save(update_fields=["stock", "updated_at"])
    logger.info("Adjusted stock of product %s by %s to %s", product_id, delta, product.stock)
    return product
