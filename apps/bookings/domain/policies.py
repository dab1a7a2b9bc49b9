"""
Stock Policy

Legacy stock accounting kept behind explicit switches:

- consume_on_update: every successful update takes another unit of stock,
  even though the booking still holds only one room.
- restore_on_delete: deleting a booking gives its unit back. Off by default,
  deleted bookings keep their unit consumed.

Flip these in settings.BOOKINGS once the legacy data has been reconciled.
"""

from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class StockPolicy:
    consume_on_update: bool = True
    restore_on_delete: bool = False

    @classmethod
    def from_settings(cls) -> 'StockPolicy':
        config = getattr(settings, 'BOOKINGS', {})
        return cls(
            consume_on_update=config.get('CONSUME_STOCK_ON_UPDATE', True),
            restore_on_delete=config.get('RESTORE_STOCK_ON_DELETE', False),
        )
