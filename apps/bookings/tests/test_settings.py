"""Booking-related settings resolved from the environment."""

import importlib
import os
from unittest import mock

from django.test import SimpleTestCase

_SETTINGS_ENV = (
    "DB_ENGINE",
    "BOOKING_LOCK_TIMEOUT",
    "SQLITE_BUSY_TIMEOUT",
)


def _load(module: str, **env):
    """Re-evaluate ``config.settings.<module>`` against the given environment."""
    with mock.patch.dict(os.environ):
        for name in _SETTINGS_ENV:
            os.environ.pop(name, None)
        os.environ.update(env)
        importlib.reload(importlib.import_module("config.settings.base"))
        return importlib.reload(importlib.import_module(f"config.settings.{module}"))


class DatabaseSettingsTests(SimpleTestCase):
    def test_sqlite_takes_write_lock_on_begin(self) -> None:
        base = _load("base")

        options = base.DATABASES["default"]["OPTIONS"]
        self.assertEqual(options["transaction_mode"], "IMMEDIATE")
        self.assertEqual(options["timeout"], 20.0)

    def test_sqlite_busy_timeout_from_env(self) -> None:
        base = _load("base", SQLITE_BUSY_TIMEOUT="3.5")

        self.assertEqual(base.DATABASES["default"]["OPTIONS"]["timeout"], 3.5)

    def test_postgres_gets_no_sqlite_options(self) -> None:
        base = _load("base", DB_ENGINE="django.db.backends.postgresql")

        self.assertNotIn("OPTIONS", base.DATABASES["default"])

    def test_test_settings_use_file_backed_sqlite(self) -> None:
        test = _load("test")

        self.assertTrue(test.DATABASES["default"]["TEST"]["NAME"].endswith("test_db.sqlite3"))


class LockTimeoutSettingsTests(SimpleTestCase):
    def test_prod_blocks_until_available_by_default(self) -> None:
        prod = _load("prod")

        self.assertIsNone(prod.BOOKINGS["LOCK_TIMEOUT"])

    def test_prod_lock_timeout_from_env(self) -> None:
        prod = _load("prod", BOOKING_LOCK_TIMEOUT="5")

        self.assertEqual(prod.BOOKINGS["LOCK_TIMEOUT"], 5.0)
