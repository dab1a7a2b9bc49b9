"""Test settings for the room booking backend.

Uses a file-backed SQLite test database unless DB_ENGINE points elsewhere,
so the threaded booking races share one database. Also sets a fast password
hasher and quiet logging.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

if DATABASES['default']['ENGINE'] == 'django.db.backends.sqlite3':  # noqa: F405
    DATABASES['default']['TEST'] = {  # noqa: F405
        'NAME': str(BASE_DIR / 'test_db.sqlite3'),  # noqa: F405
    }

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    **STORAGES,  # noqa: F405
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

LOGGING['root']['level'] = 'CRITICAL'  # noqa: F405
for _logger in LOGGING['loggers'].values():  # noqa: F405
    _logger['level'] = 'CRITICAL'
