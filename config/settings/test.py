"""Test settings: file-backed SQLite, fast hashing, no retry backoff."""

import os
import tempfile

from .base import *  # noqa: F401,F403
from .base import LOGGING

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': os.environ.get('DB_ENGINE', 'django.db.backends.sqlite3'),
        'NAME': os.environ.get('DB_NAME', ':memory:'),
        'USER': os.environ.get('DB_USER', ''),
        'PASSWORD': os.environ.get('DB_PASSWORD', ''),
        'HOST': os.environ.get('DB_HOST', ''),
        'PORT': os.environ.get('DB_PORT', ''),
    }
}

if DATABASES['default']['ENGINE'].endswith('sqlite3'):
    # file-backed so worker threads share one database
    DATABASES['default']['OPTIONS'] = {
        'timeout': RENTAL_LOCK_TIMEOUT_MS / 1000,  # noqa: F405
        'transaction_mode': 'IMMEDIATE',
    }
    DATABASES['default']['TEST'] = {
        'NAME': os.environ.get(
            'DB_TEST_NAME',
            os.path.join(tempfile.gettempdir(), f'test_vehicle_rental_{os.getpid()}.sqlite3'),
        ),
    }

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

RENTAL_RETRY_BACKOFF_SECONDS = 0

# let pytest's caplog see application records
for _name in ('apps', 'shared'):
    LOGGING['loggers'][_name]['propagate'] = True
