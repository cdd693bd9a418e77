"""
Stockbook — Test Settings

Used by pytest (see [tool.pytest.ini_options] in pyproject.toml).
SQLite in memory, local-memory cache, Celery tasks run inline.

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

SECRET_KEY = 'test-secret-key'

DATABASES = {
    'default': env.db('TEST_DATABASE_URL', default='sqlite://:memory:'),  # noqa: F405
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

DOCUMENT_SERIES = {}
DEFAULT_WAREHOUSE_CODE = 'MAIN'
PRODUCTION_WAREHOUSE_CODE = 'MAIN'

LOGGING['loggers']['stockbook']['propagate'] = True  # noqa: F405
