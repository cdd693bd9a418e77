"""
Stockbook — Development Settings

Local development overrides. Activated by:
  DJANGO_SETTINGS_MODULE=config.settings.development

@file config/settings/development.py
"""

from .base import *  # noqa: F401, F403

DEBUG = True

ALLOWED_HOSTS = ['*']

LOGGING['loggers']['stockbook']['level'] = 'DEBUG'  # noqa: F405
