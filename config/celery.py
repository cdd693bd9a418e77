"""
Stockbook — Celery Application

Workers pick up tasks from every installed app's tasks.py. Periodic
schedules (nightly stock reconciliation) are stored in the database
by django-celery-beat.

@file config/celery.py
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

app = Celery('stockbook')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
