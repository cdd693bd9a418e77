"""
Catalog — Management Command: seed_warehouses

Creates the default and production warehouses named in settings so
documents without an explicit warehouse have somewhere to go.

Usage::

    python manage.py seed_warehouses

Idempotent: safe to re-run (uses get_or_create).

@file catalog/management/commands/seed_warehouses.py
"""

from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction

from catalog.models import Warehouse


class Command(BaseCommand):
    help = 'Seed the default and production warehouses.'

    @transaction.atomic
    def handle(self, *args, **options):
        codes = {
            settings.DEFAULT_WAREHOUSE_CODE: 'Main warehouse',
            settings.PRODUCTION_WAREHOUSE_CODE: 'Production',
        }
        for code, name in codes.items():
            _, created = Warehouse.objects.get_or_create(code=code, defaults={'name': name})
            label = 'Created' if created else 'Exists'
            self.stdout.write(f'  {label}: {code}')
        self.stdout.write(self.style.SUCCESS('Warehouses ready.'))
