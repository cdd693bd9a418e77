"""
Stock — Management Command: reconcile_stock

Compares every product's cached quantity with the signed sum of its
movements and prints the mismatches.

Usage::

    python manage.py reconcile_stock
    python manage.py reconcile_stock --product <uuid> --product <uuid>

Exits with status 1 when at least one mismatch is found. The command
only reports. A stock adjustment computes its delta against the cached
quantity, so it does not repair a mismatch; the cached value has to be
set back to the ledger sum by hand.

@file stock/management/commands/reconcile_stock.py
"""

from django.core.management.base import BaseCommand, CommandError

from stock.documents import as_uuid
from stock.services import StockLedger


class Command(BaseCommand):
    help = 'Check cached product quantities against the stock movement ledger.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--product', action='append', dest='products', default=None,
            help='Limit the check to this product id (repeatable).',
        )

    def handle(self, *args, **options):
        product_ids = None
        if options['products']:
            product_ids = []
            for raw in options['products']:
                product_id = as_uuid(raw)
                if product_id is None:
                    raise CommandError(f'Invalid product id: {raw}')
                product_ids.append(product_id)

        discrepancies = StockLedger().reconcile(product_ids=product_ids)
        for item in discrepancies:
            self.stdout.write(
                f'  {item.product_code}: cached={item.cached} ledger={item.ledger} '
                f'diff={item.difference}'
            )
        if discrepancies:
            raise CommandError(f'{len(discrepancies)} product(s) out of balance.', returncode=1)
        self.stdout.write(self.style.SUCCESS('All product quantities match the ledger.'))
