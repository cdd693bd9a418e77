"""
Stock — Celery Tasks

Nightly check that every product's cached quantity still equals the
sum of its movements. Schedule it through django-celery-beat
(periodic task ``stock.reconcile_stock``).

@file stock/tasks.py
"""

import logging

from celery import shared_task

from .services import StockLedger

logger = logging.getLogger('stockbook')


@shared_task(name='stock.reconcile_stock')
def reconcile_stock():
    discrepancies = StockLedger().reconcile()
    for item in discrepancies:
        logger.error(
            'Stock mismatch for %s: cached=%s ledger=%s',
            item.product_code, item.cached, item.ledger,
        )
    if not discrepancies:
        logger.info('Stock reconciliation clean.')
    return {'discrepancies': len(discrepancies)}
