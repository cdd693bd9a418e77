"""
Stockbook — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from stock.models import DocumentType
from stock.services import StockLedger
from tests.factories import ProductFactory, SuperuserFactory, UserFactory, WarehouseFactory


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Active user with default password TestPass2026!"""
    return UserFactory()


@pytest.fixture
def admin_user(db):
    """Superuser with default password TestPass2026!"""
    return SuperuserFactory()


@pytest.fixture
def authenticated_client(api_client, user):
    """API client authenticated as a regular user."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    """API client authenticated as a superuser."""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def warehouse(db, settings):
    """The default warehouse (code from settings)."""
    return WarehouseFactory(code=settings.DEFAULT_WAREHOUSE_CODE, name='Main')


@pytest.fixture
def ledger():
    return StockLedger()


@pytest.fixture
def stock_up(ledger, warehouse):
    """
    stock_up(product, qty) books an ADJUSTMENT-document IN movement so
    tests start from a ledger-consistent quantity.
    """
    def _stock_up(product, quantity, target=None):
        ledger.increase(
            product_id=product.pk,
            warehouse_id=(target or warehouse).pk,
            quantity=Decimal(str(quantity)),
            document_type=DocumentType.ADJUSTMENT,
            notes='Opening stock',
        ).unwrap()
        product.refresh_from_db()
        return product
    return _stock_up


@pytest.fixture
def product(db):
    return ProductFactory()
