"""
Stockbook — Test Factories

Factory Boy factories shared by every app's tests.

@file tests/factories.py
"""

import uuid
from decimal import Decimal

import factory
from django.contrib.auth import get_user_model

from catalog.models import Partner, Product, Warehouse
from core.models import AuditLog
from production.models import Recipe, RecipeIngredient


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = get_user_model()
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f'user{n}')
    email = factory.LazyAttribute(lambda o: f'{o.username}@stockbook.test')
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    is_active = True

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        self.set_password(extracted or 'TestPass2026!')
        if create:
            self.save(update_fields=['password'])


class SuperuserFactory(UserFactory):
    is_staff = True
    is_superuser = True


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class WarehouseFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Warehouse
        django_get_or_create = ('code',)

    code = factory.Sequence(lambda n: f'WH{n:02d}')
    name = factory.LazyAttribute(lambda o: f'Warehouse {o.code}')
    is_active = True


class ProductFactory(factory.django.DjangoModelFactory):
    """
    Products start at zero. Give them stock through the ledger (see
    ``stock_up`` in conftest) so the cache and movements agree.
    """

    class Meta:
        model = Product

    code = factory.Sequence(lambda n: f'P{n:05d}')
    name = factory.Sequence(lambda n: f'Product {n}')
    unit_of_measure = 'buc'
    is_active = True


class PartnerFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Partner

    name = factory.Faker('company')
    tax_code = factory.Sequence(lambda n: f'RO{n:08d}')
    partner_type = Partner.PartnerType.CLIENT
    is_active = True


class SupplierFactory(PartnerFactory):
    partner_type = Partner.PartnerType.SUPPLIER


# ---------------------------------------------------------------------------
# Production
# ---------------------------------------------------------------------------

class RecipeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Recipe

    product = factory.SubFactory(ProductFactory)
    name = factory.LazyAttribute(lambda o: f'Recipe {o.product.name}')
    is_active = True


class RecipeIngredientFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = RecipeIngredient

    recipe = factory.SubFactory(RecipeFactory)
    position = factory.Sequence(lambda n: n + 1)
    product = factory.SubFactory(ProductFactory)
    quantity = factory.LazyFunction(lambda: Decimal('1'))
    unit_of_measure = 'buc'


# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------

class AuditLogFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = AuditLog

    actor = factory.SubFactory(UserFactory)
    action = AuditLog.ActionChoices.CREATE
    model_name = 'Product'
    object_id = factory.LazyFunction(lambda: str(uuid.uuid4()))
