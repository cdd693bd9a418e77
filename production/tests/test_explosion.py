"""
Tests — recipe explosion (no database).

@file production/tests/test_explosion.py
"""

import uuid
from decimal import Decimal

import pytest

from production.explosion import IngredientLine, RecipeSpec, Requirement, check_availability, explode


X = uuid.uuid4()
Y = uuid.uuid4()
FINISHED = uuid.uuid4()


def _recipe(*lines):
    return RecipeSpec(
        product_id=FINISHED,
        ingredients=tuple(IngredientLine(product_id=pid, quantity=Decimal(qty)) for pid, qty in lines),
    )


class TestExplode:

    def test_scales_by_multiplier(self):
        assert explode(_recipe((X, '5'), (Y, '3')), Decimal('2')) == (
            Requirement(X, Decimal('10.000')),
            Requirement(Y, Decimal('6.000')),
        )

    def test_fractional_quantities_rounded_to_three_places(self):
        [requirement] = explode(_recipe((X, '0.3333')), Decimal('3'))
        assert requirement.required == Decimal('1.000')

    def test_merges_repeated_ingredient(self):
        [requirement] = explode(_recipe((X, '1'), (X, '2')), Decimal('4'))
        assert requirement.required == Decimal('12')

    @pytest.mark.parametrize('multiplier', [Decimal('0'), Decimal('-1')])
    def test_non_positive_multiplier(self, multiplier):
        with pytest.raises(ValueError):
            explode(_recipe((X, '1')), multiplier)


class TestCheckExplosion:

    def test_first_shortfall(self):
        stock = {X: Decimal('10'), Y: Decimal('5')}
        shortfall = check_availability(explode(_recipe((X, '5'), (Y, '3')), Decimal('2')), stock.__getitem__)
        assert shortfall.product_id == Y
        assert shortfall.required == Decimal('6')
        assert shortfall.available == Decimal('5')
