"""
Production — Recipe Explosion

Turns a recipe and a multiplier into the list of ingredient
quantities a production run needs. Pure: works on frozen RecipeSpec
values so it can be tested without a database.

@file production/explosion.py
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from core.constants import QUANTITY_PLACES
from stock.availability import Requirement, Shortfall, aggregate_requirements, check_availability

__all__ = ['IngredientLine', 'RecipeSpec', 'Requirement', 'Shortfall', 'check_availability', 'explode']


@dataclass(frozen=True)
class IngredientLine:
    product_id: UUID
    quantity: Decimal


@dataclass(frozen=True)
class RecipeSpec:
    product_id: UUID
    ingredients: tuple[IngredientLine, ...]

    @classmethod
    def from_recipe(cls, recipe) -> 'RecipeSpec':
        return cls(
            product_id=recipe.product_id,
            ingredients=tuple(
                IngredientLine(product_id=ing.product_id, quantity=ing.quantity)
                for ing in recipe.ingredients.order_by('position')
            ),
        )


def explode(recipe: RecipeSpec, multiplier: Decimal) -> tuple[Requirement, ...]:
    """
    Required quantity per ingredient for ``multiplier`` units of the
    finished product. An ingredient listed twice is merged into one
    requirement at its first position.
    """
    if multiplier <= 0:
        raise ValueError('multiplier must be positive')
    scaled = (
        (line.product_id, (line.quantity * multiplier).quantize(QUANTITY_PLACES, rounding=ROUND_HALF_UP))
        for line in recipe.ingredients
    )
    return aggregate_requirements(scaled)
