"""
Production — Models

Recipes (bill of materials for one finished product) and production
orders that consume the ingredients and produce the finished product
in a single stock transaction.

@file production/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS
from core.models import BaseModel


class Recipe(BaseModel):
    """Ingredient quantities are per one unit of the finished product."""

    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='recipes',
        verbose_name=_('finished product'),
    )
    name = models.CharField(_('name'), max_length=255, blank=True)
    is_active = models.BooleanField(_('active'), default=True, db_index=True)
    notes = models.TextField(_('notes'), blank=True, default='')

    class Meta:
        db_table = 'recipes'
        verbose_name = _('recipe')
        verbose_name_plural = _('recipes')
        ordering = ['product__name']

    def __str__(self):
        return self.name or f'Recipe for {self.product_id}'


class RecipeIngredient(BaseModel):
    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        related_name='ingredients',
        verbose_name=_('recipe'),
    )
    position = models.PositiveSmallIntegerField(_('position'))
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('ingredient'),
    )
    quantity = models.DecimalField(
        _('quantity per unit'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    unit_of_measure = models.CharField(_('unit of measure'), max_length=20, default='buc')

    class Meta:
        db_table = 'recipe_ingredients'
        verbose_name = _('recipe ingredient')
        verbose_name_plural = _('recipe ingredients')
        ordering = ['recipe', 'position']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name='recipe_ingredient_positive',
            ),
        ]

    def __str__(self):
        return f'{self.product_id} x {self.quantity} {self.unit_of_measure}'


class ProductionOrder(BaseModel):

    class StatusChoices(models.TextChoices):
        PENDING = 'PENDING', _('Pending')
        IN_PROGRESS = 'IN_PROGRESS', _('In progress')
        COMPLETED = 'COMPLETED', _('Completed')
        CANCELLED = 'CANCELLED', _('Cancelled')

    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.PROTECT,
        related_name='orders',
        verbose_name=_('recipe'),
    )
    quantity_to_produce = models.DecimalField(
        _('quantity to produce'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    warehouse = models.ForeignKey(
        'catalog.Warehouse',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('warehouse'),
    )
    status = models.CharField(
        _('status'), max_length=12,
        choices=StatusChoices.choices,
        default=StatusChoices.PENDING,
        db_index=True,
    )
    started_at = models.DateTimeField(_('started at'), null=True, blank=True)
    completed_at = models.DateTimeField(_('completed at'), null=True, blank=True)
    cancelled_at = models.DateTimeField(_('cancelled at'), null=True, blank=True)
    notes = models.TextField(_('notes'), blank=True, default='')

    class Meta:
        db_table = 'production_orders'
        verbose_name = _('production order')
        verbose_name_plural = _('production orders')
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity_to_produce__gt=0),
                name='production_order_positive',
            ),
        ]

    def __str__(self):
        return f'Production {self.pk} ({self.status})'
