"""
Production — Service Layer

Recipe maintenance and the production order lifecycle:
PENDING -> IN_PROGRESS -> COMPLETED, with CANCELLED reachable until
the order completes. Processing consumes every ingredient and books
the finished product in one transaction; if any ingredient is short
nothing is written.

@file production/services.py
"""

import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from catalog.services import ProductDirectory, WarehouseDirectory
from core.constants import AUDIT_ACTION_CREATE, AUDIT_ACTION_STATUS_CHANGE
from core.decimals import to_quantity
from core.exceptions import InsufficientStockError, InvalidStateTransition, ResourceNotFoundError, ValidationFailed
from core.results import Result
from core.services import AuditService, resolve_actor
from stock.documents import as_uuid, default_warehouse_id
from stock.models import DocumentType
from stock.services import StockLedger, lock_products

from .explosion import RecipeSpec, check_availability, explode
from .models import ProductionOrder, Recipe, RecipeIngredient

logger = logging.getLogger('stockbook')

Status = ProductionOrder.StatusChoices

TRANSITIONS = {
    Status.PENDING: {Status.IN_PROGRESS, Status.COMPLETED, Status.CANCELLED},
    Status.IN_PROGRESS: {Status.COMPLETED, Status.CANCELLED},
    Status.COMPLETED: set(),
    Status.CANCELLED: set(),
}


def _transition_error(order: ProductionOrder, new_status: str) -> InvalidStateTransition | None:
    if new_status in TRANSITIONS.get(order.status, set()):
        return None
    return InvalidStateTransition(current=order.status, requested=new_status)


def _requirements(recipe_spec: RecipeSpec, quantity) -> Result:
    """
    Explode ``recipe_spec`` for ``quantity`` units. Fails when an
    ingredient rounds to zero at three decimals.
    """
    requirements = explode(recipe_spec, quantity)
    if any(r.required <= 0 for r in requirements):
        return Result.failure(ValidationFailed(
            'Quantity to produce is too small to consume every ingredient.',
            field='quantity_to_produce',
        ))
    return Result.success(requirements)


class ProductionService:

    def __init__(
        self,
        *,
        ledger: StockLedger | None = None,
        products: ProductDirectory | None = None,
        warehouses: WarehouseDirectory | None = None,
    ):
        self.ledger = ledger or StockLedger()
        self.products = products or ProductDirectory()
        self.warehouses = warehouses or WarehouseDirectory()

    # -- recipes -----------------------------------------------------------

    def create_recipe(
        self,
        *,
        product_id,
        ingredients: list[dict],
        name: str = '',
        notes: str = '',
        actor=None,
    ) -> Result:
        product_id = as_uuid(product_id)
        product = self.products.get(product_id) if product_id else None
        if product is None:
            return Result.failure(ResourceNotFoundError('Finished product not found.'))
        if not ingredients:
            return Result.failure(ValidationFailed('Recipe needs at least one ingredient.', field='ingredients'))

        rows = []
        for index, row in enumerate(ingredients):
            prefix = f'ingredients[{index}]'
            ingredient_id = as_uuid(row.get('product_id'))
            if ingredient_id is None:
                return Result.failure(ValidationFailed('Ingredient is required.', field=f'{prefix}.product_id'))
            if ingredient_id == product_id:
                return Result.failure(ValidationFailed(
                    'A product cannot be an ingredient of itself.', field=f'{prefix}.product_id',
                ))
            quantity = to_quantity(row.get('quantity'))
            if quantity is None or quantity <= 0:
                return Result.failure(ValidationFailed('Quantity must be positive.', field=f'{prefix}.quantity'))
            rows.append((ingredient_id, quantity, row.get('unit_of_measure')))

        known = self.products.get_many(r[0] for r in rows)
        missing = [str(r[0]) for r in rows if r[0] not in known]
        if missing:
            return Result.failure(ResourceNotFoundError(f'Ingredient {missing[0]} not found.'))

        with transaction.atomic():
            recipe = Recipe.objects.create(
                product_id=product_id,
                name=name or f'Recipe {product.name}',
                notes=notes or '',
                created_by=resolve_actor(actor),
            )
            RecipeIngredient.objects.bulk_create([
                RecipeIngredient(
                    recipe=recipe,
                    position=position,
                    product_id=ingredient_id,
                    quantity=quantity,
                    unit_of_measure=unit or known[ingredient_id].unit_of_measure,
                    created_by=resolve_actor(actor),
                )
                for position, (ingredient_id, quantity, unit) in enumerate(rows, start=1)
            ])
            AuditService.log(
                actor=actor,
                action=AUDIT_ACTION_CREATE,
                model_name='Recipe',
                object_id=recipe.pk,
                new_values={'product_id': str(product_id), 'ingredients': len(rows)},
            )
        return Result.success(recipe)

    # -- orders ------------------------------------------------------------

    def create_order(
        self,
        *,
        recipe_id,
        quantity_to_produce,
        warehouse_id=None,
        notes: str = '',
        actor=None,
    ) -> Result:
        quantity = to_quantity(quantity_to_produce)
        if quantity is None or quantity <= 0:
            return Result.failure(ValidationFailed(
                'Quantity to produce must be positive.', field='quantity_to_produce',
            ))

        recipe_id = as_uuid(recipe_id)
        recipe = Recipe.objects.filter(pk=recipe_id, is_active=True).first() if recipe_id else None
        if recipe is None:
            return Result.failure(ResourceNotFoundError('Recipe not found or inactive.'))
        if not recipe.ingredients.exists():
            return Result.failure(ValidationFailed('Recipe has no ingredients.', field='recipe_id'))
        needs = _requirements(RecipeSpec.from_recipe(recipe), quantity)
        if not needs.ok:
            return needs

        warehouse_id = as_uuid(warehouse_id)
        if warehouse_id is None:
            warehouse_id = default_warehouse_id(self.warehouses, settings.PRODUCTION_WAREHOUSE_CODE)
        if warehouse_id is None or not self.warehouses.existing_ids([warehouse_id]):
            return Result.failure(ResourceNotFoundError('Production warehouse not found.'))

        with transaction.atomic():
            order = ProductionOrder.objects.create(
                recipe=recipe,
                quantity_to_produce=quantity,
                warehouse_id=warehouse_id,
                status=Status.PENDING,
                notes=notes or '',
                created_by=resolve_actor(actor),
            )
            AuditService.log(
                actor=actor,
                action=AUDIT_ACTION_CREATE,
                model_name='ProductionOrder',
                object_id=order.pk,
                new_values={'recipe_id': str(recipe.pk), 'quantity_to_produce': str(quantity)},
            )
        logger.info('Production order %s created: %s x recipe %s', order.pk, quantity, recipe.pk)
        return Result.success(order)

    def start_order(self, *, order_id, actor=None) -> Result:
        with transaction.atomic():
            order = self._locked(order_id)
            if order is None:
                return Result.failure(ResourceNotFoundError('Production order not found.'))
            error = _transition_error(order, Status.IN_PROGRESS)
            if error is not None:
                return Result.failure(error)
            self._set_status(order, Status.IN_PROGRESS, actor, started_at=timezone.now())
        return Result.success(order)

    def process_order(self, *, order_id, actor=None) -> Result:
        """
        Consume ingredients for ``quantity_to_produce`` units and book
        the finished product. Every requirement is checked against the
        locked stock before the first movement is written.
        """
        with transaction.atomic():
            order = self._locked(order_id)
            if order is None:
                return Result.failure(ResourceNotFoundError('Production order not found.'))
            error = _transition_error(order, Status.COMPLETED)
            if error is not None:
                return Result.failure(error)

            recipe_spec = RecipeSpec.from_recipe(order.recipe)
            needs = _requirements(recipe_spec, order.quantity_to_produce)
            if not needs.ok:
                return needs
            requirements = needs.value
            locked = lock_products([r.product_id for r in requirements] + [recipe_spec.product_id])

            shortfall = check_availability(requirements, lambda pid: locked[pid].quantity)
            if shortfall is not None:
                product = locked[shortfall.product_id]
                logger.warning(
                    'Production order %s blocked: %s short by %s',
                    order.pk, product.code, shortfall.missing,
                )
                return Result.failure(InsufficientStockError(
                    shortfall.product_id, shortfall.required, shortfall.available,
                    product_name=product.name,
                ))

            finished = locked[recipe_spec.product_id]
            for requirement in requirements:
                moved = self.ledger.decrease(
                    product_id=requirement.product_id,
                    warehouse_id=order.warehouse_id,
                    quantity=requirement.required,
                    document_type=DocumentType.PRODUCTION,
                    document_id=order.pk,
                    notes=f'Consumed for production of {finished.name}',
                    actor=actor,
                )
                if not moved.ok:
                    transaction.set_rollback(True)
                    return moved

            produced = self.ledger.increase(
                product_id=recipe_spec.product_id,
                warehouse_id=order.warehouse_id,
                quantity=order.quantity_to_produce,
                document_type=DocumentType.PRODUCTION,
                document_id=order.pk,
                notes=f'Produced {order.quantity_to_produce} {finished.name}',
                actor=actor,
            )
            if not produced.ok:
                transaction.set_rollback(True)
                return produced

            now = timezone.now()
            timestamps = {'completed_at': now}
            if order.started_at is None:
                timestamps['started_at'] = now
            self._set_status(order, Status.COMPLETED, actor, **timestamps)

        logger.info('Production order %s completed', order.pk)
        return Result.success(order)

    def cancel_order(self, *, order_id, actor=None) -> Result:
        with transaction.atomic():
            order = self._locked(order_id)
            if order is None:
                return Result.failure(ResourceNotFoundError('Production order not found.'))
            error = _transition_error(order, Status.CANCELLED)
            if error is not None:
                return Result.failure(error)
            self._set_status(order, Status.CANCELLED, actor, cancelled_at=timezone.now())
        return Result.success(order)

    # -- internals ---------------------------------------------------------

    @staticmethod
    def _locked(order_id) -> ProductionOrder | None:
        order_id = as_uuid(order_id)
        if order_id is None:
            return None
        return ProductionOrder.objects.select_for_update().filter(pk=order_id).first()

    @staticmethod
    def _set_status(order: ProductionOrder, new_status: str, actor, **timestamps) -> None:
        old_status = order.status
        order.status = new_status
        order.updated_by = resolve_actor(actor)
        for field, value in timestamps.items():
            setattr(order, field, value)
        order.save(update_fields=['status', 'updated_by', 'updated_at', *timestamps])
        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_STATUS_CHANGE,
            model_name='ProductionOrder',
            object_id=order.pk,
            old_values={'status': old_status},
            new_values={'status': new_status},
        )
