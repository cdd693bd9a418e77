"""
Stock — Service Layer

StockLedger owns the rule "Product.quantity == sum of its movements".
Every primitive locks the product row, writes the movement and the
cached quantity in one atomic block, and reports business outcomes as
a Result. When called from a document workflow the block joins the
workflow's transaction, so a later failure there undoes the movement
too.

StockDocumentService exposes transfers and adjustments as standalone
operations with their own transaction.

@file stock/services.py
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce

from catalog.models import Product, Warehouse
from core.constants import AUDIT_ACTION_STOCK_MOVEMENT, QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS
from core.decimals import to_money, to_quantity
from core.exceptions import InsufficientStockError, ResourceNotFoundError, ValidationFailed
from core.results import Result
from core.services import AuditService, resolve_actor

from .models import DocumentType, MovementType, StockMovement

logger = logging.getLogger('stockbook')

ZERO = Decimal('0')


@dataclass(frozen=True)
class Discrepancy:
    product_id: UUID
    product_code: str
    cached: Decimal
    ledger: Decimal

    @property
    def difference(self) -> Decimal:
        return self.cached - self.ledger


def lock_products(product_ids) -> dict[UUID, Product]:
    """
    SELECT ... FOR UPDATE every product in ``product_ids``.

    Rows are locked in primary-key order so two workflows touching
    overlapping products cannot deadlock. Must run inside a transaction.
    """
    rows = Product.objects.select_for_update().filter(pk__in=set(product_ids)).order_by('pk')
    return {product.pk: product for product in rows}


def _positive_quantity(quantity) -> Decimal | None:
    value = to_quantity(quantity)
    if value is None or value <= 0:
        return None
    return value


def _warehouse_exists(warehouse_id, *, active_only: bool = True) -> bool:
    warehouses = Warehouse.objects.filter(pk=warehouse_id)
    if active_only:
        warehouses = warehouses.filter(is_active=True)
    return warehouses.exists()


class StockLedger:
    """Atomic stock primitives and movement queries."""

    # -- mutations ---------------------------------------------------------

    def increase(
        self,
        *,
        product_id,
        warehouse_id,
        quantity,
        document_type: str,
        document_id=None,
        notes: str = '',
        unit_price=None,
        batch_number: str = '',
        actor=None,
    ) -> Result:
        """
        Inbound movement: cache += quantity.

        The warehouse only has to exist. Inbound stock may still land in a
        deactivated warehouse, e.g. when an invoice issued there earlier
        is cancelled; new documents are kept out of such warehouses when
        their lines are validated.
        """
        amount = _positive_quantity(quantity)
        if amount is None:
            return Result.failure(ValidationFailed('Quantity must be positive.', field='quantity'))

        with transaction.atomic():
            product = Product.objects.select_for_update().filter(pk=product_id).first()
            if product is None:
                return Result.failure(ResourceNotFoundError(f'Product {product_id} not found.'))
            if not _warehouse_exists(warehouse_id, active_only=False):
                return Result.failure(ResourceNotFoundError(f'Warehouse {warehouse_id} not found.'))

            movement = self._record(
                product=product,
                warehouse_id=warehouse_id,
                movement_type=MovementType.IN,
                document_type=document_type,
                document_id=document_id,
                signed_quantity=amount,
                unit_price=unit_price,
                batch_number=batch_number,
                notes=notes,
                actor=actor,
            )
        return Result.success(movement)

    def decrease(
        self,
        *,
        product_id,
        warehouse_id,
        quantity,
        document_type: str,
        document_id=None,
        notes: str = '',
        unit_price=None,
        batch_number: str = '',
        actor=None,
    ) -> Result:
        """Outbound movement: refused when the cached quantity is too low."""
        amount = _positive_quantity(quantity)
        if amount is None:
            return Result.failure(ValidationFailed('Quantity must be positive.', field='quantity'))

        with transaction.atomic():
            product = Product.objects.select_for_update().filter(pk=product_id).first()
            if product is None:
                return Result.failure(ResourceNotFoundError(f'Product {product_id} not found.'))
            if not _warehouse_exists(warehouse_id):
                return Result.failure(ResourceNotFoundError(f'Warehouse {warehouse_id} not found.'))
            if product.quantity < amount:
                logger.warning(
                    'Decrease refused for %s: required=%s available=%s',
                    product.code, amount, product.quantity,
                )
                return Result.failure(InsufficientStockError(
                    product.pk, amount, product.quantity, product_name=product.name,
                ))

            movement = self._record(
                product=product,
                warehouse_id=warehouse_id,
                movement_type=MovementType.OUT,
                document_type=document_type,
                document_id=document_id,
                signed_quantity=-amount,
                unit_price=unit_price,
                batch_number=batch_number,
                notes=notes,
                actor=actor,
            )
        return Result.success(movement)

    def transfer(
        self,
        *,
        product_id,
        quantity,
        from_warehouse_id,
        to_warehouse_id,
        notes: str = '',
        actor=None,
    ) -> Result:
        """
        Move stock between warehouses. Writes an OUT movement at the
        source and an IN movement at the destination, both of document
        type TRANSFER and sharing one document id. The cached total does
        not change.
        """
        amount = _positive_quantity(quantity)
        if amount is None:
            return Result.failure(ValidationFailed('Quantity must be positive.', field='quantity'))
        if str(from_warehouse_id) == str(to_warehouse_id):
            return Result.failure(ValidationFailed(
                'Source and destination warehouse must differ.', field='to_warehouse_id',
            ))

        with transaction.atomic():
            product = Product.objects.select_for_update().filter(pk=product_id).first()
            if product is None:
                return Result.failure(ResourceNotFoundError(f'Product {product_id} not found.'))
            warehouses = {
                str(w.pk): w
                for w in Warehouse.objects.filter(pk__in=[from_warehouse_id, to_warehouse_id], is_active=True)
            }
            source = warehouses.get(str(from_warehouse_id))
            destination = warehouses.get(str(to_warehouse_id))
            if source is None or destination is None:
                return Result.failure(ResourceNotFoundError('Warehouse not found.'))
            if product.quantity < amount:
                logger.warning(
                    'Transfer refused for %s: required=%s available=%s',
                    product.code, amount, product.quantity,
                )
                return Result.failure(InsufficientStockError(
                    product.pk, amount, product.quantity, product_name=product.name,
                ))

            transfer_id = uuid.uuid4()
            suffix = f' - {notes}' if notes else ''
            outbound = self._record(
                product=product,
                warehouse_id=source.pk,
                movement_type=MovementType.OUT,
                document_type=DocumentType.TRANSFER,
                document_id=transfer_id,
                signed_quantity=-amount,
                notes=f'Transfer to {destination.code}{suffix}',
                actor=actor,
            )
            inbound = self._record(
                product=product,
                warehouse_id=destination.pk,
                movement_type=MovementType.IN,
                document_type=DocumentType.TRANSFER,
                document_id=transfer_id,
                signed_quantity=amount,
                notes=f'Transfer from {source.code}{suffix}',
                actor=actor,
            )
        return Result.success((outbound, inbound))

    def adjust_to(
        self,
        *,
        product_id,
        warehouse_id,
        new_quantity,
        notes: str = '',
        actor=None,
    ) -> Result:
        """
        Set the on-hand quantity to ``new_quantity`` (stock count).

        Writes one ADJUSTMENT movement carrying the signed difference.
        When nothing changes no movement is written and the result value
        is None.
        """
        target = to_quantity(new_quantity)
        if target is None or target < 0:
            return Result.failure(ValidationFailed(
                'New quantity must be zero or positive.', field='new_quantity',
            ))

        with transaction.atomic():
            product = Product.objects.select_for_update().filter(pk=product_id).first()
            if product is None:
                return Result.failure(ResourceNotFoundError(f'Product {product_id} not found.'))
            if not _warehouse_exists(warehouse_id):
                return Result.failure(ResourceNotFoundError(f'Warehouse {warehouse_id} not found.'))

            current = product.quantity
            delta = target - current
            if delta == 0:
                logger.info('No adjustment needed for %s (quantity %s)', product.code, current)
                return Result.success(None)

            text = f'Adjustment from {current} to {target}'
            if notes:
                text = f'{text} - {notes}'
            movement = self._record(
                product=product,
                warehouse_id=warehouse_id,
                movement_type=MovementType.ADJUSTMENT,
                document_type=DocumentType.ADJUSTMENT,
                document_id=None,
                signed_quantity=delta,
                notes=text,
                actor=actor,
            )
        return Result.success(movement)

    def _record(
        self,
        *,
        product: Product,
        warehouse_id,
        movement_type: str,
        document_type: str,
        document_id,
        signed_quantity: Decimal,
        unit_price=None,
        batch_number: str = '',
        notes: str = '',
        actor=None,
    ) -> StockMovement:
        """Insert the movement and move the cache. Caller holds the row lock."""
        movement = StockMovement.objects.create(
            product=product,
            warehouse_id=warehouse_id,
            movement_type=movement_type,
            document_type=document_type,
            document_id=document_id,
            quantity=signed_quantity,
            unit_price=to_money(unit_price),
            batch_number=batch_number or '',
            notes=notes or '',
            created_by=resolve_actor(actor),
        )
        old_quantity = product.quantity
        product.quantity = old_quantity + signed_quantity
        product.save(update_fields=['quantity', 'updated_at'])

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_STOCK_MOVEMENT,
            model_name='Product',
            object_id=product.pk,
            old_values={'quantity': str(old_quantity)},
            new_values={
                'quantity': str(product.quantity),
                'movement_id': movement.pk,
                'movement_type': movement_type,
                'document_type': document_type,
                'document_id': str(document_id) if document_id else None,
            },
        )
        logger.info(
            'StockMovement %s %s %s qty=%s wh=%s doc=%s:%s',
            movement.pk, movement_type, product.code, signed_quantity,
            warehouse_id, document_type, document_id,
        )
        return movement

    # -- queries -----------------------------------------------------------

    def history(self, product_id, limit: int | None = None):
        """Newest movements of one product first."""
        limit = limit or settings.MOVEMENT_HISTORY_LIMIT
        return list(
            StockMovement.objects.filter(product_id=product_id)
            .select_related('warehouse')
            .order_by('-created_at', '-id')[:limit]
        )

    def history_by_date_range(self, start: datetime, end: datetime, product_id=None):
        """All movements with start <= created_at <= end, newest first."""
        qs = StockMovement.objects.filter(created_at__range=(start, end))
        if product_id is not None:
            qs = qs.filter(product_id=product_id)
        return list(qs.select_related('product', 'warehouse').order_by('-created_at', '-id'))

    def document_movements(self, document_type: str, document_id):
        return list(
            StockMovement.objects.filter(document_type=document_type, document_id=document_id)
            .select_related('product', 'warehouse')
            .order_by('created_at', 'id')
        )

    def warehouse_balances(self, product_id) -> dict[UUID, Decimal]:
        """Signed movement sum per warehouse for one product."""
        rows = (
            StockMovement.objects.filter(product_id=product_id)
            .values('warehouse_id')
            .annotate(total=Sum('quantity'))
            .order_by('warehouse_id')
        )
        return {row['warehouse_id']: row['total'] for row in rows}

    def reconcile(self, product_ids=None) -> list[Discrepancy]:
        """Products whose cached quantity differs from their movement sum."""
        qs = Product.objects.all()
        if product_ids is not None:
            qs = qs.filter(pk__in=product_ids)
        qs = qs.annotate(
            ledger_total=Coalesce(
                Sum('stock_movements__quantity'),
                Value(ZERO),
                output_field=DecimalField(
                    max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
                ),
            ),
        ).order_by('code')

        discrepancies = []
        for product in qs:
            ledger_total = to_quantity(product.ledger_total)
            if ledger_total != product.quantity:
                discrepancies.append(Discrepancy(
                    product_id=product.pk,
                    product_code=product.code,
                    cached=product.quantity,
                    ledger=ledger_total,
                ))
        return discrepancies


class StockDocumentService:
    """Warehouse transfers and stock adjustments as standalone operations."""

    def __init__(self, *, ledger: StockLedger | None = None):
        self.ledger = ledger or StockLedger()

    def transfer_stock(
        self,
        *,
        product_id,
        quantity,
        from_warehouse_id,
        to_warehouse_id,
        notes: str = '',
        actor=None,
    ) -> Result:
        with transaction.atomic():
            result = self.ledger.transfer(
                product_id=product_id,
                quantity=quantity,
                from_warehouse_id=from_warehouse_id,
                to_warehouse_id=to_warehouse_id,
                notes=notes,
                actor=actor,
            )
            if not result.ok:
                transaction.set_rollback(True)
        return result

    def adjust_stock(
        self,
        *,
        product_id,
        warehouse_id,
        new_quantity,
        notes: str = '',
        actor=None,
    ) -> Result:
        with transaction.atomic():
            result = self.ledger.adjust_to(
                product_id=product_id,
                warehouse_id=warehouse_id,
                new_quantity=new_quantity,
                notes=notes,
                actor=actor,
            )
            if not result.ok:
                transaction.set_rollback(True)
        return result
