"""
Stock — Document Lines

Input validation shared by the goods-receipt and invoice workflows.
Raw line dicts (from serializers or callers) are checked and turned
into frozen DocumentLine values before any transaction is opened.

@file stock/documents.py
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from django.conf import settings

from catalog.services import ProductDirectory, WarehouseDirectory
from core.decimals import to_money, to_quantity
from core.exceptions import ResourceNotFoundError, ValidationFailed
from core.results import Result

HUNDRED = Decimal('100')


@dataclass(frozen=True)
class DocumentLine:
    product_id: UUID
    product_name: str
    warehouse_id: UUID
    quantity: Decimal
    unit_price: Decimal
    vat_rate: Decimal
    discount_percent: Decimal = Decimal('0')
    batch_number: str = ''
    expiry_date: date | None = None


def as_uuid(value) -> UUID | None:
    if value is None or value == '':
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


def default_warehouse_id(warehouses: WarehouseDirectory, code: str | None = None) -> UUID | None:
    info = warehouses.get_by_code(code or settings.DEFAULT_WAREHOUSE_CODE)
    return info.id if info else None


def normalize_lines(
    items,
    *,
    products: ProductDirectory,
    warehouses: WarehouseDirectory,
    allow_discount: bool = False,
) -> Result:
    """
    Validate ``items`` and return a Result holding a list of
    DocumentLine. The first problem found is reported, with the
    offending field path in ``error.field``.
    """
    if not items:
        return Result.failure(ValidationFailed('Document must have at least one line.', field='items'))

    fallback_warehouse = None
    parsed = []
    for index, row in enumerate(items):
        prefix = f'items[{index}]'

        product_id = as_uuid(row.get('product_id'))
        if product_id is None:
            return Result.failure(ValidationFailed('Product is required.', field=f'{prefix}.product_id'))

        quantity = to_quantity(row.get('quantity'))
        if quantity is None or quantity <= 0:
            return Result.failure(ValidationFailed('Quantity must be positive.', field=f'{prefix}.quantity'))

        unit_price = to_money(row.get('unit_price'))
        if unit_price is None or unit_price <= 0:
            return Result.failure(ValidationFailed('Unit price must be positive.', field=f'{prefix}.unit_price'))

        vat_rate = settings.DEFAULT_VAT_RATE
        if row.get('vat_rate') not in (None, ''):
            vat_rate = to_money(row['vat_rate'])
        if vat_rate is None or vat_rate < 0:
            return Result.failure(ValidationFailed(
                'VAT rate must be a non-negative number.', field=f'{prefix}.vat_rate',
            ))

        discount = Decimal('0')
        if row.get('discount_percent') not in (None, ''):
            discount = to_money(row['discount_percent'])
        if discount is None:
            return Result.failure(ValidationFailed(
                'Discount must be between 0 and 100.', field=f'{prefix}.discount_percent',
            ))
        if discount and not allow_discount:
            return Result.failure(ValidationFailed(
                'Discounts are not allowed on this document.', field=f'{prefix}.discount_percent',
            ))
        if discount < 0 or discount >= HUNDRED:
            return Result.failure(ValidationFailed(
                'Discount must be between 0 and 100.', field=f'{prefix}.discount_percent',
            ))

        warehouse_id = as_uuid(row.get('warehouse_id'))
        if warehouse_id is None:
            if fallback_warehouse is None:
                fallback_warehouse = default_warehouse_id(warehouses)
            warehouse_id = fallback_warehouse
        if warehouse_id is None:
            return Result.failure(ValidationFailed('Warehouse is required.', field=f'{prefix}.warehouse_id'))

        parsed.append((product_id, warehouse_id, quantity, unit_price, vat_rate, discount, row))

    known_products = products.get_many(p[0] for p in parsed)
    known_warehouses = warehouses.existing_ids(p[1] for p in parsed)

    lines = []
    for index, (product_id, warehouse_id, quantity, unit_price, vat_rate, discount, row) in enumerate(parsed):
        product = known_products.get(product_id)
        if product is None or not product.is_active:
            return Result.failure(ResourceNotFoundError(f'Product {product_id} not found.'))
        if warehouse_id not in known_warehouses:
            return Result.failure(ResourceNotFoundError(f'Warehouse {warehouse_id} not found.'))
        lines.append(DocumentLine(
            product_id=product_id,
            product_name=product.name,
            warehouse_id=warehouse_id,
            quantity=quantity,
            unit_price=unit_price,
            vat_rate=to_money(vat_rate),
            discount_percent=to_money(discount),
            batch_number=row.get('batch_number') or '',
            expiry_date=row.get('expiry_date'),
        ))
    return Result.success(lines)
