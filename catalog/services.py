"""
Catalog — Lookup Services

Read-only directories the stock workflows consult while validating
input. They hand out frozen snapshots instead of model instances so
callers cannot write catalog rows by accident.

@file catalog/services.py
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from .models import Partner, Product, Warehouse


@dataclass(frozen=True)
class ProductInfo:
    id: UUID
    code: str
    name: str
    unit_of_measure: str
    quantity: Decimal
    is_active: bool


@dataclass(frozen=True)
class PartnerInfo:
    id: UUID
    name: str
    partner_type: str
    is_active: bool

    @property
    def is_valid(self) -> bool:
        return self.is_active


@dataclass(frozen=True)
class WarehouseInfo:
    id: UUID
    code: str
    name: str
    is_active: bool


class ProductDirectory:

    def get(self, product_id) -> ProductInfo | None:
        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            return None
        return self._to_info(product)

    def get_many(self, product_ids) -> dict[UUID, ProductInfo]:
        """Map of id -> snapshot for every id that exists."""
        return {
            product.pk: self._to_info(product)
            for product in Product.objects.filter(pk__in=set(product_ids))
        }

    @staticmethod
    def _to_info(product: Product) -> ProductInfo:
        return ProductInfo(
            id=product.pk,
            code=product.code,
            name=product.name,
            unit_of_measure=product.unit_of_measure,
            quantity=product.quantity,
            is_active=product.is_active,
        )


class PartnerDirectory:

    def get(self, partner_id) -> PartnerInfo | None:
        partner = Partner.objects.filter(pk=partner_id).first()
        if partner is None:
            return None
        return PartnerInfo(
            id=partner.pk,
            name=partner.name,
            partner_type=partner.partner_type,
            is_active=partner.is_active,
        )

    def is_valid(self, partner_id) -> bool:
        info = self.get(partner_id) if partner_id else None
        return info is not None and info.is_valid


class WarehouseDirectory:

    def get(self, warehouse_id) -> WarehouseInfo | None:
        warehouse = Warehouse.objects.filter(pk=warehouse_id).first()
        if warehouse is None:
            return None
        return WarehouseInfo(
            id=warehouse.pk, code=warehouse.code,
            name=warehouse.name, is_active=warehouse.is_active,
        )

    def get_by_code(self, code: str) -> WarehouseInfo | None:
        warehouse = Warehouse.objects.filter(code=code).first()
        return self.get(warehouse.pk) if warehouse else None

    def existing_ids(self, warehouse_ids) -> set[UUID]:
        return set(
            Warehouse.objects.filter(pk__in=set(warehouse_ids), is_active=True)
            .values_list('pk', flat=True)
        )
