"""
Stock — Availability Check

Pure functions shared by invoice issuing and production processing:
fold document lines into per-product requirements and compare them
with what is on hand. No database access happens here; callers pass
a lookup that reads their (already locked) product rows.

@file stock/availability.py
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class Requirement:
    product_id: UUID
    required: Decimal


@dataclass(frozen=True)
class Shortfall:
    product_id: UUID
    required: Decimal
    available: Decimal

    @property
    def missing(self) -> Decimal:
        return self.required - self.available


def aggregate_requirements(lines: Iterable[tuple[UUID, Decimal]]) -> tuple[Requirement, ...]:
    """
    Sum quantities per product, keeping the order in which each
    product first appears.
    """
    totals: dict[UUID, Decimal] = {}
    for product_id, quantity in lines:
        totals[product_id] = totals.get(product_id, Decimal('0')) + quantity
    return tuple(Requirement(product_id=pid, required=qty) for pid, qty in totals.items())


def check_availability(
    requirements: Iterable[Requirement],
    stock_lookup: Callable[[UUID], Decimal],
) -> Shortfall | None:
    """Return the first requirement that cannot be met, or None."""
    for requirement in requirements:
        available = stock_lookup(requirement.product_id)
        if available < requirement.required:
            return Shortfall(
                product_id=requirement.product_id,
                required=requirement.required,
                available=available,
            )
    return None
