"""
Core — Audit Service

Single entry point for writing AuditLog rows from the workflow
services.

@file core/services.py
"""

from decimal import Decimal
from typing import Any
from uuid import UUID

from core.models import AuditLog


def resolve_actor(actor):
    # Anonymous users cannot be stored in a foreign key.
    if actor is None or not getattr(actor, 'is_authenticated', False):
        return None
    return actor


def _json_safe(value):
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    return value


class AuditService:

    @staticmethod
    def log(
        *,
        actor,
        action: str,
        model_name: str,
        object_id,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
    ) -> AuditLog:
        return AuditLog.objects.create(
            actor=resolve_actor(actor),
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            old_values=old_values,
            new_values=new_values,
        )

    @staticmethod
    def snapshot(instance, fields) -> dict[str, Any]:
        """
        Current values of ``fields`` as JSON-safe primitives. Foreign
        keys are read by attname (``partner`` gives the partner id).
        Non-editable fields such as Product.quantity are included.
        """
        opts = instance._meta
        return {
            name: _json_safe(getattr(instance, opts.get_field(name).attname))
            for name in fields
        }
