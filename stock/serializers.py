"""
Stock — Serializers

Read serializer for movements and input serializers for the transfer
and adjustment endpoints.

@file stock/serializers.py
"""

from rest_framework import serializers

from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS

from .models import StockMovement


class StockMovementSerializer(serializers.ModelSerializer):
    product_code = serializers.CharField(source='product.code', read_only=True)
    warehouse_code = serializers.CharField(source='warehouse.code', read_only=True)

    class Meta:
        model = StockMovement
        fields = [
            'id', 'product', 'product_code', 'warehouse', 'warehouse_code',
            'movement_type', 'document_type', 'document_id',
            'quantity', 'unit_price', 'batch_number', 'notes',
            'created_by', 'created_at',
        ]
        read_only_fields = fields


class TransferSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.DecimalField(max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES)
    from_warehouse_id = serializers.UUIDField()
    to_warehouse_id = serializers.UUIDField()
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class AdjustmentSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    warehouse_id = serializers.UUIDField()
    new_quantity = serializers.DecimalField(max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class MovementQuerySerializer(serializers.Serializer):
    product = serializers.UUIDField()
    limit = serializers.IntegerField(required=False, min_value=1, max_value=1000)


class MovementRangeSerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()
    product = serializers.UUIDField(required=False)

    def validate(self, attrs):
        if attrs['end'] < attrs['start']:
            raise serializers.ValidationError({'end': 'End date must not precede start date.'})
        return attrs


class ReconciliationSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    product_code = serializers.CharField()
    cached = serializers.DecimalField(max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES)
    ledger = serializers.DecimalField(max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES)
    difference = serializers.DecimalField(max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES)
