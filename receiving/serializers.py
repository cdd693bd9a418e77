"""
Receiving — Serializers

@file receiving/serializers.py
"""

from rest_framework import serializers

from core.constants import MONEY_DECIMAL_PLACES, MONEY_MAX_DIGITS, QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS

from .models import GoodsReceipt, GoodsReceiptItem


class GoodsReceiptItemReadSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    net_amount = serializers.DecimalField(max_digits=MONEY_MAX_DIGITS, decimal_places=2, read_only=True)
    vat_amount = serializers.DecimalField(max_digits=MONEY_MAX_DIGITS, decimal_places=2, read_only=True)

    class Meta:
        model = GoodsReceiptItem
        fields = [
            'id', 'position', 'product', 'product_name', 'warehouse',
            'quantity', 'unit_price', 'vat_rate', 'batch_number', 'expiry_date',
            'net_amount', 'vat_amount',
        ]
        read_only_fields = fields


class GoodsReceiptItemWriteSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    warehouse_id = serializers.UUIDField(required=False, allow_null=True)
    quantity = serializers.DecimalField(max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES)
    unit_price = serializers.DecimalField(max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES)
    vat_rate = serializers.DecimalField(max_digits=5, decimal_places=2, required=False)
    batch_number = serializers.CharField(required=False, allow_blank=True, max_length=100)
    expiry_date = serializers.DateField(required=False, allow_null=True)


class GoodsReceiptReadSerializer(serializers.ModelSerializer):
    full_number = serializers.CharField(read_only=True)
    supplier_name = serializers.CharField(source='supplier.name', read_only=True)
    items = GoodsReceiptItemReadSerializer(many=True, read_only=True)

    class Meta:
        model = GoodsReceipt
        fields = [
            'id', 'series', 'number', 'fiscal_year', 'full_number',
            'supplier', 'supplier_name', 'receipt_date',
            'supplier_document_number', 'supplier_document_date',
            'total_amount', 'total_vat', 'total_with_vat',
            'notes', 'items', 'created_at',
        ]
        read_only_fields = fields


class GoodsReceiptWriteSerializer(serializers.Serializer):
    supplier_id = serializers.UUIDField()
    items = GoodsReceiptItemWriteSerializer(many=True)
    receipt_date = serializers.DateField(required=False)
    supplier_document_number = serializers.CharField(required=False, allow_blank=True, max_length=50)
    supplier_document_date = serializers.DateField(required=False, allow_null=True)
    series = serializers.CharField(required=False, max_length=20)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
