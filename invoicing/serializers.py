"""
Invoicing — Serializers

Read serializers expose the computed line amounts; write serializers
only shape the input, the service does the business validation.

@file invoicing/serializers.py
"""

from rest_framework import serializers

from core.constants import MONEY_DECIMAL_PLACES, MONEY_MAX_DIGITS, QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS

from .models import Invoice, InvoiceItem


class InvoiceItemReadSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    net_amount = serializers.DecimalField(max_digits=MONEY_MAX_DIGITS, decimal_places=2, read_only=True)
    vat_amount = serializers.DecimalField(max_digits=MONEY_MAX_DIGITS, decimal_places=2, read_only=True)
    gross_amount = serializers.DecimalField(max_digits=MONEY_MAX_DIGITS, decimal_places=2, read_only=True)

    class Meta:
        model = InvoiceItem
        fields = [
            'id', 'position', 'product', 'product_name', 'warehouse',
            'quantity', 'unit_price', 'discount_percent', 'vat_rate',
            'batch_number', 'expiry_date',
            'net_amount', 'vat_amount', 'gross_amount',
        ]
        read_only_fields = fields


class InvoiceItemWriteSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    warehouse_id = serializers.UUIDField(required=False, allow_null=True)
    quantity = serializers.DecimalField(max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES)
    unit_price = serializers.DecimalField(max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES)
    discount_percent = serializers.DecimalField(max_digits=5, decimal_places=2, required=False)
    vat_rate = serializers.DecimalField(max_digits=5, decimal_places=2, required=False)
    batch_number = serializers.CharField(required=False, allow_blank=True, max_length=100)
    expiry_date = serializers.DateField(required=False, allow_null=True)


class InvoiceReadSerializer(serializers.ModelSerializer):
    full_number = serializers.CharField(read_only=True)
    partner_name = serializers.CharField(source='partner.name', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    items = InvoiceItemReadSerializer(many=True, read_only=True)

    class Meta:
        model = Invoice
        fields = [
            'id', 'series', 'number', 'fiscal_year', 'full_number',
            'partner', 'partner_name', 'issue_date', 'due_date',
            'status', 'status_display',
            'total_amount', 'total_vat', 'total_with_vat',
            'notes', 'items',
            'issued_at', 'paid_at', 'cancelled_at', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class InvoiceWriteSerializer(serializers.Serializer):
    partner_id = serializers.UUIDField()
    items = InvoiceItemWriteSerializer(many=True)
    issue_date = serializers.DateField(required=False)
    due_date = serializers.DateField(required=False)
    series = serializers.CharField(required=False, max_length=20)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    issue = serializers.BooleanField(default=False)


class InvoiceUpdateSerializer(serializers.Serializer):
    """PATCH/PUT on DRAFT invoices."""

    items = InvoiceItemWriteSerializer(many=True, required=False)
    due_date = serializers.DateField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
