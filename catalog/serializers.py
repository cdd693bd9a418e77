"""
Catalog — Serializers

Product quantity is always read-only here; it only changes through
stock movements.

@file catalog/serializers.py
"""

from rest_framework import serializers

from .models import Partner, Product, Warehouse


class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ['id', 'code', 'name', 'unit_of_measure', 'quantity', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ['id', 'quantity', 'created_at', 'updated_at']


class PartnerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Partner
        fields = ['id', 'name', 'tax_code', 'partner_type', 'address', 'is_active', 'created_at']
        read_only_fields = ['id', 'created_at']


class WarehouseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Warehouse
        fields = ['id', 'code', 'name', 'is_active']
        read_only_fields = ['id']
