"""
Catalog — Django Admin Configuration

@file catalog/admin.py
"""

from django.contrib import admin

from .models import Partner, Product, Warehouse


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('code', 'name', 'unit_of_measure', 'quantity', 'is_active')
    list_filter = ('is_active', 'unit_of_measure')
    search_fields = ('code', 'name')
    readonly_fields = ('quantity', 'created_at', 'updated_at', 'created_by', 'updated_by')


@admin.register(Partner)
class PartnerAdmin(admin.ModelAdmin):
    list_display = ('name', 'tax_code', 'partner_type', 'is_active')
    list_filter = ('partner_type', 'is_active')
    search_fields = ('name', 'tax_code')


@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    list_display = ('code', 'name', 'is_active')
    search_fields = ('code', 'name')
