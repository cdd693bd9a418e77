"""
Receiving — Django Admin Configuration

@file receiving/admin.py
"""

from django.contrib import admin

from .models import GoodsReceipt, GoodsReceiptItem


class GoodsReceiptItemInline(admin.TabularInline):
    model = GoodsReceiptItem
    extra = 0
    fields = ('position', 'product', 'warehouse', 'quantity', 'unit_price', 'vat_rate', 'batch_number', 'expiry_date')
    readonly_fields = fields
    can_delete = False


@admin.register(GoodsReceipt)
class GoodsReceiptAdmin(admin.ModelAdmin):
    list_display = ('full_number', 'supplier', 'receipt_date', 'supplier_document_number', 'total_with_vat')
    list_filter = ('series', 'fiscal_year')
    search_fields = ('supplier__name', 'supplier_document_number')
    date_hierarchy = 'receipt_date'
    list_select_related = ('supplier',)
    inlines = [GoodsReceiptItemInline]
    readonly_fields = (
        'series', 'number', 'fiscal_year', 'supplier', 'receipt_date',
        'total_amount', 'total_vat', 'total_with_vat',
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
