"""
Stock — Django Admin Configuration

Movements are visible but never editable or deletable from the
admin; the model itself refuses updates and deletes as well.

@file stock/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import StockMovement


@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'created_at', 'product', 'warehouse', 'movement_type',
        'quantity', 'document_type', 'document_id', 'created_by',
    )
    list_filter = ('movement_type', 'document_type', 'warehouse')
    search_fields = ('product__code', 'product__name', 'batch_number', 'notes')
    readonly_fields = (
        'id', 'product', 'warehouse', 'movement_type', 'document_type', 'document_id',
        'quantity', 'unit_price', 'batch_number', 'notes', 'created_by', 'created_at',
    )
    list_select_related = ('product', 'warehouse', 'created_by')
    show_full_result_count = False
    list_per_page = 50
    date_hierarchy = 'created_at'

    fieldsets = (
        (_('Movement'), {
            'fields': ('id', 'product', 'warehouse', 'movement_type', 'quantity', 'unit_price', 'batch_number'),
        }),
        (_('Document'), {
            'fields': ('document_type', 'document_id', 'notes'),
        }),
        (_('Audit'), {
            'fields': ('created_by', 'created_at'),
        }),
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
