"""
Invoicing — Django Admin Configuration

Invoices are browsed here; state changes go through the API so stock
stays in step with the document.

@file invoicing/admin.py
"""

from django.contrib import admin

from .models import Invoice, InvoiceItem


class InvoiceItemInline(admin.TabularInline):
    model = InvoiceItem
    extra = 0
    fields = ('position', 'product', 'warehouse', 'quantity', 'unit_price', 'discount_percent', 'vat_rate')
    readonly_fields = fields
    can_delete = False


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ('full_number', 'partner', 'issue_date', 'due_date', 'status', 'total_with_vat')
    list_filter = ('status', 'series', 'fiscal_year')
    search_fields = ('partner__name', 'notes')
    date_hierarchy = 'issue_date'
    list_select_related = ('partner',)
    inlines = [InvoiceItemInline]
    readonly_fields = (
        'series', 'number', 'fiscal_year', 'partner', 'issue_date', 'due_date', 'status',
        'total_amount', 'total_vat', 'total_with_vat',
        'issued_at', 'paid_at', 'cancelled_at', 'is_deleted', 'deleted_at',
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
