"""
Sequences — Django Admin Configuration

Counters are visible but not editable; renumbering would break the
uniqueness of already issued documents.

@file sequences/admin.py
"""

from django.contrib import admin

from .models import DocumentSequence


@admin.register(DocumentSequence)
class DocumentSequenceAdmin(admin.ModelAdmin):
    list_display = ('document_type', 'series', 'year', 'next_number', 'updated_at')
    list_filter = ('document_type', 'year')
    readonly_fields = ('document_type', 'series', 'year', 'next_number', 'created_at', 'updated_at')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
