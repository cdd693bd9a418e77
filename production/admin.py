"""
Production — Django Admin Configuration

@file production/admin.py
"""

from django.contrib import admin

from .models import ProductionOrder, Recipe, RecipeIngredient


class RecipeIngredientInline(admin.TabularInline):
    model = RecipeIngredient
    extra = 1
    fields = ('position', 'product', 'quantity', 'unit_of_measure')


@admin.register(Recipe)
class RecipeAdmin(admin.ModelAdmin):
    list_display = ('name', 'product', 'is_active')
    list_filter = ('is_active',)
    search_fields = ('name', 'product__name', 'product__code')
    inlines = [RecipeIngredientInline]


@admin.register(ProductionOrder)
class ProductionOrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'recipe', 'quantity_to_produce', 'status', 'created_at', 'completed_at')
    list_filter = ('status',)
    list_select_related = ('recipe',)
    readonly_fields = ('status', 'started_at', 'completed_at', 'cancelled_at')
