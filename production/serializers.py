"""
Production — Serializers

@file production/serializers.py
"""

from rest_framework import serializers

from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS

from .models import ProductionOrder, Recipe, RecipeIngredient


class RecipeIngredientSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)

    class Meta:
        model = RecipeIngredient
        fields = ['id', 'position', 'product', 'product_name', 'quantity', 'unit_of_measure']
        read_only_fields = fields


class RecipeReadSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    ingredients = RecipeIngredientSerializer(many=True, read_only=True)

    class Meta:
        model = Recipe
        fields = ['id', 'product', 'product_name', 'name', 'is_active', 'notes', 'ingredients', 'created_at']
        read_only_fields = fields


class IngredientWriteSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.DecimalField(max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES)
    unit_of_measure = serializers.CharField(required=False, max_length=20)


class RecipeWriteSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    ingredients = IngredientWriteSerializer(many=True)
    name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    notes = serializers.CharField(required=False, allow_blank=True)


class ProductionOrderReadSerializer(serializers.ModelSerializer):
    product = serializers.UUIDField(source='recipe.product_id', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = ProductionOrder
        fields = [
            'id', 'recipe', 'product', 'quantity_to_produce', 'warehouse',
            'status', 'status_display', 'notes',
            'created_at', 'started_at', 'completed_at', 'cancelled_at',
        ]
        read_only_fields = fields


class ProductionOrderWriteSerializer(serializers.Serializer):
    recipe_id = serializers.UUIDField()
    quantity_to_produce = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    warehouse_id = serializers.UUIDField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
