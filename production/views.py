"""
Production — Views

Recipes (list, retrieve, create) and production orders with the
start / process / cancel workflow actions.

@file production/views.py
"""

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from stock.models import DocumentType
from stock.serializers import StockMovementSerializer
from stock.services import StockLedger

from .models import ProductionOrder, Recipe
from .serializers import (
    ProductionOrderReadSerializer,
    ProductionOrderWriteSerializer,
    RecipeReadSerializer,
    RecipeWriteSerializer,
)
from .services import ProductionService


class RecipeViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    filterset_fields = ['product', 'is_active']
    search_fields = ['name', 'product__name', 'product__code']

    def get_queryset(self):
        return Recipe.objects.select_related('product').prefetch_related('ingredients__product')

    def get_serializer_class(self):
        if self.action == 'create':
            return RecipeWriteSerializer
        return RecipeReadSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        recipe = ProductionService().create_recipe(actor=request.user, **serializer.validated_data).unwrap()
        recipe = self.get_queryset().get(pk=recipe.pk)
        return Response(RecipeReadSerializer(recipe).data, status=status.HTTP_201_CREATED)


class ProductionOrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    filterset_fields = ['status', 'recipe']
    ordering_fields = ['created_at', 'completed_at']
    ordering = ['-created_at']

    def get_queryset(self):
        return ProductionOrder.objects.select_related('recipe')

    def get_serializer_class(self):
        if self.action == 'create':
            return ProductionOrderWriteSerializer
        return ProductionOrderReadSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = ProductionService().create_order(actor=request.user, **serializer.validated_data).unwrap()
        return Response(ProductionOrderReadSerializer(order).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_path='start')
    def start(self, request, pk=None):
        order = ProductionService().start_order(order_id=self.get_object().pk, actor=request.user).unwrap()
        return Response(ProductionOrderReadSerializer(order).data)

    @action(detail=True, methods=['post'], url_path='process')
    def process(self, request, pk=None):
        order = ProductionService().process_order(order_id=self.get_object().pk, actor=request.user).unwrap()
        return Response(ProductionOrderReadSerializer(order).data)

    @action(detail=True, methods=['post'], url_path='cancel')
    def cancel(self, request, pk=None):
        order = ProductionService().cancel_order(order_id=self.get_object().pk, actor=request.user).unwrap()
        return Response(ProductionOrderReadSerializer(order).data)

    @action(detail=True, methods=['get'], url_path='movements')
    def movements(self, request, pk=None):
        order = self.get_object()
        movements = StockLedger().document_movements(DocumentType.PRODUCTION, order.pk)
        return Response(StockMovementSerializer(movements, many=True).data)
