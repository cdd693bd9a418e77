"""
Catalog — Views

@file catalog/views.py
"""

from rest_framework import viewsets

from .models import Partner, Product, Warehouse
from .serializers import PartnerSerializer, ProductSerializer, WarehouseSerializer


class ProductViewSet(viewsets.ModelViewSet):
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filterset_fields = ['is_active', 'unit_of_measure']
    search_fields = ['code', 'name']
    ordering_fields = ['code', 'name', 'quantity']
    http_method_names = ['get', 'post', 'patch', 'head', 'options']

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    def perform_update(self, serializer):
        serializer.save(updated_by=self.request.user)


class PartnerViewSet(viewsets.ModelViewSet):
    queryset = Partner.objects.all()
    serializer_class = PartnerSerializer
    filterset_fields = ['partner_type', 'is_active']
    search_fields = ['name', 'tax_code']
    http_method_names = ['get', 'post', 'patch', 'head', 'options']

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)


class WarehouseViewSet(viewsets.ModelViewSet):
    queryset = Warehouse.objects.all()
    serializer_class = WarehouseSerializer
    search_fields = ['code', 'name']
    http_method_names = ['get', 'post', 'patch', 'head', 'options']
