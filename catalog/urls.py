"""
Catalog — URL Configuration

@file catalog/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import PartnerViewSet, ProductViewSet, WarehouseViewSet

app_name = 'catalog'

router = DefaultRouter()
router.register('products', ProductViewSet, basename='product')
router.register('partners', PartnerViewSet, basename='partner')
router.register('warehouses', WarehouseViewSet, basename='warehouse')

urlpatterns = [
    path('', include(router.urls)),
]
