"""
Stock — URL Configuration

@file stock/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import AdjustmentViewSet, StockMovementViewSet, TransferViewSet

app_name = 'stock'

router = DefaultRouter()
router.register('movements', StockMovementViewSet, basename='movement')
router.register('transfers', TransferViewSet, basename='transfer')
router.register('adjustments', AdjustmentViewSet, basename='adjustment')

urlpatterns = [
    path('', include(router.urls)),
]
