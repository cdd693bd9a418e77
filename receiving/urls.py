"""
Receiving — URL Configuration

@file receiving/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import GoodsReceiptViewSet

app_name = 'receiving'

router = DefaultRouter()
router.register('receipts', GoodsReceiptViewSet, basename='receipt')

urlpatterns = [
    path('', include(router.urls)),
]
