"""
Production — URL Configuration

@file production/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import ProductionOrderViewSet, RecipeViewSet

app_name = 'production'

router = DefaultRouter()
router.register('recipes', RecipeViewSet, basename='recipe')
router.register('orders', ProductionOrderViewSet, basename='order')

urlpatterns = [
    path('', include(router.urls)),
]
