"""
Stockbook — Root URL Configuration

All API endpoints are namespaced under /api/v1/.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

admin.site.site_header = 'Stockbook Administration'
admin.site.site_title = 'Stockbook'
admin.site.index_title = 'Stock ledger & documents'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """Stockbook API v1 — endpoint directory."""
    def url(name):
        return reverse(f'api-v1:{name}', request=request, format=format)

    return Response({
        'auth': {
            'token': url('token-obtain'),
            'refresh': url('token-refresh'),
        },
        'catalog': {
            'products': url('catalog:product-list'),
            'partners': url('catalog:partner-list'),
            'warehouses': url('catalog:warehouse-list'),
        },
        'stock': {
            'movements': url('stock:movement-list'),
            'transfers': url('stock:transfer-list'),
            'adjustments': url('stock:adjustment-list'),
        },
        'receiving': url('receiving:receipt-list'),
        'invoicing': url('invoicing:invoice-list'),
        'production': {
            'recipes': url('production:recipe-list'),
            'orders': url('production:order-list'),
        },
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('auth/token/', TokenObtainPairView.as_view(), name='token-obtain'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('catalog/', include('catalog.urls', namespace='catalog')),
    path('stock/', include('stock.urls', namespace='stock')),
    path('receiving/', include('receiving.urls', namespace='receiving')),
    path('invoicing/', include('invoicing.urls', namespace='invoicing')),
    path('production/', include('production.urls', namespace='production')),
]

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
