"""
Receiving — Views

Goods receipts are final on creation: list, retrieve, create, and the
movements each receipt booked.

@file receiving/views.py
"""

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from stock.models import DocumentType
from stock.serializers import StockMovementSerializer
from stock.services import StockLedger

from .models import GoodsReceipt
from .serializers import GoodsReceiptReadSerializer, GoodsReceiptWriteSerializer
from .services import GoodsReceiptService


class GoodsReceiptViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    filterset_fields = ['supplier', 'series', 'fiscal_year']
    search_fields = ['series', 'supplier__name', 'supplier_document_number']
    ordering_fields = ['receipt_date', 'number', 'total_with_vat']
    ordering = ['-receipt_date', '-number']

    def get_queryset(self):
        return GoodsReceipt.objects.filter(is_deleted=False).select_related('supplier').prefetch_related(
            'items__product',
        )

    def get_serializer_class(self):
        if self.action == 'create':
            return GoodsReceiptWriteSerializer
        return GoodsReceiptReadSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        receipt = GoodsReceiptService().create_receipt(actor=request.user, **serializer.validated_data).unwrap()
        receipt = self.get_queryset().get(pk=receipt.pk)
        return Response(
            GoodsReceiptReadSerializer(receipt, context={'request': request}).data,
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=['get'], url_path='movements')
    def movements(self, request, pk=None):
        receipt = self.get_object()
        movements = StockLedger().document_movements(DocumentType.GOODS_RECEIPT, receipt.pk)
        return Response(StockMovementSerializer(movements, many=True).data)
