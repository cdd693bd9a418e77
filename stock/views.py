"""
Stock — Views

Movement history queries, warehouse transfers, stock adjustments and
an on-demand reconciliation report.

@file stock/views.py
"""

from datetime import datetime, time

from django.utils import timezone
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from .serializers import (
    AdjustmentSerializer,
    MovementQuerySerializer,
    MovementRangeSerializer,
    ReconciliationSerializer,
    StockMovementSerializer,
    TransferSerializer,
)
from .services import StockDocumentService, StockLedger


def _day_bounds(start, end):
    tz = timezone.get_current_timezone()
    return (
        timezone.make_aware(datetime.combine(start, time.min), tz),
        timezone.make_aware(datetime.combine(end, time.max), tz),
    )


class StockMovementViewSet(viewsets.ViewSet):
    """
    GET  movements/?product=<id>&limit=<n>    newest first
    GET  movements/range/?start=&end=         inclusive calendar days
    GET  movements/balances/?product=<id>     per-warehouse sums
    GET  movements/reconcile/                 cache vs. ledger (staff)
    """

    ledger_class = StockLedger

    def list(self, request):
        query = MovementQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        movements = self.ledger_class().history(
            query.validated_data['product'], limit=query.validated_data.get('limit'),
        )
        return Response(StockMovementSerializer(movements, many=True).data)

    @action(detail=False, methods=['get'], url_path='range')
    def by_date_range(self, request):
        query = MovementRangeSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        start, end = _day_bounds(query.validated_data['start'], query.validated_data['end'])
        movements = self.ledger_class().history_by_date_range(
            start, end, product_id=query.validated_data.get('product'),
        )
        return Response(StockMovementSerializer(movements, many=True).data)

    @action(detail=False, methods=['get'], url_path='balances')
    def balances(self, request):
        query = MovementQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        balances = self.ledger_class().warehouse_balances(query.validated_data['product'])
        return Response([
            {'warehouse': warehouse_id, 'quantity': quantity}
            for warehouse_id, quantity in balances.items()
        ])

    @action(detail=False, methods=['get'], url_path='reconcile', permission_classes=[IsAdminUser])
    def reconcile(self, request):
        discrepancies = self.ledger_class().reconcile()
        return Response(ReconciliationSerializer(discrepancies, many=True).data)


class TransferViewSet(viewsets.ViewSet):

    def create(self, request):
        ser = TransferSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        outbound, inbound = StockDocumentService().transfer_stock(
            actor=request.user, **ser.validated_data,
        ).unwrap()
        return Response(
            StockMovementSerializer([outbound, inbound], many=True).data,
            status=status.HTTP_201_CREATED,
        )


class AdjustmentViewSet(viewsets.ViewSet):

    def create(self, request):
        ser = AdjustmentSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        movement = StockDocumentService().adjust_stock(
            actor=request.user, **ser.validated_data,
        ).unwrap()
        if movement is None:
            return Response({'adjusted': False}, status=status.HTTP_200_OK)
        return Response(StockMovementSerializer(movement).data, status=status.HTTP_201_CREATED)
