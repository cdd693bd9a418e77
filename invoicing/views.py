"""
Invoicing — Views

Invoice CRUD plus workflow actions (issue, cancel, pay) and the list
of stock movements an invoice produced.

@file invoicing/views.py
"""

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from stock.models import DocumentType
from stock.serializers import StockMovementSerializer
from stock.services import StockLedger

from .models import Invoice
from .serializers import InvoiceReadSerializer, InvoiceUpdateSerializer, InvoiceWriteSerializer
from .services import InvoiceService


class InvoiceViewSet(viewsets.ModelViewSet):
    """
    Invoices: list, create, retrieve, update (DRAFT only), destroy
    (soft delete, DRAFT only). Workflow: issue, cancel, pay.
    """

    filterset_fields = ['status', 'partner', 'series', 'fiscal_year']
    search_fields = ['series', 'partner__name', 'notes']
    ordering_fields = ['issue_date', 'number', 'total_with_vat']
    ordering = ['-issue_date', '-number']

    def get_queryset(self):
        return Invoice.objects.filter(is_deleted=False).select_related('partner').prefetch_related(
            'items__product',
        )

    def get_serializer_class(self):
        if self.action in ('update', 'partial_update'):
            return InvoiceUpdateSerializer
        if self.action == 'create':
            return InvoiceWriteSerializer
        return InvoiceReadSerializer

    def _read(self, invoice):
        invoice = self.get_queryset().get(pk=invoice.pk)
        return InvoiceReadSerializer(invoice, context={'request': self.request}).data

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        invoice = InvoiceService().create_invoice(actor=request.user, **serializer.validated_data).unwrap()
        return Response(self._read(invoice), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        invoice = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        updated = InvoiceService().update_draft_invoice(
            invoice_id=invoice.pk, actor=request.user, **serializer.validated_data,
        ).unwrap()
        return Response(self._read(updated))

    def destroy(self, request, *args, **kwargs):
        invoice = self.get_object()
        InvoiceService().discard_draft_invoice(invoice_id=invoice.pk, actor=request.user).unwrap()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'], url_path='issue')
    def issue(self, request, pk=None):
        invoice = InvoiceService().issue_invoice(invoice_id=self.get_object().pk, actor=request.user).unwrap()
        return Response(self._read(invoice))

    @action(detail=True, methods=['post'], url_path='cancel')
    def cancel(self, request, pk=None):
        invoice = InvoiceService().cancel_invoice(invoice_id=self.get_object().pk, actor=request.user).unwrap()
        return Response(self._read(invoice))

    @action(detail=True, methods=['post'], url_path='pay')
    def pay(self, request, pk=None):
        invoice = InvoiceService().mark_paid(invoice_id=self.get_object().pk, actor=request.user).unwrap()
        return Response(self._read(invoice))

    @action(detail=True, methods=['get'], url_path='movements')
    def movements(self, request, pk=None):
        invoice = self.get_object()
        movements = StockLedger().document_movements(DocumentType.INVOICE, invoice.pk)
        return Response(StockMovementSerializer(movements, many=True).data)
