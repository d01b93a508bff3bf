"""
Stock — Views

Read-only ledger listing, sales report application and inventory
imports (history + new import). Writes go through
ReconciliationService; the ledger itself is never written here.

@file stock/views.py
"""

from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.pagination import LedgerPagination

from .models import StockImportRecord, StockMovement
from .serializers import (
    InventoryImportSerializer,
    SalesReportSerializer,
    StockImportRecordSerializer,
    StockMovementReadSerializer,
)
from .services import ReconciliationService


def _reconciliation_payload(result):
    return {
        'updated': [
            {'id': product.pk, 'name': product.name, 'current_stock': product.current_stock}
            for product in result.updated
        ],
        'skipped': result.skipped,
    }


class StockMovementViewSet(viewsets.ReadOnlyModelViewSet):
    """Ledger entries, newest first. Filter by product, type or reference."""

    permission_classes = [IsAuthenticated]
    serializer_class = StockMovementReadSerializer
    pagination_class = LedgerPagination
    filterset_fields = ['product', 'movement_type', 'reference_id']
    ordering = ['-id']

    def get_queryset(self):
        return StockMovement.objects.select_related('product')


class SalesReportViewSet(viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated]
    serializer_class = SalesReportSerializer

    def create(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = ReconciliationService.apply_sales(
            lines=ser.validated_data['lines'],
            actor=request.user,
        )
        return Response(_reconciliation_payload(result), status=status.HTTP_200_OK)


class StockImportViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Inventory count imports: history (GET) and new import (POST)."""

    permission_classes = [IsAuthenticated]
    ordering = ['-date']

    def get_queryset(self):
        return StockImportRecord.objects.all()

    def get_serializer_class(self):
        if self.action == 'create':
            return InventoryImportSerializer
        return StockImportRecordSerializer

    def create(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = ReconciliationService.apply_inventory_import(
            file_name=ser.validated_data['file_name'],
            updates=ser.validated_data['updates'],
            actor=request.user,
        )
        payload = _reconciliation_payload(result)
        payload['import'] = StockImportRecordSerializer(result.record).data
        return Response(payload, status=status.HTTP_201_CREATED)
