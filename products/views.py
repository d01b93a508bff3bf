"""
Products — Views

DRF ViewSet for the product registry: CRUD (soft delete), low-stock
list, manual stock adjustment and the product's ledger history.

@file products/views.py
"""

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from stock.serializers import StockAdjustSerializer, StockMovementReadSerializer
from stock.services import StockLedger, StockService

from .models import Product
from .serializers import ProductReadSerializer, ProductWriteSerializer
from .services import ProductService


class ProductViewSet(viewsets.ModelViewSet):
    """
    Products: list, create, retrieve, update, destroy (soft delete).
    Extra routes: low-stock, stock (PATCH), movements.
    """

    permission_classes = [IsAuthenticated]
    filterset_fields = ['family', 'unit']
    search_fields = ['name', 'family']
    ordering_fields = ['name', 'family', 'current_stock', 'min_stock', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return Product.objects.filter(is_deleted=False)

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return ProductWriteSerializer
        if self.action == 'stock':
            return StockAdjustSerializer
        return ProductReadSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = ProductService.create_product(actor=request.user, **serializer.validated_data)
        return Response(
            ProductReadSerializer(product, context={'request': request}).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        product = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        fields = dict(serializer.validated_data)
        fields.pop('id', None)
        updated = ProductService.update_product(product_id=product.pk, actor=request.user, **fields)
        return Response(ProductReadSerializer(updated, context={'request': request}).data)

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        ProductService.delete_product(product_id=product.pk, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'], url_path='low-stock')
    def low_stock(self, request):
        products = ProductService.low_stock()
        return Response(ProductReadSerializer(products, many=True, context={'request': request}).data)

    @action(detail=True, methods=['patch'], url_path='stock')
    def stock(self, request, pk=None):
        ser = StockAdjustSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        product = StockService.adjust_stock(
            product_id=pk,
            new_stock=ser.validated_data['new_stock'],
            actor=request.user,
            notes=ser.validated_data.get('notes') or 'Manual adjustment',
        )
        return Response(ProductReadSerializer(product, context={'request': request}).data)

    @action(detail=True, methods=['get'], url_path='movements')
    def movements(self, request, pk=None):
        product = self.get_object()
        movements = StockLedger.history(product.pk).select_related('product')
        return Response(StockMovementReadSerializer(movements, many=True).data)
