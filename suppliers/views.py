"""
Suppliers — Views

DRF ViewSet for suppliers and their catalogs, plus the per-product
price comparison across suppliers.

@file suppliers/views.py
"""

from django.db.models import Prefetch
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from products.services import ProductService

from .models import Supplier, SupplierProduct
from .serializers import (
    PriceComparisonSerializer,
    SupplierReadSerializer,
    SupplierWriteSerializer,
)
from .services import SupplierService


class SupplierViewSet(viewsets.ModelViewSet):
    """
    Suppliers: list, create, retrieve, update (catalog replaced when
    'products' is sent), destroy (hard delete).
    """

    permission_classes = [IsAuthenticated]
    search_fields = ['name', 'delivery_days']
    ordering_fields = ['name', 'min_order', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return Supplier.objects.prefetch_related(
            Prefetch(
                'catalog',
                queryset=SupplierProduct.objects.select_related('product').order_by('position'),
            ),
        )

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return SupplierWriteSerializer
        if self.action == 'compare':
            return PriceComparisonSerializer
        return SupplierReadSerializer

    def _read(self, supplier):
        supplier = self.get_queryset().get(pk=supplier.pk)
        return SupplierReadSerializer(supplier, context={'request': self.request}).data

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        supplier = SupplierService.create_supplier(actor=request.user, **serializer.validated_data)
        return Response(self._read(supplier), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        supplier = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        fields = dict(serializer.validated_data)
        fields.pop('id', None)
        updated = SupplierService.update_supplier(supplier_id=supplier.pk, actor=request.user, **fields)
        return Response(self._read(updated))

    def destroy(self, request, *args, **kwargs):
        supplier = self.get_object()
        SupplierService.delete_supplier(supplier_id=supplier.pk, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(
        detail=False,
        methods=['get'],
        url_path=r'compare/(?P<product_id>[^/.]+)',
    )
    def compare(self, request, product_id=None):
        """Every supplier listing the product, cheapest first."""
        ProductService.get_product(product_id)
        offers = SupplierService.compare_prices(product_id)
        return Response(PriceComparisonSerializer(offers, many=True).data)
