"""
Orders — Views

DRF ViewSet for purchase orders: list / retrieve / create / delete and
the workflow actions (send, confirm, cancel, receive). Creation from a
posted cart and the ledger entries of an order.

@file orders/views.py
"""

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from stock.serializers import StockMovementReadSerializer

from .models import Order
from .permissions import CanManageOrder
from .serializers import (
    OrderFromCartSerializer,
    OrderReadSerializer,
    OrderWriteSerializer,
    ReceiptSerializer,
)
from .services import OrderService


class OrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    Orders are never edited in place; they move through the workflow
    actions only.
    """

    permission_classes = [CanManageOrder]
    filterset_fields = ['status', 'supplier']
    search_fields = ['id', 'supplier_name']
    ordering_fields = ['date', 'total', 'status']
    ordering = ['-date']

    def get_queryset(self):
        return Order.objects.prefetch_related('items')

    def get_serializer_class(self):
        if self.action == 'create':
            return OrderWriteSerializer
        if self.action == 'from_cart':
            return OrderFromCartSerializer
        if self.action == 'receive':
            return ReceiptSerializer
        return OrderReadSerializer

    def _read(self, order, **kwargs):
        return Response(
            OrderReadSerializer(OrderService.get_order(order.pk), context={'request': self.request}).data,
            **kwargs,
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.create_order(
            supplier_id=serializer.validated_data['supplier_id'],
            items=serializer.validated_data['items'],
            order_id=serializer.validated_data.get('id'),
            actor=request.user,
        )
        return self._read(order, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        OrderService.delete(order_id=kwargs['pk'], actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['post'], url_path='from-cart')
    def from_cart(self, request):
        ser = OrderFromCartSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        orders = OrderService.create_from_cart(cart_items=ser.validated_data['items'], actor=request.user)
        orders = Order.objects.prefetch_related('items').filter(pk__in=[o.pk for o in orders])
        return Response(
            OrderReadSerializer(orders, many=True, context={'request': request}).data,
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=['post'], url_path='send')
    def send(self, request, pk=None):
        return self._read(OrderService.send(order_id=pk, actor=request.user))

    @action(detail=True, methods=['post'], url_path='confirm')
    def confirm(self, request, pk=None):
        return self._read(OrderService.confirm(order_id=pk, actor=request.user))

    @action(detail=True, methods=['post'], url_path='cancel')
    def cancel(self, request, pk=None):
        return self._read(OrderService.cancel(order_id=pk, actor=request.user))

    @action(detail=True, methods=['post'], url_path='receive')
    def receive(self, request, pk=None):
        ser = ReceiptSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        order = OrderService.receive_items(
            order_id=pk,
            lines=ser.validated_data['items'],
            actor=request.user,
        )
        return self._read(order)

    @action(detail=True, methods=['get'], url_path='movements')
    def movements(self, request, pk=None):
        movements = OrderService.movements(pk)
        return Response(StockMovementReadSerializer(movements, many=True).data)
