"""
Cart — Views

The cart lives in the caller's session: grouped view and clear on the
collection, add / update on items, and checkout into DRAFT orders.

@file cart/views.py
"""

from decimal import Decimal

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.models import Order
from orders.serializers import OrderReadSerializer

from .serializers import CartItemAddSerializer, CartItemUpdateSerializer
from .services import Cart


def _cart_payload(cart: Cart) -> dict:
    groups = cart.group_by_supplier()
    return {
        'suppliers': groups,
        'item_count': len(cart),
        'total': sum((group['total'] for group in groups), Decimal('0')),
    }


class CartView(APIView):
    """GET: cart grouped by supplier. DELETE: empty the cart."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(_cart_payload(Cart(request.session)))

    def delete(self, request):
        Cart(request.session).clear()
        return Response(status=status.HTTP_204_NO_CONTENT)


class CartItemView(APIView):
    """POST: add (or merge) a line. PATCH: set a line's quantity; 0 removes it."""

    permission_classes = [IsAuthenticated]

    def post(self, request):
        ser = CartItemAddSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        cart = Cart(request.session)
        data = ser.validated_data
        if data.get('supplier_id'):
            cart.add_item(data['product_id'], data['supplier_id'], data['quantity'])
        else:
            cart.add_cheapest(data['product_id'], data['quantity'])
        return Response(_cart_payload(cart), status=status.HTTP_201_CREATED)

    def patch(self, request):
        ser = CartItemUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        cart = Cart(request.session)
        data = ser.validated_data
        cart.update_quantity(data['product_id'], data['supplier_id'], data['quantity'])
        return Response(_cart_payload(cart))


class CartCheckoutView(APIView):
    """POST: one DRAFT order per supplier, then the cart is emptied."""

    permission_classes = [IsAuthenticated]

    def post(self, request):
        orders = Cart(request.session).checkout(actor=request.user)
        orders = Order.objects.prefetch_related('items').filter(pk__in=[o.pk for o in orders])
        return Response(
            OrderReadSerializer(orders, many=True, context={'request': request}).data,
            status=status.HTTP_201_CREATED,
        )
