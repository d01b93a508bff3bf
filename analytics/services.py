"""
Analytics — Service Layer

Read-only aggregates for the purchasing dashboard: alert counts, active
orders, spending per month and the value of stock on hand.

@file analytics/services.py
"""

from decimal import Decimal

from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from orders.models import Order
from products.models import Product
from products.services import ProductService
from suppliers.models import Supplier

ACTIVE_ORDER_STATUSES = (Order.StatusChoices.SENT, Order.StatusChoices.CONFIRMED)
UNSPENT_STATUSES = (Order.StatusChoices.DRAFT, Order.StatusChoices.CANCELLED)


def _spending_orders():
    return Order.objects.exclude(status__in=UNSPENT_STATUSES)


class AnalyticsService:

    @staticmethod
    def dashboard() -> dict:
        now = timezone.localtime()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        monthly = _spending_orders().filter(date__gte=month_start).aggregate(total=Sum('total'))['total']

        stock_value = Product.objects.filter(is_deleted=False).aggregate(
            value=Sum(ExpressionWrapper(
                F('current_stock') * F('average_cost'),
                output_field=DecimalField(max_digits=24, decimal_places=5),
            )),
        )['value']

        return {
            'low_stock_count': ProductService.low_stock().count(),
            'active_orders': Order.objects.filter(status__in=ACTIVE_ORDER_STATUSES).count(),
            'active_suppliers': Supplier.objects.count(),
            'monthly_spending': monthly or Decimal('0'),
            'total_stock_value': (stock_value or Decimal('0')).quantize(Decimal('0.01')),
        }

    @staticmethod
    def monthly_spending(months: int = 12) -> list[dict]:
        """Order count and amount spent per calendar month, oldest first."""
        rows = (
            _spending_orders()
            .annotate(month=TruncMonth('date'))
            .values('month')
            .annotate(order_count=Count('id'), total_spent=Sum('total'))
            .order_by('-month')[:months]
        )
        return [
            {
                'month': row['month'].strftime('%Y-%m'),
                'order_count': row['order_count'],
                'total_spent': row['total_spent'] or Decimal('0'),
            }
            for row in reversed(list(rows))
        ]
