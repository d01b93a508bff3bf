"""
Suggestions — Service Layer

Reorder suggestions for products below their minimum stock. Two modes:
  - rules: cheapest supplier, quantity to reach twice the minimum
  - ai:    the configured provider is asked the same question and its
           answer is filtered against the registry and the catalog

@file suggestions/services.py
"""

import json
import logging
from decimal import Decimal

from core.exceptions import ValidationError
from products.models import Product
from products.services import ProductService
from stock.services import to_quantity
from suppliers.models import Supplier, SupplierProduct

from .models import AppSettings
from .providers import get_provider

logger = logging.getLogger('econome')

MODE_RULES = 'rules'
MODE_AI = 'ai'
MODES = (MODE_AI, MODE_RULES)

PROMPT_TEMPLATE = """
You are 'L'Économe', an intelligent purchasing assistant for a restaurant.
Your goal is to prevent stock shortages by suggesting optimized orders.
Priority is economy: always choose the cheapest supplier available.

Analyze the following products that are below their minimum stock level.
For each product, suggest a quantity to order to bring the stock to at least double the minimum threshold.
Then, select the supplier with the absolute lowest price per unit.

Here is the data:
{data}

Respond with a valid JSON array. Each object in the array must have:
- productId (string): The ID of the product
- supplierId (string): The ID of the selected supplier
- quantity (number): The quantity to order
- reasoning (string): Brief explanation of your choice
"""


def _offers_by_product(products) -> dict[str, list[SupplierProduct]]:
    offers: dict[str, list[SupplierProduct]] = {}
    queryset = (
        SupplierProduct.objects
        .select_related('supplier')
        .filter(product__in=products)
        .order_by('price', 'supplier__name')
    )
    for offer in queryset:
        offers.setdefault(offer.product_id, []).append(offer)
    return offers


def _suggestion(product: Product, supplier: Supplier, quantity: Decimal, reasoning: str, unit_price=None) -> dict:
    return {
        'product_id': product.pk,
        'product_name': product.name,
        'unit': product.unit,
        'supplier_id': supplier.pk,
        'supplier_name': supplier.name,
        'quantity': quantity,
        'unit_price': unit_price,
        'reasoning': reasoning,
    }


def build_prompt(products, offers: dict[str, list[SupplierProduct]]) -> str:
    data = [
        {
            'id': product.pk,
            'name': product.name,
            'currentStock': f'{product.current_stock} {product.unit}',
            'minStock': f'{product.min_stock} {product.unit}',
            'suppliers': [
                {
                    'supplierId': offer.supplier_id,
                    'supplierName': offer.supplier.name,
                    'price': str(offer.price),
                    'delivery': offer.supplier.delivery_days,
                    'minOrder': str(offer.supplier.min_order),
                }
                for offer in offers.get(product.pk, [])
            ],
        }
        for product in products
    ]
    return PROMPT_TEMPLATE.format(data=json.dumps(data, indent=2, ensure_ascii=False))


class SuggestionService:

    @staticmethod
    def rule_based() -> list[dict]:
        """Cheapest supplier per low-stock product, ordering up to 2 × min_stock."""
        products = list(ProductService.low_stock())
        offers = _offers_by_product(products)
        suggestions = []
        for product in products:
            candidates = offers.get(product.pk)
            if not candidates:
                logger.warning('No supplier lists low-stock product %s.', product.pk)
                continue
            cheapest = candidates[0]
            quantity = 2 * product.min_stock - product.current_stock
            suggestions.append(_suggestion(
                product, cheapest.supplier, quantity,
                reasoning=(
                    f'Cheapest of {len(candidates)} supplier(s) at {cheapest.price}€/{product.unit}; '
                    f'brings stock to twice the minimum ({2 * product.min_stock} {product.unit}).'
                ),
                unit_price=cheapest.price,
            ))
        return suggestions

    @staticmethod
    def ai_based() -> list[dict]:
        """
        Ask the configured provider. Suggestions naming an unknown
        product or supplier, or a non-positive quantity, are dropped.
        """
        products = list(ProductService.low_stock())
        if not products:
            return []
        offers = _offers_by_product(products)
        app_settings = AppSettings.load()
        provider = get_provider(app_settings)
        raw = provider.generate(build_prompt(products, offers))

        known_products = {product.pk: product for product in products}
        suggestions = []
        for entry in raw:
            if not isinstance(entry, dict):
                logger.warning('AI suggestion dropped, not an object: %r', entry)
                continue
            product_id = str(entry.get('productId', entry.get('product_id', '')))
            supplier_id = str(entry.get('supplierId', entry.get('supplier_id', '')))
            product = known_products.get(product_id) or Product.objects.filter(
                pk=product_id, is_deleted=False,
            ).first()
            supplier = Supplier.objects.filter(pk=supplier_id).first()
            if product is None or supplier is None:
                logger.warning('AI suggestion dropped, unknown product %s or supplier %s.', product_id, supplier_id)
                continue
            try:
                quantity = to_quantity(entry.get('quantity'))
            except ValidationError:
                quantity = Decimal('0')
            if quantity <= 0:
                logger.warning('AI suggestion dropped, invalid quantity for %s: %r', product_id, entry.get('quantity'))
                continue
            offer = next((o for o in offers.get(product.pk, []) if o.supplier_id == supplier.pk), None)
            suggestions.append(_suggestion(
                product, supplier, quantity,
                reasoning=str(entry.get('reasoning', '')),
                unit_price=offer.price if offer else None,
            ))
        logger.info(
            'AI suggestions (%s): %d kept of %d returned.',
            app_settings.provider, len(suggestions), len(raw),
        )
        return suggestions

    @staticmethod
    def suggest(mode: str = MODE_RULES) -> list[dict]:
        if mode not in MODES:
            raise ValidationError(detail=f'Unknown suggestion mode: {mode}.')
        if mode == MODE_AI:
            return SuggestionService.ai_based()
        return SuggestionService.rule_based()
