# 🧮 checkout_engine/domain/checkout/services.py
"""
🧮 `CheckoutAggregator`: підсумок замовлення: subtotal, податок, доставка, grand total.

🔹 Subtotal = Σ сум рядків (PricingResolver); податок = Σ податків по рядках (TaxEngine).
🔹 Доставка: flat / weight_based / order_based за налаштуваннями або останній прийнятий
   тариф перевізника для того самого пункту призначення й ваги.
🔹 Якщо доставку не визначено, підсумок позначається неповним, а не обнуляється.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Mapping, Optional, Sequence, Tuple, Union

# 🧩 Внутрішні модулі проєкту
from checkout_engine.domain.checkout.interfaces import IncompleteReason, OrderTotal, ShippingResolution
from checkout_engine.domain.currency.interfaces import CurrencyCode, IMoneyConverter, Money
from checkout_engine.domain.delivery.interfaces import QuoteState, RateStatus, ShippingDestination
from checkout_engine.domain.delivery.rate_quoter import RateQuoteSession
from checkout_engine.domain.pricing.interfaces import LinePrice
from checkout_engine.domain.pricing.services import PricingResolver
from checkout_engine.domain.products.entities import CartLine, PriceMap, Product
from checkout_engine.domain.products.services.weight_resolver import WeightResolver
from checkout_engine.domain.settings.checkout_settings import CheckoutSettings, PricingType, ShippingMethod
from checkout_engine.domain.tax.services import TaxEngine
from checkout_engine.errors.custom_errors import PricingDataError
from checkout_engine.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.checkout")

_PENDING_STATES = {
    QuoteState.INVALID: IncompleteReason.INVALID_DESTINATION,
    QuoteState.FAILED: IncompleteReason.PROVIDER_ERROR,
}
_INVALID_REASONS = {
    RateStatus.INVALID_DESTINATION: IncompleteReason.INVALID_DESTINATION,
    RateStatus.INVALID_WEIGHT: IncompleteReason.INVALID_WEIGHT,
}


class CheckoutAggregator:
    """🧮 Компонує ціноутворення, вагу, податок і доставку в `OrderTotal`."""

    def __init__(
        self,
        pricing: PricingResolver,
        weights: WeightResolver,
        taxes: TaxEngine,
        converter: IMoneyConverter,
        *,
        base_currency: CurrencyCode = CurrencyCode.OMR,
    ) -> None:
        self._pricing = pricing
        self._weights = weights
        self._taxes = taxes
        self._converter = converter
        self._base = base_currency

    # ================================
    # 🧮 ПІДСУМОК ЗАМОВЛЕННЯ
    # ================================
    def compute_order(
        self,
        lines: Sequence[CartLine],
        destination: Optional[ShippingDestination],
        method: Optional[ShippingMethod],
        settings: CheckoutSettings,
        currency: Union[str, CurrencyCode],
        catalog: Mapping[str, Product],
        *,
        rate_session: Optional[RateQuoteSession] = None,
        now: Optional[datetime] = None,
    ) -> OrderTotal:
        """
        🚀 Рахує підсумок у валюті покупця.

        Raises:
            PricingDataError: товар відсутній у каталозі або бракує цінових даних.
        """
        ccy = CurrencyCode.parse(currency)
        priced: List[LinePrice] = []
        subtotal = Money.zero(ccy)
        taxable: List[Tuple[Money, Optional[str]]] = []

        for line in lines:
            product = catalog.get(line.product_id)
            if product is None:
                raise PricingDataError(
                    f"Product {line.product_id} is not in the catalog",
                    kind=PricingDataError.MISSING_PRODUCT,
                    product_id=line.product_id,
                    currency=str(ccy),
                )
            line_price = self._pricing.resolve_cart_line(line, product, ccy, now)
            priced.append(line_price)
            subtotal = subtotal + line_price.total
            taxable.append((line_price.total, product.category_id))

        tax = self._taxes.total_tax(taxable, settings, ccy)
        total_weight = self._weights.total_cart_weight(lines, catalog)
        shipping_weight = self._weights.shipping_weight(total_weight)

        resolution = self.shipping_cost(
            method,
            destination=destination,
            currency=ccy,
            subtotal=subtotal,
            shipping_weight_kg=shipping_weight,
            rate_session=rate_session,
        )

        grand_total = subtotal + tax + resolution.cost if resolution.cost is not None else None
        order = OrderTotal(
            currency=ccy,
            lines=tuple(priced),
            subtotal=subtotal,
            tax=tax,
            shipping=resolution.cost,
            grand_total=grand_total,
            total_weight_kg=total_weight,
            shipping_weight_kg=shipping_weight,
            incomplete_reason=resolution.reason,
        )
        if order.complete:
            logger.info(
                "🧾 Order | subtotal=%s tax=%s shipping=%s total=%s %s",
                subtotal.amount,
                tax.amount,
                resolution.cost.amount,
                grand_total.amount,
                ccy,
            )
        else:
            logger.warning("⚠️ Order incomplete (%s) | subtotal=%s tax=%s %s", resolution.reason, subtotal.amount, tax.amount, ccy)
        return order

    # ================================
    # 🚚 ВАРТІСТЬ ДОСТАВКИ
    # ================================
    def shipping_cost(
        self,
        method: Optional[ShippingMethod],
        *,
        destination: Optional[ShippingDestination],
        currency: CurrencyCode,
        subtotal: Money,
        shipping_weight_kg: Decimal,
        rate_session: Optional[RateQuoteSession] = None,
    ) -> ShippingResolution:
        if method is None:
            return ShippingResolution(reason=IncompleteReason.NO_METHOD)
        if not method.enabled:
            return ShippingResolution(reason=IncompleteReason.METHOD_DISABLED)
        if destination is not None and destination.country and not method.allows_country(destination.country):
            return ShippingResolution(reason=IncompleteReason.METHOD_RESTRICTED)
        if not method.allows_order_value(self._to_base(subtotal)):
            return ShippingResolution(reason=IncompleteReason.ORDER_VALUE_OUT_OF_RANGE)

        if method.is_free:
            return ShippingResolution(cost=Money.zero(currency))

        if method.pricing_type is PricingType.FLAT:
            cost = self._cost_in(method.base_costs, currency)
        elif method.pricing_type is PricingType.WEIGHT_BASED:
            cost = self._weight_based(method, currency, shipping_weight_kg)
        elif method.pricing_type is PricingType.ORDER_BASED:
            tier = next((t for t in method.order_tiers if t.matches(self._to_base(subtotal))), None)
            if tier is None:
                return ShippingResolution(reason=IncompleteReason.NO_MATCHING_TIER)
            cost = self._cost_in(tier.costs, currency)
        else:
            return self._quoted_cost(rate_session, destination, currency, shipping_weight_kg)

        if cost is None:
            logger.error("❌ Спосіб %s не має вартості для %s", method.id, currency)
            return ShippingResolution(reason=IncompleteReason.MISSING_SHIPPING_COST)
        return ShippingResolution(cost=Money(self._converter.quantize(cost, currency), currency))

    def available_methods(
        self,
        settings: CheckoutSettings,
        destination_country: Optional[str],
        subtotal: Money,
    ) -> Tuple[ShippingMethod, ...]:
        """Увімкнені способи, дозволені для країни та суми замовлення."""
        order_value = self._to_base(subtotal)
        return tuple(
            method
            for method in settings.shipping_methods
            if method.enabled
            and (not destination_country or method.allows_country(destination_country))
            and method.allows_order_value(order_value)
        )

    # ================================
    # 🧠 ВНУТРІШНЯ ЛОГІКА
    # ================================
    def _to_base(self, money: Money) -> Decimal:
        return self._converter.convert(money.amount, money.currency, self._base)

    def _cost_in(self, costs: PriceMap, currency: CurrencyCode) -> Optional[Decimal]:
        if currency in costs:
            return costs[currency]
        if self._base in costs:
            return self._converter.convert(costs[self._base], self._base, currency)
        return None

    def _weight_based(self, method: ShippingMethod, currency: CurrencyCode, weight_kg: Decimal) -> Optional[Decimal]:
        per_kg = self._cost_in(method.cost_per_kg, currency)
        if per_kg is None:
            return None
        base = self._cost_in(method.base_costs, currency) if method.base_costs else Decimal("0")
        if base is None:
            return None
        return base + per_kg * weight_kg

    def _quoted_cost(
        self,
        session: Optional[RateQuoteSession],
        destination: Optional[ShippingDestination],
        currency: CurrencyCode,
        shipping_weight_kg: Decimal,
    ) -> ShippingResolution:
        if session is None:
            return ShippingResolution(reason=IncompleteReason.QUOTE_PENDING)
        latest = session.latest_accepted
        if latest is None or latest.amount is None:
            if session.state is QuoteState.INVALID and session.invalid_status in _INVALID_REASONS:
                return ShippingResolution(reason=_INVALID_REASONS[session.invalid_status])
            return ShippingResolution(reason=_PENDING_STATES.get(session.state, IncompleteReason.QUOTE_PENDING))
        if destination is None or not latest.destination.same_place(destination):
            return ShippingResolution(reason=IncompleteReason.QUOTE_PENDING)
        if latest.weight_kg is not None and latest.weight_kg != shipping_weight_kg:
            logger.debug("🔁 Тариф #%d для ваги %s, кошик зараз %s", latest.seq, latest.weight_kg, shipping_weight_kg)
            return ShippingResolution(reason=IncompleteReason.QUOTE_OUTDATED)
        converted = self._converter.convert(latest.amount.amount, latest.amount.currency, currency)
        return ShippingResolution(cost=Money(self._converter.quantize(converted, currency), currency))


__all__ = ["CheckoutAggregator"]
