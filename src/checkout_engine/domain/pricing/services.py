# 📦 checkout_engine/domain/pricing/services.py
"""
📦 Чистий сервіс ціноутворення рядка кошика.

🔹 Стартова точка: базова ціна товару у валюті (або похідна від OMR через фіксований множник).
🔹 Абсолютна ціна опції замінює базову; модифікатори накопичуються окремо.
🔹 Активна абсолютна ціна розпродажу виграє повністю, модифікатори тоді відкидаються.
🔹 Ціни розпродажу ніколи не виводяться з OMR: кожна валюта оцінюється незалежно.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                # 🪵 Логування кроків розрахунку
from dataclasses import dataclass, field                      # 🧱 Накопичувач стану оцінки
from datetime import datetime, timezone                       # 📅 Поточний момент для вікон розпродажу
from decimal import Decimal                                   # 💵 Точні гроші (без float)
from typing import Mapping, Optional, Union

# 🧩 Внутрішні модулі проєкту
from .interfaces import IPricingResolver, LinePrice
from checkout_engine.domain.currency.interfaces import (      # 💱 Decimal-конвертер
    CurrencyCode,
    IMoneyConverter,
    Money,
)
from checkout_engine.domain.products.entities import (
    AbsolutePrice,
    CartLine,
    PriceMap,
    PriceModifier,
    Product,
    ProductVariantOption,
)
from checkout_engine.errors.custom_errors import PricingDataError
from checkout_engine.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing")      # 🧾 Іменований логер сервісу


# ================================
# 🧮 СТАН ОДНІЄЇ ОЦІНКИ
# ================================
@dataclass(slots=True)
class _Evaluation:
    """Проміжний стан: регулярна гілка та гілка з урахуванням розпродажів."""

    base: Optional[Decimal]                                   # 🏷️ Поточна (замінена) базова ціна
    base_sale: Optional[Decimal] = None                       # 🔥 Розпродаж рівня товару
    sale_override: Optional[Decimal] = None                   # 🔥 Абсолютна ціна розпродажу опції
    modifiers_regular: Decimal = field(default_factory=lambda: Decimal("0"))
    modifiers_effective: Decimal = field(default_factory=lambda: Decimal("0"))
    sale_modifier_applied: bool = False


# ================================
# 🏛️ ГОЛОВНИЙ ДОМЕННИЙ СЕРВІС
# ================================
class PricingResolver(IPricingResolver):
    """💸 Детермінована ціна рядка у будь-якій із підтримуваних валют."""

    def __init__(self, converter: IMoneyConverter, base_currency: CurrencyCode = CurrencyCode.OMR) -> None:
        """
        ⚙️ Прив'язує сервіс до конвертера фіксованих множників.

        Args:
            converter: Точний конвертер (похідні ціни від базової валюти).
            base_currency: Валюта, від якої виводяться відсутні регулярні ціни.
        """
        self._converter = converter
        self._base = base_currency

    # ================================
    # 🔢 ПУБЛІЧНИЙ API
    # ================================
    def resolve_line_price(
        self,
        product: Product,
        selected_options: Mapping[str, str],
        currency: Union[str, CurrencyCode],
        quantity: int = 1,
        now: Optional[datetime] = None,
    ) -> LinePrice:
        """
        🚀 Розраховує ціну одиниці та суму рядка.

        Raises:
            PricingDataError: бракує цінових даних для цієї валюти.
        """
        ccy = CurrencyCode.parse(currency)
        moment = now or datetime.now(timezone.utc)
        if quantity < 1:
            raise ValueError(f"quantity must be ≥ 1, got {quantity}")

        state = _Evaluation(base=self._regular_price(product.prices, ccy))
        if product.sale.is_active(moment) and ccy in product.sale_prices:
            state.base_sale = product.sale_prices[ccy]

        self._warn_unknown_properties(product, selected_options)
        for prop in product.properties:
            option_id = selected_options.get(prop.id)
            if option_id is None:
                continue
            option = prop.option(option_id)
            if option is None:
                logger.warning("⚠️ %s: опцію %r властивості %s не знайдено, пропускаємо", product.id, option_id, prop.id)
                continue
            self._apply_option(product, option, ccy, moment, state)

        if state.base is None:
            logger.error("❌ %s: немає базової ціни у %s і в %s", product.id, ccy, self._base)
            raise PricingDataError(
                f"Product {product.id} has no price for {ccy}",
                kind=PricingDataError.MISSING_PRICE_DATA,
                product_id=product.id,
                currency=str(ccy),
            )

        regular_unit = state.base + state.modifiers_regular
        if state.sale_override is not None:
            unit, on_sale = state.sale_override, True              # 🔥 Абсолютний розпродаж виграє повністю
        elif state.base_sale is not None:
            unit, on_sale = state.base_sale + state.modifiers_effective, True
        else:
            unit, on_sale = state.base + state.modifiers_effective, state.sale_modifier_applied

        if unit < 0:
            raise PricingDataError(
                f"Product {product.id} resolves to a negative price in {ccy}: {unit}",
                kind=PricingDataError.INVALID_PRICE,
                product_id=product.id,
                currency=str(ccy),
            )

        unit_q = self._converter.quantize(unit, ccy)
        original = Money(self._converter.quantize(regular_unit, ccy), ccy) if on_sale else None
        result = LinePrice(
            product_id=product.id,
            quantity=quantity,
            unit_price=Money(unit_q, ccy),
            total=Money(unit_q * quantity, ccy),
            on_sale=on_sale,
            original_unit_price=original,
        )
        logger.info(
            "💸 Line priced | product=%s unit=%s total=%s %s on_sale=%s original=%s",
            product.id,
            result.unit_price.amount,
            result.total.amount,
            ccy,
            on_sale,
            original.amount if original else None,
        )
        return result

    def resolve_cart_line(
        self,
        line: CartLine,
        product: Product,
        currency: Union[str, CurrencyCode],
        now: Optional[datetime] = None,
    ) -> LinePrice:
        return self.resolve_line_price(product, line.selected_options, currency, line.quantity, now)

    # ================================
    # 🧠 ВНУТРІШНЯ ЛОГІКА
    # ================================
    def _regular_price(self, prices: PriceMap, ccy: CurrencyCode) -> Optional[Decimal]:
        """Ціна у валюті або похідна від базової; None, якщо немає обох."""
        if ccy in prices:
            return prices[ccy]
        if self._base in prices:
            derived = self._converter.convert(prices[self._base], self._base, ccy)
            logger.debug("🔄 Похідна ціна %s %s → %s %s", prices[self._base], self._base, derived, ccy)
            return derived
        return None

    def _apply_option(
        self,
        product: Product,
        option: ProductVariantOption,
        ccy: CurrencyCode,
        moment: datetime,
        state: _Evaluation,
    ) -> None:
        spec = option.price_spec
        sale_active = option.sale.is_active(moment)

        if isinstance(spec, AbsolutePrice):
            if spec.prices:
                regular = self._regular_price(spec.prices, ccy)
                if regular is None:
                    raise PricingDataError(
                        f"Option {option.id} of {product.id} has no absolute price for {ccy}",
                        kind=PricingDataError.MISSING_PRICE_DATA,
                        product_id=product.id,
                        currency=str(ccy),
                    )
                state.base = regular                                # 🔁 Заміна, не додавання
                state.base_sale = None
            if sale_active and ccy in spec.sale_prices:
                state.sale_override = spec.sale_prices[ccy]
                logger.debug("🔥 %s: абсолютний розпродаж опції %s = %s %s", product.id, option.id, state.sale_override, ccy)
            return

        if isinstance(spec, PriceModifier):
            delta = self._regular_price(spec.deltas, ccy)
            if delta is None:
                if spec.deltas:
                    raise PricingDataError(
                        f"Option {option.id} of {product.id} has no price modifier for {ccy}",
                        kind=PricingDataError.MISSING_PRICE_DATA,
                        product_id=product.id,
                        currency=str(ccy),
                    )
                delta = Decimal("0")
            state.modifiers_regular += delta
            if sale_active and ccy in spec.sale_prices:
                state.sale_override = spec.sale_prices[ccy]              # 🔥 Абсолютний розпродаж опції перекриває дельти
            if sale_active and ccy in spec.sale_deltas:
                state.modifiers_effective += spec.sale_deltas[ccy]  # 🔥 Замінює, а не додається до регулярної дельти
                state.sale_modifier_applied = True
            else:
                state.modifiers_effective += delta

    @staticmethod
    def _warn_unknown_properties(product: Product, selected_options: Mapping[str, str]) -> None:
        known = {prop.id for prop in product.properties}
        for property_id in selected_options:
            if property_id not in known:
                logger.warning("⚠️ %s: невідома властивість %r у виборі", product.id, property_id)


__all__ = ["PricingResolver"]
