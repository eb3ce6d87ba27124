# 📬 checkout_engine/domain/delivery/rate_quoter.py
"""
📬 `RateQuoteSession`: котирування доставки з фенсингом запитів.

🔹 Скінченний автомат: IDLE → VALIDATING → (INVALID | CALCULATING) → (READY | FAILED); `clear()` → IDLE.
🔹 Кожен виклик отримує наступний номер із монотонного лічильника сесії. Відповідь, для якої
   після `await` вже видано новіший номер, відкидається як `stale`, незалежно від порядку завершення.
🔹 Транспорт не скасовується: застарілі результати просто ігноруються.
🔹 Повтори для тимчасових збоїв робить провайдер; сесія лише класифікує результат.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                     # 🔁 CancelledError завжди пробрасуємо
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

# 🧩 Внутрішні модулі проєкту
from checkout_engine.domain.delivery.interfaces import (
    CarrierSettings,
    IRateProvider,
    QuoteState,
    RateRequest,
    RateResult,
    RateStatus,
    ShippingDestination,
)
from checkout_engine.domain.delivery.location_validator import LocationValidator
from checkout_engine.domain.products.services.weight_resolver import WeightResolver
from checkout_engine.errors.custom_errors import ProviderError, StaleResultDiscarded, ValidationError
from checkout_engine.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.delivery.rates")


@dataclass(frozen=True, slots=True)
class Origin:
    city: str = "Muscat"
    country: str = "OM"


DEFAULT_ORIGIN = Origin()


def is_carrier_available(settings: Optional[CarrierSettings]) -> bool:
    """Перевізник придатний для котирування: увімкнений, з креденшелами та адресою відправника."""
    return settings is not None and settings.is_available


class RateQuoteSession:
    """
    📬 Одна логічна «сесія пункту призначення».

    Увесь змінний стан (лічильник, стан автомата, останній прийнятий тариф) належить сесії
    і змінюється лише її методами, тому блокування не потрібні.
    """

    def __init__(
        self,
        provider: IRateProvider,
        validator: LocationValidator,
        *,
        weight_resolver: Optional[WeightResolver] = None,
        origin: Origin = DEFAULT_ORIGIN,
        carrier: Optional[CarrierSettings] = None,
    ) -> None:
        self._provider = provider
        self._validator = validator
        self._weights = weight_resolver or WeightResolver()
        self._carrier = carrier
        if carrier is not None and carrier.sender_city and carrier.sender_country:
            origin = Origin(carrier.sender_city, carrier.sender_country)   # 🏠 Адреса відправника з налаштувань
        self._origin = origin
        self._seq = 0
        self._state = QuoteState.IDLE
        self._latest: Optional[RateResult] = None
        self._invalid_status: Optional[RateStatus] = None

    # ================================
    # 🔍 СТАН
    # ================================
    @property
    def state(self) -> QuoteState:
        return self._state

    @property
    def latest_seq(self) -> int:
        return self._seq

    @property
    def latest_accepted(self) -> Optional[RateResult]:
        """Останній результат зі статусом `ok`, що не був відкинутий як застарілий."""
        return self._latest

    @property
    def invalid_status(self) -> Optional[RateStatus]:
        """Чому сесія у стані INVALID: `invalid-destination` або `invalid-weight`."""
        return self._invalid_status

    @property
    def carrier_available(self) -> bool:
        return self._carrier is None or is_carrier_available(self._carrier)

    def clear(self) -> None:
        """Вхідні дані очищено: повертаємось у IDLE і робимо всі запити в польоті застарілими."""
        self._seq += 1
        self._state = QuoteState.IDLE
        self._latest = None
        self._invalid_status = None
        logger.debug("🧹 Rate session cleared (seq=%d)", self._seq)

    # ================================
    # 📬 КОТИРУВАННЯ
    # ================================
    async def quote(
        self,
        weight_kg: Union[Decimal, int, str],
        destination: ShippingDestination,
        origin_country: Optional[str] = None,
    ) -> RateResult:
        """
        🚀 Запитує тариф для ваги та пункту призначення.

        Returns:
            RateResult: ok | invalid-destination | invalid-weight | provider-error | stale.
        """
        self._seq += 1
        seq = self._seq
        self._state = QuoteState.VALIDATING
        self._latest = None                                                # 🧊 Старий тариф не відповідає новим вхідним даним
        self._invalid_status = None

        verdict = self._validator.validate(destination)
        if not verdict.valid:
            self._state = QuoteState.INVALID
            self._invalid_status = RateStatus.INVALID_DESTINATION
            return RateResult(
                RateStatus.INVALID_DESTINATION,
                seq,
                detail=verdict.reason.value if verdict.reason else None,
                destination=destination,
            )

        try:
            weight = self._weights.validate_for_shipping(Decimal(str(weight_kg)))
        except ValidationError as exc:
            self._state = QuoteState.INVALID
            self._invalid_status = RateStatus.INVALID_WEIGHT
            return RateResult(RateStatus.INVALID_WEIGHT, seq, detail=exc.reason, destination=destination)
        billed = self._weights.shipping_weight(weight)

        if not self.carrier_available:
            logger.warning("🚫 Перевізник недоступний (вимкнено або бракує креденшелів)")
            self._state = QuoteState.FAILED
            return RateResult(
                RateStatus.PROVIDER_ERROR, seq, detail="carrier-unavailable", destination=destination, weight_kg=billed
            )

        request = RateRequest(
            origin_city=self._origin.city,
            origin_country=(origin_country or self._origin.country).upper(),
            dest_city=destination.city,
            dest_country=destination.country,
            weight_kg=billed,
        )
        self._state = QuoteState.CALCULATING
        logger.info("📦 Rate request #%d | %s → %s/%s weight=%s", seq, request.origin_country, destination.country, destination.city, billed)

        try:
            amount = await self._provider.fetch_rate(request)
            self._ensure_current(seq)
        except asyncio.CancelledError:
            raise
        except StaleResultDiscarded as stale:
            logger.warning("⏳ Rate #%d discarded: newer request #%d issued", stale.seq, stale.latest_seq)
            return RateResult(RateStatus.STALE, seq, destination=destination, weight_kg=billed)
        except ProviderError as exc:
            if seq != self._seq:
                logger.warning("⏳ Failed rate #%d is stale (latest #%d)", seq, self._seq)
                return RateResult(RateStatus.STALE, seq, destination=destination, weight_kg=billed)
            self._state = QuoteState.FAILED
            logger.error("❌ Rate #%d failed: %s", seq, exc.message, extra=exc.to_log_extra())
            return RateResult(
                RateStatus.PROVIDER_ERROR,
                seq,
                detail=exc.details or exc.message,
                destination=destination,
                weight_kg=billed,
            )
        except Exception as exc:
            if seq != self._seq:
                logger.warning("⏳ Failed rate #%d is stale (latest #%d)", seq, self._seq)
                return RateResult(RateStatus.STALE, seq, destination=destination, weight_kg=billed)
            self._state = QuoteState.FAILED
            logger.exception("❌ Rate #%d failed with unexpected %s", seq, type(exc).__name__)
            return RateResult(
                RateStatus.PROVIDER_ERROR,
                seq,
                detail=f"{type(exc).__name__}: {exc}",
                destination=destination,
                weight_kg=billed,
            )

        result = RateResult(RateStatus.OK, seq, amount=amount, destination=destination, weight_kg=billed)
        self._state = QuoteState.READY
        self._latest = result
        logger.info("✅ Rate #%d accepted: %s %s", seq, amount.amount, amount.currency)
        return result

    def _ensure_current(self, seq: int) -> None:
        if seq != self._seq:
            raise StaleResultDiscarded(seq, self._seq)


__all__ = ["Origin", "DEFAULT_ORIGIN", "RateQuoteSession", "is_carrier_available"]
