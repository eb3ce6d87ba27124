# 🚛 checkout_engine/infrastructure/delivery/aramex_rate_client.py
"""
🚛 AramexRateClient: інфраструктурна реалізація доменного `IRateProvider`.

Ключові рішення:
- Транспорт: httpx.AsyncClient, POST JSON `{originCity, originCountry, destCity, destCountry, weight}`.
- Відповідь: `{success, rate?, currency?, error?}`; не-2xx або `success: false` → ProviderError.
- Повтори: лише для тимчасових збоїв (таймаут, зʼєднання, 5xx/429), максимум `retry_attempts`
  з експоненційною паузою; явна відмова 4xx («не обслуговується»): остаточна.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx                                                        # 🌐 HTTP-клієнт

# 🔠 Системні імпорти
import asyncio                                                      # ⏳ Паузи між повторами
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

# 🧩 Внутрішні модулі проєкту
from checkout_engine.config.config_service import ConfigService
from checkout_engine.domain.currency.interfaces import CurrencyCode, CurrencyRateNotFoundError, Money
from checkout_engine.domain.delivery.interfaces import IRateProvider, RateRequest
from checkout_engine.errors.custom_errors import ProviderError
from checkout_engine.errors.strategies import HttpxErrorStrategy
from checkout_engine.shared.utils.logger import LOG_NAME

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.infrastructure.delivery.aramex")

DEFAULT_TIMEOUT_SEC = 10.0
DEFAULT_RETRIES = 2
DEFAULT_BACKOFF_SEC = 0.5
DEFAULT_BACKOFF_MAX_SEC = 4.0


class AramexRateClient(IRateProvider):
    """
    🚛 Клієнт тарифів перевізника.

    Очікуваний формат конфіга:
    carrier:
      aramex:
        base_url: "http://localhost:8080"
        rate_path: "/calculateAramexRate"
        timeout_sec: 10
        retry_attempts: 2
        retry_backoff_sec: 0.5
        retry_backoff_max_sec: 4
    """

    def __init__(self, config_service: ConfigService, *, client: Optional[httpx.AsyncClient] = None) -> None:
        """⚙️ Читає налаштування; зовнішній `client` не закривається цим обʼєктом."""
        base_url = str(config_service.get("carrier.aramex.base_url", "") or "").rstrip("/")
        if not base_url:
            logger.error("❗ carrier.aramex.base_url не сконфігуровано")
            raise ValueError("carrier.aramex.base_url is not configured")
        self._url = base_url + str(config_service.get("carrier.aramex.rate_path", "/calculateAramexRate"))
        self._timeout = float(config_service.get("carrier.aramex.timeout_sec", DEFAULT_TIMEOUT_SEC))
        self._retries = max(0, int(config_service.get("carrier.aramex.retry_attempts", DEFAULT_RETRIES)))
        self._backoff = float(config_service.get("carrier.aramex.retry_backoff_sec", DEFAULT_BACKOFF_SEC))
        self._backoff_max = float(config_service.get("carrier.aramex.retry_backoff_max_sec", DEFAULT_BACKOFF_MAX_SEC))
        self._client = client
        self._owns_client = client is None
        self._errors = HttpxErrorStrategy()
        logger.debug("🚛 AramexRateClient | url=%s timeout=%s retries=%s", self._url, self._timeout, self._retries)

    # ================================
    # 🔁 ЖИТТЄВИЙ ЦИКЛ
    # ================================
    async def __aenter__(self) -> "AramexRateClient":
        self._ensure_client()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            logger.debug("🧹 HTTP-клієнт перевізника закрито")
        if self._owns_client:
            self._client = None

    # ================================
    # 📬 ТАРИФ
    # ================================
    async def fetch_rate(self, request: RateRequest) -> Money:
        """
        💸 Запит тарифу з повторами для тимчасових збоїв.

        Raises:
            ProviderError: остаточна відмова або вичерпано спроби.
        """
        client = self._ensure_client()
        payload = request.to_payload()
        attempts = self._retries + 1

        for attempt in range(attempts):
            try:
                response = await client.post(self._url, json=payload, timeout=self._timeout)
                response.raise_for_status()                         # ❗ Не-2xx → HTTPStatusError
                return self._parse_response(response)
            except asyncio.CancelledError:
                raise
            except httpx.HTTPError as exc:
                error = self._errors.handle(exc)
                if not isinstance(error, ProviderError):
                    raise
            except ProviderError as exc:
                error = exc

            if not error.transient or attempt + 1 >= attempts:
                logger.error(
                    "❌ Тариф не отримано (спроба %d/%d): %s",
                    attempt + 1,
                    attempts,
                    error.message,
                    extra=error.to_log_extra(),
                )
                raise error
            delay = min(self._backoff * (2 ** attempt), self._backoff_max)
            logger.warning("🔁 Тимчасовий збій перевізника (%s), повтор через %.2fs", error.message, delay)
            await asyncio.sleep(delay)

        raise ProviderError("Carrier rate request failed", transient=True, url=self._url)  # pragma: no cover

    def _parse_response(self, response: httpx.Response) -> Money:
        try:
            body: Dict[str, Any] = response.json()
        except ValueError as exc:
            raise ProviderError("Carrier returned malformed JSON", url=self._url, details=str(exc)) from exc
        if not isinstance(body, dict):
            raise ProviderError("Carrier returned unexpected payload", url=self._url, details=repr(body)[:200])

        if not body.get("success"):
            reason = str(body.get("error") or "rate request rejected")
            logger.info("🚫 Перевізник відхилив запит: %s", reason)
            raise ProviderError("Carrier rejected the rate request", url=self._url, details=reason)

        try:
            amount = Decimal(str(body.get("rate")))
        except (InvalidOperation, ValueError) as exc:
            raise ProviderError("Carrier returned an invalid rate", url=self._url, details=repr(body.get("rate"))) from exc
        if not amount.is_finite() or amount < 0:
            raise ProviderError("Carrier returned an invalid rate", url=self._url, details=str(amount))

        try:
            currency = CurrencyCode.parse(body.get("currency") or CurrencyCode.OMR)
        except CurrencyRateNotFoundError as exc:
            raise ProviderError("Carrier returned an unsupported currency", url=self._url, details=str(body.get("currency"))) from exc

        logger.info("✅ Тариф перевізника: %s %s", amount, currency)
        return Money(amount, currency)


__all__ = ["AramexRateClient"]
