# 📦 checkout_engine/config/setup/container.py
"""
📦 Контейнер залежностей ядра checkout.

🔹 Створює сервіси в порядку DI: конвертер → резолвери → податок → агрегатор.
🔹 Провайдер тарифів (httpx-клієнт) можна підмінити фейком у тестах.
🔹 Нових глобальних станів не створює: кожен контейнер незалежний.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Optional

# 🧩 Внутрішні модулі проєкту
from checkout_engine.config.config_service import ConfigService
from checkout_engine.domain.checkout.services import CheckoutAggregator
from checkout_engine.domain.delivery.interfaces import CarrierSettings, IRateProvider
from checkout_engine.domain.delivery.location_validator import DestinationSelector, GeographyTable, LocationValidator
from checkout_engine.domain.delivery.rate_quoter import Origin, RateQuoteSession
from checkout_engine.domain.pricing.services import PricingResolver
from checkout_engine.domain.products.services.weight_resolver import WeightResolver
from checkout_engine.domain.settings.checkout_settings import CheckoutSettings
from checkout_engine.domain.tax.services import TaxEngine
from checkout_engine.infrastructure.currency.currency_converter import CurrencyConverter
from checkout_engine.infrastructure.delivery.aramex_rate_client import AramexRateClient
from checkout_engine.infrastructure.delivery.geography_loader import load_geography
from checkout_engine.infrastructure.settings.settings_repository import SettingsRepository
from checkout_engine.shared.utils.logger import LOG_NAME, init_logging_from_config

logger = logging.getLogger(f"{LOG_NAME}.config.container")


def bootstrap_logging(config: Optional[ConfigService] = None) -> logging.Logger:
    """Зчитує секцію `logging` і запускає логер пакета."""
    cfg = config or ConfigService()
    node = cfg.get("logging", {}) or {}
    return init_logging_from_config(node)


# ================================
# 🏛️ КОНТЕЙНЕР ЗАЛЕЖНОСТЕЙ
# ================================
class Container:
    """Координує ініціалізацію інфраструктурних і доменних сервісів."""

    def __init__(
        self,
        config: ConfigService,
        *,
        geography: Optional[GeographyTable] = None,
        rate_provider: Optional[IRateProvider] = None,
    ) -> None:
        self.config = config
        logger.info("🚀 Стартуємо побудову контейнера checkout")
        self._setup_infrastructure(geography, rate_provider)
        self._setup_domain_services()
        logger.info("✅ Контейнер ініціалізовано")

    # ================================
    # 🏗️ ІНФРАСТРУКТУРА
    # ================================
    def _setup_infrastructure(
        self,
        geography: Optional[GeographyTable],
        rate_provider: Optional[IRateProvider],
    ) -> None:
        self.converter = CurrencyConverter.from_config(self.config)
        self.geography = geography if geography is not None else load_geography()
        self.rate_provider: IRateProvider = rate_provider or AramexRateClient(self.config)
        self.settings_repository = SettingsRepository(self.config)
        self.origin = Origin(
            city=str(self.config.get("carrier.aramex.origin.city", "Muscat")),
            country=str(self.config.get("carrier.aramex.origin.country", "OM")).upper(),
        )

    # ================================
    # 🏭 ДОМЕННІ СЕРВІСИ
    # ================================
    def _setup_domain_services(self) -> None:
        self.weight_resolver = WeightResolver.from_config(self.config)
        self.pricing_resolver = PricingResolver(self.converter, self.converter.base)
        self.tax_engine = TaxEngine(self.converter)
        self.aggregator = CheckoutAggregator(
            self.pricing_resolver,
            self.weight_resolver,
            self.tax_engine,
            self.converter,
            base_currency=self.converter.base,
        )
        enabled = self.config.get("checkout.enabled_countries")
        self.location_validator = LocationValidator(self.geography, enabled)

    # ================================
    # 🧩 ФАБРИКИ СЕСІЙ
    # ================================
    def validator_for(self, settings: CheckoutSettings) -> LocationValidator:
        """Валідатор з allow-list країн із налаштувань магазину."""
        return self.location_validator.with_enabled_countries(settings.enabled_countries)

    def new_destination_selector(self, settings: Optional[CheckoutSettings] = None) -> DestinationSelector:
        validator = self.validator_for(settings) if settings is not None else self.location_validator
        return DestinationSelector(validator)

    def new_rate_session(
        self,
        carrier: Optional[CarrierSettings] = None,
        settings: Optional[CheckoutSettings] = None,
    ) -> RateQuoteSession:
        """Окрема сесія котирувань на кожен потік оформлення замовлення."""
        validator = self.validator_for(settings) if settings is not None else self.location_validator
        return RateQuoteSession(
            self.rate_provider,
            validator,
            weight_resolver=self.weight_resolver,
            origin=self.origin,
            carrier=carrier,
        )

    async def aclose(self) -> None:
        close = getattr(self.rate_provider, "close", None)
        if close is not None:
            await close()
            logger.debug("🧹 Провайдер тарифів закрито")


__all__ = ["Container", "bootstrap_logging"]
