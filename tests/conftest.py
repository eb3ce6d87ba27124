# tests/conftest.py
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

# 1) Додаємо src у sys.path, щоб працював імпорт "checkout_engine.…" без встановлення пакета
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from checkout_engine.config.config_service import ConfigService  # noqa: E402
from checkout_engine.domain.currency.interfaces import CurrencyCode  # noqa: E402
from checkout_engine.domain.delivery.location_validator import LocationValidator  # noqa: E402
from checkout_engine.domain.pricing.services import PricingResolver  # noqa: E402
from checkout_engine.domain.products.entities import (  # noqa: E402
    AbsolutePrice,
    PriceModifier,
    Product,
    ProductProperty,
    ProductVariantOption,
    SaleWindow,
)
from checkout_engine.domain.products.services.weight_resolver import WeightResolver  # noqa: E402
from checkout_engine.infrastructure.currency.currency_converter import CurrencyConverter  # noqa: E402
from checkout_engine.infrastructure.delivery.geography_loader import load_geography  # noqa: E402

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


# ================================
# ⚙️ ІНФРАСТРУКТУРА
# ================================
@pytest.fixture
def config() -> ConfigService:
    """Конфіг без .env, щоб тести не залежали від середовища розробника."""
    return ConfigService(load_env=False)


@pytest.fixture
def converter() -> CurrencyConverter:
    return CurrencyConverter()


@pytest.fixture
def pricing(converter: CurrencyConverter) -> PricingResolver:
    return PricingResolver(converter)


@pytest.fixture
def weights() -> WeightResolver:
    return WeightResolver()


@pytest.fixture(scope="session")
def geography():
    return load_geography()


@pytest.fixture
def validator(geography) -> LocationValidator:
    return LocationValidator(geography, ["OM", "AE", "SA", "KW", "IQ"])


@pytest.fixture
def now() -> datetime:
    return NOW


# ================================
# 📦 КАТАЛОГ
# ================================
@pytest.fixture
def coffee() -> Product:
    """Кава 5.000 OMR з вагою-опцією: 250g (+0) / 1kg (абсолютна 8.000 OMR, розпродаж 7.000)."""
    weight_prop = ProductProperty(
        id="weight",
        name="Weight",
        name_ar="الوزن",
        type="size",
        options=(
            ProductVariantOption(id="w250", property_id="weight", value="250g", label="250 g"),
            ProductVariantOption(
                id="w1000",
                property_id="weight",
                value="1kg",
                label="1 kg",
                price_spec=AbsolutePrice(
                    prices={CurrencyCode.OMR: Decimal("8.000")},
                    sale_prices={CurrencyCode.OMR: Decimal("7.000")},
                ),
                sale=SaleWindow(on_sale=False),
            ),
        ),
    )
    grind_prop = ProductProperty(
        id="grind",
        name="Grind",
        type="select",
        options=(
            ProductVariantOption(id="whole", property_id="grind", value="Whole beans"),
            ProductVariantOption(
                id="espresso",
                property_id="grind",
                value="Espresso",
                price_spec=PriceModifier(deltas={CurrencyCode.OMR: Decimal("0.500")}),
            ),
        ),
    )
    return Product(
        id="coffee-1",
        name="Ethiopia Yirgacheffe",
        category_id="coffee-beans",
        prices={CurrencyCode.OMR: Decimal("5.000")},
        weight_kg=Decimal("0.25"),
        properties=(weight_prop, grind_prop),
    )


@pytest.fixture
def mug() -> Product:
    """Аксесуар без властивостей; податок за глобальною ставкою, є явна ціна в USD."""
    return Product(
        id="mug-1",
        name="Ceramic mug",
        category_id="accessories",
        prices={CurrencyCode.OMR: Decimal("3.000"), CurrencyCode.USD: Decimal("7.99")},
        weight_kg=Decimal("0.4"),
    )
