# 🚛 checkout_engine/infrastructure/delivery/__init__.py
from .aramex_rate_client import AramexRateClient
from .geography_loader import DEFAULT_GEOGRAPHY_PATH, load_geography, parse_geography

__all__ = ["AramexRateClient", "DEFAULT_GEOGRAPHY_PATH", "load_geography", "parse_geography"]
