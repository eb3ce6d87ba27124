# ⚙️ checkout_engine/config/__init__.py
from .config_service import ConfigService, DEFAULT_CONFIG_PATH

__all__ = ["ConfigService", "DEFAULT_CONFIG_PATH"]
