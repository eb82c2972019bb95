"""Configuration module for the MoMo client."""
from .settings import (
    Config,
    GlobalConfig,
    ProductConfig,
    SubscriptionConfig,
    load_product_config,
    load_settings,
    merge_config,
)

__all__ = [
    "Config",
    "GlobalConfig",
    "ProductConfig",
    "SubscriptionConfig",
    "load_product_config",
    "load_settings",
    "merge_config",
]
