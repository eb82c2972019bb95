"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SANDBOX = "sandbox"
PRODUCTION = "production"

DEFAULT_BASE_URL = "https://sandbox.momodeveloper.mtn.com"
DEFAULT_TIMEOUT = 30.0


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).
    
    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)
    
    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback
    
    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name
    
    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
        except OSError as exc:
            logger.debug("Failed to read /run/secrets/%s: %s", secret_name, exc)
        else:
            if secret_value:
                logger.debug("Loaded %s from /run/secrets", secret_name)
                return secret_value
    
    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.debug("Loaded %s from environment", env_var)
            return secret_value
    
    return None


@dataclass(frozen=True)
class GlobalConfig:
    """Settings shared by every product handle."""
    callback_host: str = ""
    base_url: Optional[str] = None
    environment: Optional[str] = None
    timeout: Optional[float] = None


@dataclass(frozen=True)
class SubscriptionConfig:
    """Subscription key for a MoMo product (used alone for user provisioning)."""
    primary_key: str = ""


@dataclass(frozen=True)
class ProductConfig(SubscriptionConfig):
    """Credentials of an API user for one product (collection or disbursement)."""
    user_id: str = ""
    user_secret: str = ""


@dataclass(frozen=True)
class Config:
    """Resolved, immutable configuration of a single product handle."""
    base_url: str = DEFAULT_BASE_URL
    environment: str = SANDBOX
    callback_host: str = ""
    timeout: float = DEFAULT_TIMEOUT
    primary_key: str = ""
    user_id: str = ""
    user_secret: str = ""


def merge_config(
    global_config: Optional[GlobalConfig] = None,
    product_config: Optional[SubscriptionConfig] = None,
) -> Config:
    """Merge defaults, global settings and product credentials.
    
    Precedence: product config > global config > built-in defaults. Fields
    left as None or empty never override a lower layer.
    
    Returns:
        A new Config; inputs are not modified.
    """
    config = Config()
    for layer in (global_config, product_config):
        if layer is None:
            continue
        overrides = {
            f.name: getattr(layer, f.name)
            for f in fields(layer)
            if getattr(layer, f.name) not in (None, "")
        }
        config = replace(config, **overrides)
    return replace(config, base_url=config.base_url.rstrip("/"))


def load_settings() -> GlobalConfig:
    """Load global settings from the environment.
    
    Raises:
        ConfigurationError: If MOMO_TIMEOUT is not a number
    """
    from momo.core.api.exceptions import ConfigurationError
    
    raw_timeout = os.environ.get("MOMO_TIMEOUT")
    timeout = None
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"MOMO_TIMEOUT must be a number, got {raw_timeout!r}")
    return GlobalConfig(
        callback_host=os.environ.get("MOMO_CALLBACK_HOST", ""),
        base_url=os.environ.get("MOMO_BASE_URL") or None,
        environment=os.environ.get("MOMO_ENVIRONMENT") or None,
        timeout=timeout,
    )


def load_product_config(product: str) -> ProductConfig:
    """Load product credentials from /run/secrets or environment variables.
    
    For product "collection" the secrets are read from
    ``momo_collection_user_id`` / ``MOMO_COLLECTION_USER_ID`` and likewise
    for ``user_secret`` and ``primary_key``.
    
    Args:
        product: Product name ("collection" or "disbursement")
    
    Returns:
        ProductConfig with whatever values were found (possibly empty)
    """
    values = {}
    for name in ("user_id", "user_secret", "primary_key"):
        secret_name = f"momo_{product}_{name}".lower()
        values[name] = _load_secret_from_file(secret_name, secret_name.upper()) or ""
    return ProductConfig(**values)
