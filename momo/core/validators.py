"""Input validation helpers for configuration and payment requests."""
from __future__ import annotations
import uuid
from typing import Any, Mapping

from momo.config.settings import PRODUCTION, SANDBOX, GlobalConfig, ProductConfig, SubscriptionConfig
from momo.core.api.exceptions import ConfigurationError, ValidationError

PARTY_ID_TYPES = ("MSISDN", "EMAIL", "PARTY_CODE")


def is_uuid(value: Any) -> bool:
    """Return True when value is a canonical UUID string."""
    if not isinstance(value, str):
        return False
    try:
        return str(uuid.UUID(value)) == value.lower()
    except ValueError:
        return False


def validate_global_config(config: GlobalConfig) -> GlobalConfig:
    """Validate settings shared by every product handle.
    
    Raises:
        ConfigurationError: If callbackHost is missing, the environment is
            unknown, or production is selected without a base URL
    """
    if not config.callback_host:
        raise ConfigurationError("callbackHost is required")
    if config.environment and config.environment not in (SANDBOX, PRODUCTION):
        raise ConfigurationError(f"environment must be one of {SANDBOX}, {PRODUCTION}")
    if config.environment == PRODUCTION and not config.base_url:
        raise ConfigurationError("baseUrl is required when environment is production")
    return config


def validate_subscription_config(config: SubscriptionConfig) -> SubscriptionConfig:
    if not config.primary_key:
        raise ConfigurationError("primaryKey is required")
    return config


def validate_product_config(config: ProductConfig) -> ProductConfig:
    """Validate API user credentials for a product.
    
    Raises:
        ConfigurationError: If a credential is missing or userId is not a UUID
    """
    validate_subscription_config(config)
    if not config.user_id:
        raise ConfigurationError("userId is required")
    if not is_uuid(config.user_id):
        raise ConfigurationError("userId must be a valid uuid")
    if not config.user_secret:
        raise ConfigurationError("userSecret is required")
    return config


def validate_amount(amount: Any) -> str:
    if amount is None or str(amount).strip() == "":
        raise ValidationError("amount is required")
    try:
        float(amount)
    except (TypeError, ValueError):
        raise ValidationError("amount must be a number")
    return str(amount)


def validate_party(party: Any, field: str) -> Mapping[str, Any]:
    """Validate a payer/payee party.
    
    Args:
        party: Mapping with partyIdType and partyId
        field: Field name for error messages (e.g., "payee")
    """
    if not isinstance(party, Mapping):
        raise ValidationError(f"{field} is required")
    if party.get("partyIdType") not in PARTY_ID_TYPES:
        raise ValidationError(f"{field}.partyIdType must be one of {', '.join(PARTY_ID_TYPES)}")
    if not party.get("partyId"):
        raise ValidationError(f"{field}.partyId is required")
    return party


def _validate_payment(request: Mapping[str, Any], party_field: str) -> Mapping[str, Any]:
    if not isinstance(request, Mapping):
        raise ValidationError("request must be a mapping")
    validate_amount(request.get("amount"))
    if not request.get("currency"):
        raise ValidationError("currency is required")
    validate_party(request.get(party_field), party_field)
    return request


def validate_request_to_pay(request: Mapping[str, Any]) -> Mapping[str, Any]:
    """Validate a collection payment request (party field: payer)."""
    return _validate_payment(request, "payer")


def validate_transfer(request: Mapping[str, Any]) -> Mapping[str, Any]:
    """Validate a disbursement payout request (party field: payee)."""
    return _validate_payment(request, "payee")
