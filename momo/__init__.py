"""MTN MoMo API client.

Usage:
    import momo
    
    client = momo.create_client(momo.GlobalConfig(callback_host="example.com"))
    disbursements = client.disbursements(
        momo.ProductConfig(primary_key="...", user_id="...", user_secret="...")
    )
    reference_id = disbursements.transfer({
        "amount": "2000",
        "currency": "UGX",
        "payee": {"partyIdType": "MSISDN", "partyId": "256772000000"},
    })
    transaction = disbursements.get_transaction(reference_id)
"""
from __future__ import annotations
from typing import Callable, Optional

import requests

from momo.config.settings import Config, GlobalConfig, ProductConfig, SubscriptionConfig, merge_config
from momo.core import validators
from momo.core.api import (
    AuthenticatingClient,
    CollectionService,
    DisbursementService,
    MomoClient,
    Token,
    TokenRefresher,
    UserService,
    authorize_collections,
    authorize_disbursements,
)
from momo.core.api.exceptions import (
    AuthenticationFailure,
    ConfigurationError,
    MomoError,
    RemoteError,
    TransportError,
    ValidationError,
)


class Momo:
    """Factory for product handles sharing one global configuration.
    
    Every collections()/disbursements() call returns a handle with its own
    token refresher; tokens are never shared between handles.
    """
    
    def __init__(self, global_config: GlobalConfig, session_factory: Callable[[], requests.Session] = requests.Session):
        self.global_config = validators.validate_global_config(global_config)
        self.session_factory = session_factory
    
    def _authenticated_client(
        self, product_config: ProductConfig, authorize: Callable[[MomoClient], Token]
    ) -> AuthenticatingClient:
        validators.validate_product_config(product_config)
        config: Config = merge_config(self.global_config, product_config)
        client = MomoClient(config, session=self.session_factory())
        refresher = TokenRefresher(lambda: authorize(client))
        return AuthenticatingClient(refresher, client)
    
    def collections(self, product_config: ProductConfig) -> CollectionService:
        return CollectionService(self._authenticated_client(product_config, authorize_collections))
    
    def disbursements(self, product_config: ProductConfig) -> DisbursementService:
        return DisbursementService(self._authenticated_client(product_config, authorize_disbursements))
    
    def users(self, subscription_config: SubscriptionConfig) -> UserService:
        validators.validate_subscription_config(subscription_config)
        config = merge_config(self.global_config, subscription_config)
        return UserService(MomoClient(config, session=self.session_factory()))


def create_client(global_config: Optional[GlobalConfig] = None, **kwargs) -> Momo:
    """Create a MoMo client factory.
    
    Args:
        global_config: Shared settings (callback_host required)
        **kwargs: Passed to Momo (e.g., session_factory)
        
    Raises:
        ConfigurationError: If the global configuration is invalid
    """
    return Momo(global_config or GlobalConfig(), **kwargs)


__all__ = [
    "Momo",
    "create_client",
    "Config",
    "GlobalConfig",
    "ProductConfig",
    "SubscriptionConfig",
    "MomoError",
    "ConfigurationError",
    "ValidationError",
    "AuthenticationFailure",
    "RemoteError",
    "TransportError",
]
