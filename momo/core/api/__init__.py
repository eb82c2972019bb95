"""MoMo API client library.

Architecture:
- exceptions.py: Typed exceptions for error handling
- auth.py: Token authorization and single-flight token refresher
- client.py: Plain and bearer-authenticated HTTP clients
- collections.py: Collection operations (request to pay)
- disbursements.py: Disbursement operations (transfer)
- users.py: Sandbox API user provisioning

Usage:
    from momo.core.api import MomoClient, AuthenticatingClient, TokenRefresher
    from momo.core.api import DisbursementService, authorize_disbursements
    
    client = MomoClient(config)
    refresher = TokenRefresher(lambda: authorize_disbursements(client))
    disbursements = DisbursementService(AuthenticatingClient(refresher, client))
    reference_id = disbursements.transfer({...})
"""
from .exceptions import (
    MomoError,
    ConfigurationError,
    ValidationError,
    AuthenticationFailure,
    TransportError,
    RemoteError,
    PayerNotFoundError,
    PayeeNotFoundError,
    NotAllowedError,
    NotEnoughFundsError,
    PayerLimitReachedError,
    InvalidCallbackUrlHostError,
    InvalidCurrencyError,
    ResourceNotFoundError,
    ResourceAlreadyExistError,
    ServiceUnavailableError,
    InternalProcessingError,
    error_for_code,
)
from .auth import (
    Token,
    TokenState,
    TokenRefresher,
    authorize,
    authorize_collections,
    authorize_disbursements,
    EXPIRY_MARGIN_SECONDS,
)
from .client import MomoClient, AuthenticatingClient, decode_body
from .collections import CollectionService
from .disbursements import DisbursementService
from .users import UserService

__all__ = [
    # Exceptions
    "MomoError",
    "ConfigurationError",
    "ValidationError",
    "AuthenticationFailure",
    "TransportError",
    "RemoteError",
    "PayerNotFoundError",
    "PayeeNotFoundError",
    "NotAllowedError",
    "NotEnoughFundsError",
    "PayerLimitReachedError",
    "InvalidCallbackUrlHostError",
    "InvalidCurrencyError",
    "ResourceNotFoundError",
    "ResourceAlreadyExistError",
    "ServiceUnavailableError",
    "InternalProcessingError",
    "error_for_code",
    
    # Auth
    "Token",
    "TokenState",
    "TokenRefresher",
    "authorize",
    "authorize_collections",
    "authorize_disbursements",
    "EXPIRY_MARGIN_SECONDS",
    
    # Clients
    "MomoClient",
    "AuthenticatingClient",
    "decode_body",
    
    # Services
    "CollectionService",
    "DisbursementService",
    "UserService",
]
