"""Bearer token acquisition and caching for the MoMo API.

authorize_collections / authorize_disbursements exchange API user
credentials for a token. TokenRefresher caches that token and makes sure
concurrent callers never trigger more than one authorization at a time.
"""
from __future__ import annotations
import base64
import logging
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from .exceptions import AuthenticationFailure, RemoteError

if TYPE_CHECKING:
    from .client import MomoClient

logger = logging.getLogger(__name__)

COLLECTION_TOKEN_PATH = "/collection/token/"
DISBURSEMENT_TOKEN_PATH = "/disbursement/token/"

# Tokens are treated as expired this many seconds before their real expiry
EXPIRY_MARGIN_SECONDS = 60.0

Clock = Callable[[], float]


@dataclass(frozen=True)
class Token:
    value: str
    expires_at: float  # epoch seconds


def authorize(client: "MomoClient", path: str, clock: Clock = time.time) -> Token:
    """Exchange the API user credentials of ``client.config`` for a token.
    
    Args:
        client: Plain transport configured for the product
        path: Product token endpoint (e.g., "/collection/token/")
        clock: Source of the current time in epoch seconds
        
    Returns:
        Token with an absolute expiry
        
    Raises:
        AuthenticationFailure: If the endpoint rejects the credentials or the
            response cannot be decoded
        TransportError: If no response was received
    """
    config = client.config
    basic = base64.b64encode(f"{config.user_id}:{config.user_secret}".encode()).decode()
    try:
        resp = client.post(path, headers={"Authorization": f"Basic {basic}"})
    except RemoteError as exc:
        raise AuthenticationFailure(
            f"Token request to {path} rejected: {exc}", status_code=exc.status_code
        ) from exc
    
    try:
        payload = resp.json()
        value = str(payload["access_token"])
        expires_in = float(payload["expires_in"])
    except (ValueError, KeyError, TypeError) as exc:
        raise AuthenticationFailure(f"Token response from {path} is malformed") from exc
    if not value:
        raise AuthenticationFailure(f"Token response from {path} has an empty access_token")
    
    return Token(value=value, expires_at=clock() + expires_in)


def authorize_collections(client: "MomoClient", clock: Clock = time.time) -> Token:
    return authorize(client, COLLECTION_TOKEN_PATH, clock)


def authorize_disbursements(client: "MomoClient", clock: Clock = time.time) -> Token:
    return authorize(client, DISBURSEMENT_TOKEN_PATH, clock)


class TokenState(Enum):
    EMPTY = "empty"
    CACHED = "cached"
    REFRESHING = "refreshing"


class TokenRefresher:
    """Single cached token with single-flight refresh.
    
    States:
    - EMPTY: no token; the next get_token() authorizes
    - CACHED: a token is held; returned while it is fresh
    - REFRESHING: one authorization is in flight; every caller waits on
      the same pending future and receives its token (or its error)
    
    Usage:
        refresher = TokenRefresher(lambda: authorize_collections(client))
        token = refresher.get_token()
    """
    
    def __init__(
        self,
        authorize: Callable[[], Token],
        clock: Clock = time.time,
        margin: float = EXPIRY_MARGIN_SECONDS,
    ):
        """Initialize token refresher.
        
        Args:
            authorize: Zero-argument callable performing one authorization
            clock: Source of the current time in epoch seconds
            margin: Seconds before expiry at which a token stops being used,
                capped at half the lifetime of each token
        """
        self._authorize = authorize
        self._clock = clock
        self._margin = margin
        self._token_margin = margin
        self._lock = threading.Lock()
        self._state = TokenState.EMPTY
        self._token: Optional[Token] = None
        self._pending: Optional[Future] = None
    
    @property
    def state(self) -> TokenState:
        return self._state
    
    def _is_fresh(self, token: Token) -> bool:
        return self._clock() < token.expires_at - self._token_margin
    
    def get_token(self) -> Token:
        """Return a usable token, authorizing at most once across callers.
        
        Raises:
            AuthenticationFailure: If the authorization this call waited on failed
        """
        with self._lock:
            if self._state is TokenState.CACHED and self._is_fresh(self._token):
                return self._token
            if self._state is TokenState.REFRESHING:
                pending = self._pending
                owner = False
            else:
                pending = self._pending = Future()
                self._state = TokenState.REFRESHING
                owner = True
        
        if owner:
            return self._refresh(pending)
        return pending.result()
    
    def _refresh(self, pending: Future) -> Token:
        logger.debug("Requesting a new access token")
        try:
            token = self._authorize()
        except BaseException as exc:
            with self._lock:
                self._state = TokenState.EMPTY
                self._token = None
                self._pending = None
            pending.set_exception(exc)
            raise
        
        with self._lock:
            self._state = TokenState.CACHED
            self._token = token
            # short-lived tokens keep at least half their lifetime usable
            lifetime = max(token.expires_at - self._clock(), 0.0)
            self._token_margin = min(self._margin, lifetime / 2)
            self._pending = None
        pending.set_result(token)
        return token
    
    def invalidate(self, token: Optional[Token] = None) -> None:
        """Force the next get_token() to authorize again.
        
        An in-flight refresh is left alone: its result is fresh already.
        When ``token`` is given, the cache is only dropped if it still holds
        that token, so several callers rejecting the same token refresh once.
        """
        with self._lock:
            if self._state is not TokenState.CACHED:
                return
            if token is not None and self._token is not None and self._token.value != token.value:
                return
            self._state = TokenState.EMPTY
            self._token = None
