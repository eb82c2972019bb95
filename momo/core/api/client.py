"""Low-level HTTP clients for the MoMo API.

MomoClient is the plain transport (subscription key and target environment
headers). AuthenticatingClient wraps it and attaches a bearer token obtained
from a TokenRefresher, retrying once when the token is rejected.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import requests

from momo.config.settings import Config
from .exceptions import AuthenticationFailure, TransportError, error_for_code
from .auth import Token, TokenRefresher

logger = logging.getLogger(__name__)

AUTH_REJECTED_STATUS = 401


def decode_body(resp: requests.Response) -> Any:
    """Return the JSON body of a response, its text if not JSON, or None if empty."""
    try:
        return resp.json()
    except ValueError:
        return resp.text or None


class MomoClient:
    """HTTP client for the MoMo API without bearer authentication.
    
    Every request carries the product subscription key and the target
    environment. Non-success responses raise RemoteError (or a subclass
    matching the API error code); network failures raise TransportError.
    
    Usage:
        client = MomoClient(config)
        resp = client.post("/v1_0/apiuser", json={...}, headers={...})
    """
    
    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        """Initialize MoMo client.
        
        Args:
            config: Resolved product configuration
            session: Optional requests session (a new one is created if omitted)
        """
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
    
    def default_headers(self) -> Dict[str, str]:
        return {
            "Ocp-Apim-Subscription-Key": self.config.primary_key,
            "X-Target-Environment": self.config.environment,
        }
    
    def send(
        self,
        method: str,
        path: str,
        json: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """Issue a request and return the response whatever its status.
        
        Raises:
            TransportError: If no response was received
        """
        url = f"{self.base_url}{path}"
        merged = self.default_headers()
        merged.update(headers or {})
        try:
            return self.session.request(
                method, url, json=json, headers=merged, timeout=self.config.timeout
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {path}: {exc}") from exc
    
    def request(
        self,
        method: str,
        path: str,
        json: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """Issue a request and raise on non-success status.
        
        Raises:
            RemoteError: On HTTP error
            TransportError: If no response was received
        """
        resp = self.send(method, path, json=json, headers=headers)
        self.handle_error(resp, path)
        return resp
    
    def get(self, path: str, **kwargs) -> requests.Response:
        return self.request("GET", path, **kwargs)
    
    def post(self, path: str, json: Optional[Any] = None, **kwargs) -> requests.Response:
        return self.request("POST", path, json=json, **kwargs)
    
    def handle_error(self, resp: requests.Response, path: str) -> None:
        """Centralized error handling for HTTP responses.
        
        Raises:
            RemoteError: If response status indicates error
        """
        if resp.status_code >= 400:
            raise error_for_code(resp.status_code, decode_body(resp), path)


class AuthenticatingClient:
    """Bearer-authenticated transport for collection and disbursement calls.
    
    Features:
    - Token obtained from a TokenRefresher before every request
    - One refresh-and-retry when the API answers 401
    - Every other error surfaced unmodified
    """
    
    def __init__(self, refresher: TokenRefresher, client: MomoClient):
        self.refresher = refresher
        self.client = client
    
    def _send(self, token: Token, method: str, path: str, json: Optional[Any], headers: Optional[Dict[str, str]]):
        merged = dict(headers or {})
        merged["Authorization"] = f"Bearer {token.value}"
        return self.client.send(method, path, json=json, headers=merged)
    
    def request(
        self,
        method: str,
        path: str,
        json: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """Execute a request with automatic authentication.
        
        Args:
            method: HTTP method
            path: API endpoint path (e.g., "/disbursement/v1_0/transfer")
            json: JSON payload
            headers: Extra headers (e.g., X-Reference-Id, X-Callback-Url)
            
        Returns:
            Response object
            
        Raises:
            AuthenticationFailure: If the request is rejected twice in a row
            RemoteError: On any other HTTP error
            TransportError: If no response was received
        """
        token = self.refresher.get_token()
        resp = self._send(token, method, path, json, headers)
        
        if resp.status_code == AUTH_REJECTED_STATUS:
            logger.debug("Token rejected on %s %s; refreshing and retrying once", method, path)
            self.refresher.invalidate(token)
            token = self.refresher.get_token()
            resp = self._send(token, method, path, json, headers)
            if resp.status_code == AUTH_REJECTED_STATUS:
                raise AuthenticationFailure(
                    f"{method} {path} rejected after token refresh", status_code=resp.status_code
                )
        
        self.client.handle_error(resp, path)
        return resp
    
    def get(self, path: str, **kwargs) -> requests.Response:
        return self.request("GET", path, **kwargs)
    
    def post(self, path: str, json: Optional[Any] = None, **kwargs) -> requests.Response:
        return self.request("POST", path, json=json, **kwargs)
