"""Pytest shared fixtures for MoMo client tests."""
import json
import pathlib
import re
import sys
from typing import Any, List, Optional

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from momo.config.settings import GlobalConfig, ProductConfig, SubscriptionConfig

USER_ID = "6f4cd1c2-4b5b-4a66-9d4f-0c2ad5f1e3b7"


class StubResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, payload: Any = None, url: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.url = url
        if payload is None:
            self.text = ""
        elif isinstance(payload, str):
            self.text = payload
        else:
            self.text = json.dumps(payload)

    def json(self):
        if self._payload is None or isinstance(self._payload, str):
            return json.loads(self.text)
        return self._payload


class FakeSession:
    """Routes requests to canned responses and records every call.

    Routes registered for the same method/path are consumed in order; the
    last one keeps answering once the others are used up.
    """

    def __init__(self):
        self.routes: List[list] = []
        self.calls: List[dict] = []

    def add(self, method: str, pattern: str, status: int = 200, payload: Any = None) -> "FakeSession":
        self.routes.append([method, re.compile(pattern + "$"), StubResponse(status, payload)])
        return self

    def raise_on(self, method: str, pattern: str, exc: Exception) -> "FakeSession":
        self.routes.append([method, re.compile(pattern + "$"), exc])
        return self

    def request(self, method, url, json=None, headers=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "headers": dict(headers or {}), "timeout": timeout})
        matches = [r for r in self.routes if r[0] == method and r[1].search(url)]
        if not matches:
            raise AssertionError(f"Unexpected request: {method} {url}")
        route = matches[0]
        if len(matches) > 1:
            self.routes.remove(route)
        result = route[2]
        if isinstance(result, Exception):
            raise result
        result.url = url
        return result

    def calls_to(self, path: str, method: Optional[str] = None) -> List[dict]:
        return [c for c in self.calls if c["url"].endswith(path) and (method is None or c["method"] == method)]


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def global_config():
    return GlobalConfig(callback_host="example.com", base_url="https://momo.test")


@pytest.fixture
def product_config():
    return ProductConfig(primary_key="primary-key", user_id=USER_ID, user_secret="user-secret")


@pytest.fixture
def subscription_config():
    return SubscriptionConfig(primary_key="primary-key")


@pytest.fixture
def token_payload():
    return {"access_token": "token", "token_type": "access_token", "expires_in": 3600}


@pytest.fixture
def unreachable():
    return requests.ConnectionError("connection reset")
