"""Unit tests for token authorization and the bearer-authenticated client."""
import base64

import pytest

from momo.config.settings import merge_config
from momo.core.api import (
    AuthenticatingClient,
    MomoClient,
    TokenRefresher,
    authorize_collections,
    authorize_disbursements,
)
from momo.core.api.exceptions import (
    AuthenticationFailure,
    NotEnoughFundsError,
    RemoteError,
    TransportError,
)


@pytest.fixture
def client(fake_session, global_config, product_config):
    return MomoClient(merge_config(global_config, product_config), session=fake_session)


@pytest.fixture
def auth_client(client):
    return AuthenticatingClient(TokenRefresher(lambda: authorize_disbursements(client)), client)


# ─────────────────────────────────────────────────────────────────────────────
# Authorizer
# ─────────────────────────────────────────────────────────────────────────────

def test_authorize_sends_basic_credentials(client, fake_session, token_payload, product_config):
    fake_session.add("POST", "/collection/token/", 200, token_payload)

    token = authorize_collections(client, clock=lambda: 1000.0)

    assert token.value == "token"
    assert token.expires_at == 4600.0
    call = fake_session.calls[0]
    expected = base64.b64encode(f"{product_config.user_id}:user-secret".encode()).decode()
    assert call["url"] == "https://momo.test/collection/token/"
    assert call["headers"]["Authorization"] == f"Basic {expected}"
    assert call["headers"]["Ocp-Apim-Subscription-Key"] == "primary-key"
    assert call["headers"]["X-Target-Environment"] == "sandbox"


def test_authorize_rejected_credentials(client, fake_session):
    fake_session.add("POST", "/disbursement/token/", 401, {"error": "login_failed"})

    with pytest.raises(AuthenticationFailure) as excinfo:
        authorize_disbursements(client)
    assert excinfo.value.status_code == 401


@pytest.mark.parametrize("payload", ["not json", {"token_type": "access_token"}, {"access_token": "t", "expires_in": "soon"}])
def test_authorize_malformed_response(client, fake_session, payload):
    fake_session.add("POST", "/disbursement/token/", 200, payload)

    with pytest.raises(AuthenticationFailure, match="malformed"):
        authorize_disbursements(client)


def test_authorize_network_failure_is_transport_error(client, fake_session, unreachable):
    fake_session.raise_on("POST", "/disbursement/token/", unreachable)

    with pytest.raises(TransportError):
        authorize_disbursements(client)


# ─────────────────────────────────────────────────────────────────────────────
# AuthenticatingClient
# ─────────────────────────────────────────────────────────────────────────────

def test_bearer_token_attached_and_headers_merged(auth_client, fake_session, token_payload):
    fake_session.add("POST", "/disbursement/token/", 200, token_payload)
    fake_session.add("POST", "/disbursement/v1_0/transfer", 202)

    auth_client.post("/disbursement/v1_0/transfer", json={"amount": "1"}, headers={"X-Reference-Id": "ref"})

    call = fake_session.calls_to("/disbursement/v1_0/transfer")[0]
    assert call["headers"]["Authorization"] == "Bearer token"
    assert call["headers"]["X-Reference-Id"] == "ref"
    assert call["json"] == {"amount": "1"}


def test_token_reused_across_requests(auth_client, fake_session, token_payload):
    fake_session.add("POST", "/disbursement/token/", 200, token_payload)
    fake_session.add("GET", "/disbursement/v1_0/account/balance", 200, {"availableBalance": "1", "currency": "EUR"})

    auth_client.get("/disbursement/v1_0/account/balance")
    auth_client.get("/disbursement/v1_0/account/balance")

    assert len(fake_session.calls_to("/disbursement/token/")) == 1


def test_retry_once_on_rejection(auth_client, fake_session):
    fake_session.add("POST", "/disbursement/token/", 200, {"access_token": "old", "expires_in": 3600})
    fake_session.add("POST", "/disbursement/token/", 200, {"access_token": "new", "expires_in": 3600})
    fake_session.add("GET", "/disbursement/v1_0/account/balance", 401, {"message": "Access token expired"})
    fake_session.add("GET", "/disbursement/v1_0/account/balance", 200, {"availableBalance": "2000", "currency": "UGX"})

    resp = auth_client.get("/disbursement/v1_0/account/balance")

    assert resp.json() == {"availableBalance": "2000", "currency": "UGX"}
    business_calls = fake_session.calls_to("/disbursement/v1_0/account/balance")
    assert len(business_calls) == 2
    assert len(fake_session.calls_to("/disbursement/token/")) == 2
    assert business_calls[0]["headers"]["Authorization"] == "Bearer old"
    assert business_calls[1]["headers"]["Authorization"] == "Bearer new"


def test_retry_keeps_method_path_and_body(auth_client, fake_session, token_payload):
    fake_session.add("POST", "/disbursement/token/", 200, token_payload)
    fake_session.add("POST", "/disbursement/v1_0/transfer", 401)
    fake_session.add("POST", "/disbursement/v1_0/transfer", 202)

    auth_client.post("/disbursement/v1_0/transfer", json={"amount": "5"}, headers={"X-Reference-Id": "ref"})

    first, second = fake_session.calls_to("/disbursement/v1_0/transfer")
    assert first["json"] == second["json"] == {"amount": "5"}
    assert first["headers"]["X-Reference-Id"] == second["headers"]["X-Reference-Id"] == "ref"


def test_second_rejection_is_terminal(auth_client, fake_session, token_payload):
    fake_session.add("POST", "/disbursement/token/", 200, token_payload)
    fake_session.add("GET", "/disbursement/v1_0/account/balance", 401)

    with pytest.raises(AuthenticationFailure):
        auth_client.get("/disbursement/v1_0/account/balance")

    assert len(fake_session.calls_to("/disbursement/v1_0/account/balance")) == 2
    assert len(fake_session.calls_to("/disbursement/token/")) == 2


@pytest.mark.parametrize("status", [400, 403, 404, 409, 429, 500])
def test_other_errors_surface_without_retry(auth_client, fake_session, token_payload, status):
    body = {"code": "SOMETHING", "message": "nope"}
    fake_session.add("POST", "/disbursement/token/", 200, token_payload)
    fake_session.add("GET", "/disbursement/v1_0/account/balance", status, body)

    with pytest.raises(RemoteError) as excinfo:
        auth_client.get("/disbursement/v1_0/account/balance")

    assert excinfo.value.status_code == status
    assert excinfo.value.body == body
    assert len(fake_session.calls_to("/disbursement/v1_0/account/balance")) == 1
    assert len(fake_session.calls_to("/disbursement/token/")) == 1


def test_error_code_maps_to_typed_error(auth_client, fake_session, token_payload):
    fake_session.add("POST", "/disbursement/token/", 200, token_payload)
    fake_session.add("POST", "/disbursement/v1_0/transfer", 500, {"code": "NOT_ENOUGH_FUNDS", "message": "Not enough funds"})

    with pytest.raises(NotEnoughFundsError) as excinfo:
        auth_client.post("/disbursement/v1_0/transfer", json={})

    assert excinfo.value.code == "NOT_ENOUGH_FUNDS"
    assert "Not enough funds" in str(excinfo.value)


def test_network_failure_on_business_call(auth_client, fake_session, token_payload, unreachable):
    fake_session.add("POST", "/disbursement/token/", 200, token_payload)
    fake_session.raise_on("GET", "/disbursement/v1_0/account/balance", unreachable)

    with pytest.raises(TransportError):
        auth_client.get("/disbursement/v1_0/account/balance")


def test_short_lived_token_reused_across_requests(auth_client, fake_session):
    fake_session.add("POST", "/disbursement/token/", 200, {"access_token": "t", "expires_in": 60})
    fake_session.add("GET", "/disbursement/v1_0/account/balance", 200, {"availableBalance": "1", "currency": "EUR"})

    for _ in range(3):
        auth_client.get("/disbursement/v1_0/account/balance")

    assert len(fake_session.calls_to("/disbursement/token/")) == 1
