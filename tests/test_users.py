import uuid

import pytest

import momo
from momo.core.api.exceptions import ConfigurationError, ResourceAlreadyExistError


@pytest.fixture
def users(fake_session, global_config, subscription_config):
    client = momo.create_client(global_config, session_factory=lambda: fake_session)
    return client.users(subscription_config)


def test_create_user_returns_generated_id(users, fake_session):
    fake_session.add("POST", "/v1_0/apiuser", 201)

    user_id = users.create("example.com")

    assert str(uuid.UUID(user_id)) == user_id
    call = fake_session.calls[0]
    assert call["url"] == "https://momo.test/v1_0/apiuser"
    assert call["json"] == {"providerCallbackHost": "example.com"}
    assert call["headers"]["X-Reference-Id"] == user_id
    assert call["headers"]["Ocp-Apim-Subscription-Key"] == "primary-key"
    assert "Authorization" not in call["headers"]


def test_login_returns_api_key(users, fake_session):
    fake_session.add("POST", r"/v1_0/apiuser/[\w\-]+/apikey", 201, {"apiKey": "api-key"})

    assert users.login("6f4cd1c2-4b5b-4a66-9d4f-0c2ad5f1e3b7") == {"apiKey": "api-key"}
    assert "Authorization" not in fake_session.calls[0]["headers"]


def test_create_user_conflict(users, fake_session):
    fake_session.add("POST", "/v1_0/apiuser", 409, {"code": "RESOURCE_ALREADY_EXIST", "message": "Duplicated reference id"})

    with pytest.raises(ResourceAlreadyExistError) as excinfo:
        users.create("example.com")
    assert excinfo.value.status_code == 409


def test_users_requires_primary_key(global_config):
    client = momo.create_client(global_config)

    with pytest.raises(ConfigurationError, match="primaryKey is required"):
        client.users(momo.SubscriptionConfig())
