from unittest.mock import MagicMock

import httpx
import pytest
from pydantic import ValidationError

from paycheckout.client.http import AsyncClient, Client
from paycheckout.core.exceptions import ConfigurationError
from paycheckout.models.client_config import ClientConfig
from paycheckout.providers.env_secrets_provider import EnvSecretsProvider
from paycheckout.wiring.client_wiring import build_api_connection, build_async_client, build_client


class FakeSecretsProvider:
    def __init__(self, value):
        self.value = value
        self.calls: list[tuple[str, str]] = []

    def get_secret(self, vault_ref: str, secret_key: str):
        self.calls.append((vault_ref, secret_key))
        return self.value


def test_config_defaults():
    cfg = ClientConfig()

    conn = build_api_connection(cfg)

    assert conn.base_url == "https://api.stripe.com/v1"
    assert conn.timeout_seconds == 30.0
    assert conn.headers == {}
    assert conn.auth.kind == "none"
    assert conn.api_version is None


def test_bearer_secret_key_inline():
    cfg = ClientConfig(
        base_url="https://api.example.test/v1",
        timeout_seconds=5,
        api_version="2020-08-27",
        auth={"kind": "bearer", "secret_key": "sk_test_123"},
    )

    conn = build_api_connection(cfg)

    assert conn.auth.kind == "bearer"
    assert conn.auth.secret_key == "sk_test_123"
    assert conn.timeout_seconds == 5.0
    assert conn.api_version == "2020-08-27"


def test_secret_key_resolves_from_secrets_provider():
    secrets_provider = FakeSecretsProvider("sk_from_vault")
    cfg = ClientConfig(
        auth={"kind": "basic", "secret_key_ref": {"vault_ref": "stripe", "secret_key": "secret_key"}},
    )

    conn = build_api_connection(cfg, secrets_provider=secrets_provider)

    assert secrets_provider.calls == [("stripe", "secret_key")]
    assert conn.auth.kind == "basic"
    assert conn.auth.secret_key == "sk_from_vault"


def test_secret_ref_without_provider_fails():
    cfg = ClientConfig(auth={"kind": "bearer", "secret_key_ref": {"vault_ref": "stripe", "secret_key": "k"}})

    with pytest.raises(ConfigurationError):
        build_api_connection(cfg)


def test_secret_ref_missing_secret_fails():
    cfg = ClientConfig(auth={"kind": "bearer", "secret_key_ref": {"vault_ref": "stripe", "secret_key": "k"}})

    with pytest.raises(ConfigurationError):
        build_api_connection(cfg, secrets_provider=FakeSecretsProvider(None))


def test_bearer_requires_a_secret_source():
    with pytest.raises(ValidationError):
        ClientConfig(auth={"kind": "bearer"})


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        ClientConfig(timeout_seconds=0)


def test_from_env():
    cfg = ClientConfig.from_env(
        {
            "STRIPE_SECRET_KEY": "sk_test_env",
            "STRIPE_API_BASE": "https://api.example.test/v1",
            "STRIPE_API_VERSION": "2020-08-27",
        }
    )

    assert cfg.base_url == "https://api.example.test/v1"
    assert cfg.api_version == "2020-08-27"
    assert cfg.auth.kind == "bearer"
    assert cfg.auth.secret_key == "sk_test_env"


def test_from_env_requires_secret_key():
    with pytest.raises(ConfigurationError):
        ClientConfig.from_env({})


def test_env_secrets_provider():
    provider = EnvSecretsProvider({"STRIPE_SECRET_KEY": "sk_env", "EMPTY_KEY": ""})

    assert EnvSecretsProvider.variable_name("stripe", "secret-key") == "STRIPE_SECRET_KEY"
    assert provider.get_secret("stripe", "secret_key") == "sk_env"
    assert provider.get_secret("empty", "key") is None
    assert provider.get_secret("missing", "key") is None


def test_build_client_uses_injected_http_client():
    http = MagicMock(spec=httpx.Client)
    cfg = ClientConfig(auth={"kind": "bearer", "secret_key": "sk_test_123"})

    client = build_client(cfg, http_client=http)

    assert isinstance(client, Client)
    assert client._client is http
    assert client.connection.auth.secret_key == "sk_test_123"


def test_build_async_client():
    http = MagicMock(spec=httpx.AsyncClient)

    client = build_async_client(ClientConfig(), http_client=http)

    assert isinstance(client, AsyncClient)
    assert client._client is http
