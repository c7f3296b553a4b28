from __future__ import annotations

from typing import Optional

import httpx

from paycheckout.client.http import AsyncClient, Client
from paycheckout.client.types import ApiAuth, ApiConnection
from paycheckout.core.exceptions import ConfigurationError
from paycheckout.core.secrets_provider import SecretsProvider
from paycheckout.models.client_config import ClientConfig


def _auth_from_config(cfg: ClientConfig, secrets_provider: Optional[SecretsProvider] = None) -> ApiAuth:
    auth = cfg.auth
    kind = auth.kind

    if kind == "none":
        return ApiAuth(kind="none")

    if kind in ("bearer", "basic"):
        secret_key = auth.secret_key
        if secret_key is None and auth.secret_key_ref is not None:
            if secrets_provider is None:
                raise ConfigurationError("secret_key_ref provided but no secrets_provider was passed")
            secret_key = secrets_provider.get_secret(
                auth.secret_key_ref.vault_ref,
                auth.secret_key_ref.secret_key,
            )
            if secret_key is None:
                raise ConfigurationError(
                    "secrets_provider returned None for secret_key_ref="
                    f"{auth.secret_key_ref.vault_ref!r}/{auth.secret_key_ref.secret_key!r}"
                )
        return ApiAuth(kind=kind, secret_key=secret_key)

    raise ConfigurationError(f"Unsupported api auth kind: {kind!r}")


def build_api_connection(
    cfg: ClientConfig,
    *,
    secrets_provider: Optional[SecretsProvider] = None,
) -> ApiConnection:
    # This wiring module is the only layer allowed to read Pydantic config.
    return ApiConnection(
        base_url=cfg.base_url,
        timeout_seconds=float(cfg.timeout_seconds),
        headers=dict(cfg.headers),
        auth=_auth_from_config(cfg, secrets_provider=secrets_provider),
        api_version=cfg.api_version,
    )


def build_client(
    cfg: ClientConfig,
    *,
    secrets_provider: Optional[SecretsProvider] = None,
    http_client: Optional[httpx.Client] = None,
) -> Client:
    connection = build_api_connection(cfg, secrets_provider=secrets_provider)
    return Client(connection, client=http_client)


def build_async_client(
    cfg: ClientConfig,
    *,
    secrets_provider: Optional[SecretsProvider] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> AsyncClient:
    connection = build_api_connection(cfg, secrets_provider=secrets_provider)
    return AsyncClient(connection, client=http_client)
