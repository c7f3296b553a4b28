from __future__ import annotations

import os
from typing import Annotated, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, PositiveFloat, model_validator

from paycheckout.client.types import DEFAULT_BASE_URL
from paycheckout.core.exceptions import ConfigurationError


class SecretRefConfig(BaseModel):
    """Reference to a secret stored in a vault/backend.

    For EnvSecretsProvider this maps to the environment variable
    ``<VAULT_REF>_<SECRET_KEY>``.
    """

    vault_ref: str
    secret_key: str


class ApiAuthNoneConfig(BaseModel):
    kind: Literal["none"] = "none"


class _SecretKeyAuthConfig(BaseModel):
    secret_key: Optional[str] = None
    secret_key_ref: Optional[SecretRefConfig] = None

    @model_validator(mode="after")
    def _validate_secret_source(self):
        if self.secret_key is None and self.secret_key_ref is None:
            raise ValueError(f"{self.kind} auth requires either secret_key or secret_key_ref")
        return self


class ApiAuthBearerConfig(_SecretKeyAuthConfig):
    kind: Literal["bearer"] = "bearer"


class ApiAuthBasicConfig(_SecretKeyAuthConfig):
    kind: Literal["basic"] = "basic"


ApiAuthConfig = Annotated[
    Union[
        ApiAuthNoneConfig,
        ApiAuthBearerConfig,
        ApiAuthBasicConfig,
    ],
    Field(discriminator="kind"),
]


class ClientConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: PositiveFloat = 30.0
    headers: Dict[str, str] = Field(default_factory=dict)
    api_version: Optional[str] = None

    auth: ApiAuthConfig = Field(default_factory=ApiAuthNoneConfig)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Build a bearer-auth config from STRIPE_SECRET_KEY, STRIPE_API_BASE and STRIPE_API_VERSION."""
        env = environ if environ is not None else os.environ

        secret_key = env.get("STRIPE_SECRET_KEY")
        if not secret_key:
            raise ConfigurationError("STRIPE_SECRET_KEY is not set")

        return cls(
            base_url=env.get("STRIPE_API_BASE") or DEFAULT_BASE_URL,
            api_version=env.get("STRIPE_API_VERSION") or None,
            auth=ApiAuthBearerConfig(secret_key=secret_key),
        )
