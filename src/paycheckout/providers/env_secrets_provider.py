from __future__ import annotations

import os
import re
from typing import Mapping, Optional

from paycheckout.core.secrets_provider import SecretsProvider


class EnvSecretsProvider(SecretsProvider):
    """Secrets provider that reads secrets from environment variables.

    ``get_secret("stripe", "secret_key")`` looks up ``STRIPE_SECRET_KEY``.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = environ if environ is not None else os.environ

    @staticmethod
    def variable_name(vault_ref: str, secret_key: str) -> str:
        raw = f"{vault_ref}_{secret_key}" if vault_ref else secret_key
        return re.sub(r"[^0-9A-Za-z]+", "_", raw).upper()

    def get_secret(self, vault_ref: str, secret_key: str) -> Optional[str]:
        value = self._environ.get(self.variable_name(vault_ref, secret_key))
        return value or None
