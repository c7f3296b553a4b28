from __future__ import annotations

import base64
from typing import Dict

from paycheckout.client.types import ApiAuth


def build_auth_headers(auth: ApiAuth) -> Dict[str, str]:
    if auth.kind == "none":
        return {}

    if auth.kind == "bearer":
        if not auth.secret_key:
            raise ValueError("bearer auth requires secret_key")
        return {"Authorization": f"Bearer {auth.secret_key}"}

    if auth.kind == "basic":
        if not auth.secret_key:
            raise ValueError("basic auth requires secret_key")
        # The secret key is the username; the password stays empty.
        token = base64.b64encode(f"{auth.secret_key}:".encode("utf-8")).decode("ascii")
        return {"Authorization": f"Basic {token}"}

    raise ValueError(f"Unsupported auth kind: {auth.kind!r}")
