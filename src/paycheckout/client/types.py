from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional


DEFAULT_BASE_URL = "https://api.stripe.com/v1"


@dataclass(frozen=True)
class ApiAuth:
    kind: Literal["none", "bearer", "basic"] = "none"

    # Secret API key; sent as bearer token or as basic-auth username.
    secret_key: Optional[str] = None


@dataclass(frozen=True)
class ApiConnection:
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    headers: Dict[str, str] = field(default_factory=dict)
    auth: ApiAuth = field(default_factory=ApiAuth)
    api_version: Optional[str] = None
