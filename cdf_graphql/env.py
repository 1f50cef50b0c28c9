from __future__ import annotations

import os
from typing import Optional

from .auth import OAuthBearerAuth
from .client import GraphQLClient

DEFAULT_BASE_URL = "https://api.cognitedata.com"


def base_url_from_env(default: str = DEFAULT_BASE_URL) -> str:
    raw = os.getenv("CDF_BASE_URL", "").strip()
    return raw or default


def project_from_env() -> Optional[str]:
    raw = os.getenv("CDF_PROJECT", "").strip()
    return raw or None


def auth_from_env() -> Optional[OAuthBearerAuth]:
    token = os.getenv("CDF_TOKEN", "").strip()
    if not token:
        return None
    return OAuthBearerAuth(lambda: token)


def client_from_env(timeout_seconds: float = 30.0) -> GraphQLClient:
    project = project_from_env()
    auth = auth_from_env()
    missing = []
    if project is None:
        missing.append("CDF_PROJECT")
    if auth is None:
        missing.append("CDF_TOKEN")
    if missing:
        raise ValueError(f"Missing {' and '.join(missing)}. Set CDF_BASE_URL to override the API host.")
    return GraphQLClient(
        base_url_from_env(),
        project,
        auth=auth,
        timeout_seconds=timeout_seconds,
    )
