from __future__ import annotations

from typing import Callable, Dict


class AuthProvider:
    def apply(self, headers: Dict[str, str]) -> None:
        raise NotImplementedError


class OAuthBearerAuth(AuthProvider):
    """Bearer token auth; the getter is called once per request so it may refresh."""

    def __init__(self, token_getter: Callable[[], str]):
        self._token_getter = token_getter

    def apply(self, headers: Dict[str, str]) -> None:
        token = self._token_getter()
        if not isinstance(token, str) or not token.strip():
            raise ValueError("token_getter returned an empty access token")
        headers["Authorization"] = f"Bearer {token.strip()}"
