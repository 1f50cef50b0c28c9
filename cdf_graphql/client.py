from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, TypeVar
from urllib.parse import quote

import httpx

from .auth import AuthProvider
from .errors import TransportError
from .logging import get_logger, sanitize_headers
from .models import (
    UNSET,
    GraphQLRawResponse,
    GraphQLRequest,
    GraphQLResponse,
    JsonValue,
)

T = TypeVar("T")

MAX_QUERY_LENGTH = 100_000
_BODY_SNIPPET_LIMIT = 500
_FORBIDDEN_IDENTIFIER_PARTS = ("..", "/", "\\", "%", "?", "#")


def _validate_identifier(value: Optional[str], name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} is required")
    for part in _FORBIDDEN_IDENTIFIER_PARTS:
        if part in value:
            raise ValueError(f"{name} contains invalid characters: {value!r}")
    return value


def _validate_query(query: Optional[str]) -> str:
    if not isinstance(query, str) or not query.strip():
        raise ValueError("query is required")
    if len(query) > MAX_QUERY_LENGTH:
        raise ValueError(
            f"query length {len(query)} exceeds maximum of {MAX_QUERY_LENGTH} characters"
        )
    return query


class GraphQLClient:
    """Executes GraphQL queries against CDF data model endpoints.

    Each data model version exposes its own endpoint under the project, so
    ``space``, ``external_id`` and ``version`` are passed per call.
    """

    def __init__(
        self,
        base_url: str,
        project: str,
        *,
        auth: AuthProvider,
        timeout_seconds: float = 30.0,
        http_client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if not isinstance(base_url, str) or not base_url.strip():
            raise ValueError("base_url is required")
        if not isinstance(project, str) or not project.strip():
            raise ValueError("project is required")
        if auth is None:
            raise ValueError("auth is required")
        self.base_url = base_url.strip().rstrip("/")
        self.project = project.strip()
        self.auth = auth
        self.logger = get_logger(logger)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout_seconds)

    def __enter__(self) -> "GraphQLClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def endpoint(self, space: str, external_id: str, version: str) -> str:
        space = quote(_validate_identifier(space, "space"), safe="")
        external_id = quote(_validate_identifier(external_id, "external_id"), safe="")
        version = quote(_validate_identifier(version, "version"), safe="")
        return (
            f"{self.base_url}/api/v1/projects/{quote(self.project, safe='')}"
            f"/userapis/spaces/{space}/datamodels/{external_id}"
            f"/versions/{version}/graphql"
        )

    def execute(
        self,
        space: str,
        external_id: str,
        version: str,
        request: GraphQLRequest,
    ) -> GraphQLRawResponse:
        url = self.endpoint(space, external_id, version)
        _validate_query(request.query)

        headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        self.auth.apply(headers)
        body = request.to_json()

        self.logger.debug(
            "POST %s operation=%s headers=%s",
            url,
            request.operation_name or "<anonymous>",
            sanitize_headers(headers),
        )
        response = self._client.post(url, content=body, headers=headers)

        if response.status_code < 200 or response.status_code >= 300:
            snippet = response.text[:_BODY_SNIPPET_LIMIT]
            self.logger.warning(
                "GraphQL request failed; status=%s url=%s", response.status_code, url
            )
            raise TransportError(response.status_code, snippet)

        result = GraphQLRawResponse.from_json(response.content)
        self.logger.debug(
            "GraphQL response status=%s errors=%s",
            response.status_code,
            len(result.errors or []),
        )
        return result

    def query(
        self,
        space: str,
        external_id: str,
        version: str,
        query: str,
        variables: Optional[Dict[str, JsonValue]] = None,
        operation_name: Optional[str] = None,
        *,
        decoder: Optional[Callable[[JsonValue], T]] = None,
    ) -> GraphQLResponse[T]:
        request = GraphQLRequest(
            query=_validate_query(query),
            variables=variables if variables is not None else UNSET,
            operation_name=operation_name if operation_name is not None else UNSET,
        )
        raw = self.execute(space, external_id, version, request)
        return GraphQLResponse.from_raw(raw, decoder)

    def query_raw(
        self,
        space: str,
        external_id: str,
        version: str,
        query: str,
        variables: Optional[Dict[str, JsonValue]] = None,
        operation_name: Optional[str] = None,
    ) -> GraphQLRawResponse:
        return self.query(
            space,
            external_id,
            version,
            query,
            variables=variables,
            operation_name=operation_name,
        ).to_raw()
