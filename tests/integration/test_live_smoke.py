import logging
import os

import pytest

from cdf_graphql import GraphQLClient, OAuthBearerAuth, TransportError


def _get_auth():
    token = os.getenv("CDF_TOKEN")
    if token:
        return OAuthBearerAuth(lambda: token)
    return None


def _data_model():
    raw = os.getenv("CDF_GRAPHQL_DATA_MODEL", "")
    parts = [part.strip() for part in raw.split(":")]
    if len(parts) != 3 or not all(parts):
        return None
    return parts


def test_live_smoke(caplog):
    base_url = os.getenv("CDF_BASE_URL")
    project = os.getenv("CDF_PROJECT")
    auth = _get_auth()
    model = _data_model()
    if not base_url or not project or auth is None or model is None:
        pytest.skip("Integration credentials not provided")

    space, external_id, version = model
    logger = logging.getLogger("cdf_graphql.integration")
    with GraphQLClient(
        base_url,
        project,
        auth=auth,
        timeout_seconds=30.0,
        logger=logger,
    ) as client:
        with caplog.at_level(logging.DEBUG):
            try:
                result = client.query_raw(
                    space,
                    external_id,
                    version,
                    "query { __typename }",
                )
            except TransportError as exc:
                pytest.fail(f"GraphQL endpoint returned HTTP {exc.status_code}: {exc.body_snippet}")

    assert result.has_errors is False
    assert result.data is not None
    assert not any("Bearer " in rec.getMessage() for rec in caplog.records)


def test_live_invalid_field_returns_errors():
    base_url = os.getenv("CDF_BASE_URL")
    project = os.getenv("CDF_PROJECT")
    auth = _get_auth()
    model = _data_model()
    if not base_url or not project or auth is None or model is None:
        pytest.skip("Integration credentials not provided")

    space, external_id, version = model
    with GraphQLClient(base_url, project, auth=auth) as client:
        result = client.query_raw(
            space,
            external_id,
            version,
            "query { thisFieldDoesNotExist }",
        )

    assert result.has_errors is True
    assert result.errors[0].message
