from .auth import AuthProvider, OAuthBearerAuth
from .client import MAX_QUERY_LENGTH, GraphQLClient
from .env import client_from_env
from .errors import (
    GraphQLError,
    GraphQLOperationError,
    ParseError,
    SerializationError,
    TransportError,
)
from .models import (
    UNSET,
    GraphQLErrorItem,
    GraphQLErrorLocation,
    GraphQLRawResponse,
    GraphQLRequest,
    GraphQLResponse,
    JsonValue,
    Unset,
)

__all__ = [
    "GraphQLClient",
    "MAX_QUERY_LENGTH",
    "client_from_env",
    "AuthProvider",
    "OAuthBearerAuth",
    "GraphQLRequest",
    "GraphQLResponse",
    "GraphQLRawResponse",
    "GraphQLErrorItem",
    "GraphQLErrorLocation",
    "JsonValue",
    "UNSET",
    "Unset",
    "TransportError",
    "GraphQLError",
    "GraphQLOperationError",
    "SerializationError",
    "ParseError",
]
