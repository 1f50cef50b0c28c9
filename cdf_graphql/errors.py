from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from .models import GraphQLErrorItem


class TransportError(Exception):
    def __init__(self, status_code: int, body_snippet: str):
        super().__init__(f"Unexpected HTTP status {status_code}")
        self.status_code = status_code
        self.body_snippet = body_snippet


class GraphQLOperationError(Exception):
    def __init__(
        self,
        errors: List["GraphQLErrorItem"],
        partial_data: Optional[Any] = None,
    ):
        first = errors[0].message if errors else "GraphQL operation failed"
        super().__init__(first)
        self.errors = errors
        self.partial_data = partial_data


GraphQLError = GraphQLOperationError


class SerializationError(Exception):
    pass


ParseError = SerializationError
