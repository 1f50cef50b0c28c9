from __future__ import annotations

import json
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    TypeVar,
    Union,
)

from .errors import GraphQLOperationError, SerializationError

T = TypeVar("T")

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


class Unset:
    """Marker type for a field the caller never supplied."""

    _instance: Optional["Unset"] = None

    def __new__(cls) -> "Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = Unset()


def is_set(value: Any) -> bool:
    return value is not UNSET and value is not None


def _expect_dict(obj: Any, path: str) -> Dict[str, Any]:
    if not isinstance(obj, dict):
        raise SerializationError(f"Expected object at {path}")
    return obj


def _expect_list(obj: Any, path: str) -> List[Any]:
    if not isinstance(obj, list):
        raise SerializationError(f"Expected list at {path}")
    return obj


def _expect_str(obj: Any, path: str) -> str:
    if not isinstance(obj, str):
        raise SerializationError(f"Expected string at {path}")
    return obj


def _expect_int(obj: Any, path: str) -> int:
    if isinstance(obj, bool) or not isinstance(obj, int):
        raise SerializationError(f"Expected integer at {path}")
    return obj


def _reject_constant(name: str) -> Any:
    raise SerializationError(f"Body is not valid JSON: {name} is not a JSON value")


def _loads(body: Union[str, bytes, bytearray]) -> Any:
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SerializationError(f"Body is not valid JSON: {exc}") from exc


@dataclass(frozen=True)
class GraphQLRequest:
    """Request body for a GraphQL query against a data model.

    ``variables`` and ``operation_name`` are left out of the wire form
    entirely unless supplied; an explicit ``null`` is never sent for them.
    Avoid putting credentials or other secrets in ``variables``.
    """

    query: str = ""
    variables: Union[Dict[str, JsonValue], Unset, None] = UNSET
    operation_name: Union[str, Unset, None] = UNSET

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"query": self.query}
        if is_set(self.variables):
            payload["variables"] = self.variables
        if is_set(self.operation_name):
            payload["operationName"] = self.operation_name
        return payload

    def to_json(self) -> bytes:
        try:
            encoded = json.dumps(
                self.to_dict(), separators=(",", ":"), allow_nan=False
            )
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"GraphQL request is not JSON serializable: {exc}") from exc
        return encoded.encode("utf-8")

    @staticmethod
    def from_dict(obj: Any, path: str = "request") -> "GraphQLRequest":
        raw = _expect_dict(obj, path)
        query = ""
        if raw.get("query") is not None:
            query = _expect_str(raw.get("query"), f"{path}.query")
        variables: Union[Dict[str, JsonValue], Unset] = UNSET
        if raw.get("variables") is not None:
            variables = _expect_dict(raw.get("variables"), f"{path}.variables")
        operation_name: Union[str, Unset] = UNSET
        if raw.get("operationName") is not None:
            operation_name = _expect_str(
                raw.get("operationName"), f"{path}.operationName"
            )
        return GraphQLRequest(
            query=query,
            variables=variables,
            operation_name=operation_name,
        )

    @staticmethod
    def from_json(body: Union[str, bytes, bytearray]) -> "GraphQLRequest":
        return GraphQLRequest.from_dict(_loads(body))


@dataclass(frozen=True)
class GraphQLErrorLocation:
    line: int
    column: int

    @staticmethod
    def from_dict(obj: Any, path: str) -> "GraphQLErrorLocation":
        raw = _expect_dict(obj, path)
        line = 0
        if raw.get("line") is not None:
            line = _expect_int(raw.get("line"), f"{path}.line")
        column = 0
        if raw.get("column") is not None:
            column = _expect_int(raw.get("column"), f"{path}.column")
        return GraphQLErrorLocation(line=line, column=column)


@dataclass
class GraphQLErrorItem:
    message: str = ""
    locations: Optional[List[GraphQLErrorLocation]] = None
    path: Optional[List[Union[str, int]]] = None
    extensions: Optional[JsonValue] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "GraphQLErrorItem":
        raw = _expect_dict(obj, path)
        message = ""
        if raw.get("message") is not None:
            message = _expect_str(raw.get("message"), f"{path}.message")
        locations: Optional[List[GraphQLErrorLocation]] = None
        if raw.get("locations") is not None:
            locations = [
                GraphQLErrorLocation.from_dict(item, f"{path}.locations[{idx}]")
                for idx, item in enumerate(
                    _expect_list(raw.get("locations"), f"{path}.locations")
                )
            ]
        error_path: Optional[List[Union[str, int]]] = None
        if raw.get("path") is not None:
            error_path = list(_expect_list(raw.get("path"), f"{path}.path"))
        return GraphQLErrorItem(
            message=message,
            locations=locations,
            path=error_path,
            extensions=raw.get("extensions"),
        )


def parse_error_items(raw_errors: Any, path: str = "errors") -> Optional[List[GraphQLErrorItem]]:
    if raw_errors is None:
        return None
    return [
        GraphQLErrorItem.from_dict(item, f"{path}[{idx}]")
        for idx, item in enumerate(_expect_list(raw_errors, path))
    ]


@dataclass
class GraphQLRawResponse:
    data: Optional[JsonValue] = None
    errors: Optional[List[GraphQLErrorItem]] = None
    extensions: Optional[JsonValue] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @staticmethod
    def from_dict(obj: Any) -> "GraphQLRawResponse":
        raw = _expect_dict(obj, "response")
        return GraphQLRawResponse(
            data=raw.get("data"),
            errors=parse_error_items(raw.get("errors")),
            extensions=raw.get("extensions"),
        )

    @staticmethod
    def from_json(body: Union[str, bytes, bytearray]) -> "GraphQLRawResponse":
        return GraphQLRawResponse.from_dict(_loads(body))


@dataclass
class GraphQLResponse(Generic[T]):
    """Response from a GraphQL query with a typed ``data`` payload.

    GraphQL allows partial ``data`` alongside ``errors``, so a populated
    ``data`` says nothing about ``has_errors``; check it explicitly.
    """

    data: Optional[T] = None
    errors: Optional[List[GraphQLErrorItem]] = None
    extensions: Optional[JsonValue] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def raise_for_errors(self) -> None:
        if self.has_errors:
            raise GraphQLOperationError(errors=list(self.errors or []), partial_data=self.data)

    def to_raw(self) -> GraphQLRawResponse:
        return GraphQLRawResponse(
            data=self.data,  # type: ignore[arg-type]
            errors=self.errors,
            extensions=self.extensions,
        )

    @staticmethod
    def from_raw(
        raw: GraphQLRawResponse,
        decoder: Optional[Callable[[JsonValue], T]] = None,
    ) -> "GraphQLResponse[T]":
        data: Optional[T] = raw.data  # type: ignore[assignment]
        if raw.data is not None and decoder is not None:
            try:
                data = decoder(raw.data)
            except SerializationError:
                raise
            except (ValueError, TypeError, LookupError, AttributeError) as exc:
                raise SerializationError(f"Unable to decode GraphQL data: {exc}") from exc
        return GraphQLResponse(
            data=data,
            errors=raw.errors,
            extensions=raw.extensions,
        )

    @staticmethod
    def from_dict(
        obj: Any,
        decoder: Optional[Callable[[JsonValue], T]] = None,
    ) -> "GraphQLResponse[T]":
        return GraphQLResponse.from_raw(GraphQLRawResponse.from_dict(obj), decoder)

    @staticmethod
    def from_json(
        body: Union[str, bytes, bytearray],
        decoder: Optional[Callable[[JsonValue], T]] = None,
    ) -> "GraphQLResponse[T]":
        return GraphQLResponse.from_dict(_loads(body), decoder)
