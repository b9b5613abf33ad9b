"""
Request types for the Shopify client.

Provides the immutable request descriptor consumed by the engine and the
builder that produces it from a path, a verb, an envelope key, query
parameters and a body.
"""

from __future__ import annotations
import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

from pydantic import BaseModel

from ..config import ClientConfig
from ..runtime import codec
from ..runtime.errors import InvalidArgumentError

ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"

QueryPairs = Tuple[Tuple[str, str], ...]
QueryInput = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


class HttpMethod(str, Enum):
    """HTTP verbs used by the Admin REST API."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def requires_body(self) -> bool:
        return self in (HttpMethod.POST, HttpMethod.PUT)

    @property
    def forbids_body(self) -> bool:
        return self in (HttpMethod.GET, HttpMethod.DELETE)


@dataclass(frozen=True)
class RequestDescriptor:
    """A fully formed request, ready to be sent once."""
    method: HttpMethod
    path: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict, hash=False, compare=False)
    envelope_key: Optional[str] = None
    query: QueryPairs = ()
    body: Optional[str] = None

    @property
    def query_string(self) -> str:
        return urlencode(self.query)

    @property
    def full_url(self) -> str:
        if not self.query:
            return self.url
        return f"{self.url}?{self.query_string}"

    def with_query(self, query: QueryPairs) -> RequestDescriptor:
        """Same request with the query replaced."""
        return dataclasses.replace(self, query=tuple(query))


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_format_value(item) for item in value)
    return str(value)


def normalize_query(query: Optional[QueryInput]) -> QueryPairs:
    """
    Flatten query parameters into ordered ``(key, value)`` string pairs.

    Order and duplicate keys are preserved; ``None`` values are dropped.
    """
    if query is None:
        return ()
    items = query.items() if isinstance(query, Mapping) else query
    pairs = []
    for item in items:
        try:
            key, value = item
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Query parameter {item!r} is not a key/value pair", cause=e)
        if value is None:
            continue
        pairs.append((str(key), _format_value(value)))
    return tuple(pairs)


def normalize_method(method: Union[str, HttpMethod]) -> HttpMethod:
    if isinstance(method, HttpMethod):
        return method
    try:
        return HttpMethod(str(method).upper())
    except ValueError:
        raise InvalidArgumentError(
            f"Unsupported HTTP method: {method!r}",
            details={"allowed": [m.value for m in HttpMethod]},
        )


class RequestBuilder:
    """
    Builds request descriptors for one shop.

    The builder owns no connection and performs no I/O; it only validates its
    input and serializes the body.
    """

    def __init__(self, config: ClientConfig):
        self.config = config

    def default_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
            ACCESS_TOKEN_HEADER: self.config.access_token,
        }

    def resolve_url(self, path: str) -> str:
        if not path or not path.strip():
            raise InvalidArgumentError("Request path must not be empty")
        path = path.strip()
        if "://" in path:
            raise InvalidArgumentError(
                f"Request path must be relative to the API root: {path!r}"
            )
        return self.config.base_url + path.lstrip("/")

    def build(
        self,
        path: str,
        method: Union[str, HttpMethod] = HttpMethod.GET,
        envelope_key: Optional[str] = None,
        query: Optional[QueryInput] = None,
        body: Optional[Union[BaseModel, Mapping[str, Any]]] = None,
    ) -> RequestDescriptor:
        """
        Build a request descriptor.

        Args:
            path: Path relative to the versioned API root, e.g. ``"themes.json"``
            method: HTTP verb
            envelope_key: Key wrapping the body and the response
            query: Query parameters, in order
            body: Entity or partial-update mapping for POST/PUT

        Returns:
            Immutable request descriptor

        Raises:
            InvalidArgumentError: If the combination of verb, body and key is invalid
        """
        verb = normalize_method(method)
        url = self.resolve_url(path)

        if verb.requires_body and body is None:
            raise InvalidArgumentError(f"{verb.value} {path} requires a body")
        if verb.forbids_body and body is not None:
            raise InvalidArgumentError(f"{verb.value} {path} must not carry a body")

        headers = self.default_headers()
        payload = None
        if body is not None:
            if not envelope_key:
                raise InvalidArgumentError(
                    f"{verb.value} {path} carries a body but no envelope key"
                )
            payload = codec.encode(body, envelope_key)
            headers["Content-Type"] = "application/json; charset=utf-8"

        return RequestDescriptor(
            method=verb,
            path=path.lstrip("/"),
            url=url,
            headers=headers,
            envelope_key=envelope_key,
            query=normalize_query(query),
            body=payload,
        )


__all__ = [
    "ACCESS_TOKEN_HEADER",
    "HttpMethod",
    "RequestDescriptor",
    "RequestBuilder",
    "normalize_query",
    "normalize_method",
]
