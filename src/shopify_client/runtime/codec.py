"""
Envelope codec for the Shopify Admin REST API.

Every resource travels wrapped in a named envelope: ``{"theme": {...}}`` for a
single record, ``{"themes": [...]}`` for a collection. This module wraps
outgoing bodies and unwraps incoming ones, validating the payload into typed
models with pydantic.
"""

from __future__ import annotations
import json
from datetime import date, datetime
from decimal import Decimal
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Union, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import InvalidArgumentError, ProtocolMismatchError


def _strip_none(value: Any) -> Any:
    """Drop ``None`` values from mappings, recursively."""
    if isinstance(value, Mapping):
        return {str(k): _strip_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_strip_none(item) for item in value]
    if isinstance(value, BaseModel):
        return _strip_none(value.model_dump(mode="json", by_alias=True, exclude_none=True))
    return value


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_payload(entity: Union[BaseModel, Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Convert an entity or partial-update mapping to a JSON-ready dictionary.

    Fields without a value are omitted rather than sent as ``null``.
    """
    if isinstance(entity, BaseModel):
        return _strip_none(entity)
    if isinstance(entity, Mapping):
        return _strip_none(entity)
    raise InvalidArgumentError(
        f"Cannot encode body of type {type(entity).__name__}; expected a model or mapping"
    )


def encode(entity: Union[BaseModel, Mapping[str, Any]], envelope_key: str) -> str:
    """
    Wrap an entity in its envelope and serialize it.

    Args:
        entity: Model instance or partial-update mapping
        envelope_key: Envelope key, e.g. ``"theme"``

    Returns:
        UTF-8 JSON text ``{"<envelope_key>": {...}}``

    Raises:
        InvalidArgumentError: If the key is empty or the entity is not encodable
    """
    if not envelope_key:
        raise InvalidArgumentError("An envelope key is required to encode a body")
    return json.dumps({envelope_key: to_payload(entity)}, default=_json_default, ensure_ascii=False)


@lru_cache(maxsize=128)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _is_list_target(target: Any) -> bool:
    return target is list or get_origin(target) in (list, List)


def decode(raw: Union[str, bytes, None], envelope_key: Optional[str], target: Any = None) -> Any:
    """
    Unwrap a response envelope and validate its content.

    Args:
        raw: Response body
        envelope_key: Envelope key to extract, or None for unwrapped bodies
        target: Type to validate into (model class, ``List[Model]``, ``int``...);
            None returns nothing

    Returns:
        Validated value, ``None`` for an empty body (``[]`` for list targets)

    Raises:
        ProtocolMismatchError: If the body is not UTF-8 JSON, lacks the envelope key,
            or does not match ``target``
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProtocolMismatchError(
                "Response body is not valid UTF-8", details={"position": e.start}, cause=e
            )

    if raw is None or not raw.strip():
        return [] if _is_list_target(target) else None

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ProtocolMismatchError(
            "Response body is not valid JSON", details={"body": raw[:200]}, cause=e
        )

    if target is None:
        return None

    if envelope_key is not None:
        if isinstance(data, dict):
            if envelope_key not in data:
                raise ProtocolMismatchError(
                    f"Response is missing the '{envelope_key}' envelope",
                    details={"keys": sorted(data.keys())},
                )
            data = data[envelope_key]
        elif not (isinstance(data, list) and _is_list_target(target)):
            raise ProtocolMismatchError(
                f"Expected a JSON object holding '{envelope_key}', got {type(data).__name__}"
            )

    try:
        return _adapter(target).validate_python(data)
    except ValidationError as e:
        raise ProtocolMismatchError(
            f"Response '{envelope_key}' does not match the expected shape",
            details={"errors": e.errors(include_url=False)[:5]},
            cause=e,
        )


__all__ = ["encode", "decode", "to_payload"]
