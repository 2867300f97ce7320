# PUBLIC_INTERFACE
"""
Canonical serialization of structured values.

Values are first reduced to a plain tree of None, bool, int, float, str, list
and str-keyed dict, then written as compact, key-sorted UTF-8 JSON. Decoding
goes the other way through a pydantic TypeAdapter for the requested
destination type, so the caller's type decides how the tree is rebuilt.
"""
from __future__ import annotations

import base64
import dataclasses
import datetime as dt
import enum
import json
import math
import uuid
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, is_typeddict

from pydantic import BaseModel, ConfigDict, PydanticUserError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .errors import DeserializationError, EmptyValueError, InvalidArgumentError, SerializationError

# Nesting limit for containers; pydantic-core's JSON parser stops at 200 levels.
MAX_DEPTH = 192

# Bytes are carried as URL-safe base64 strings; destinations typed as bytes decode them back.
_ADAPTER_CONFIG = ConfigDict(val_json_bytes="base64")


# PUBLIC_INTERFACE
def to_tree(value: Any) -> Any:
    """Reduce value to the generic JSON tree, raising SerializationError for unsupported types.

    Values nested more than MAX_DEPTH containers deep are rejected, so every
    encoded value can be decoded again.
    """
    return _to_tree(value, 0)


def _enter(depth: int) -> int:
    if depth >= MAX_DEPTH:
        raise SerializationError(f"value is nested more than {MAX_DEPTH} levels deep")
    return depth + 1


def _to_tree(value: Any, depth: int) -> Any:
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, enum.Enum):
        return _to_tree(value.value, depth)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"unsupported float value: {value!r}")
        return value
    if isinstance(value, (list, tuple)):
        inner = _enter(depth)
        return [_to_tree(item, inner) for item in value]
    if isinstance(value, Mapping):
        inner = _enter(depth)
        tree = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError(f"mapping keys must be str, got {type(key).__name__}")
            tree[key] = _to_tree(item, inner)
        return tree
    if isinstance(value, BaseModel):
        try:
            dumped = value.model_dump(mode="json")
        except PydanticSerializationError as err:
            raise SerializationError(str(err)) from err
        return _to_tree(dumped, depth)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        inner = _enter(depth)
        return {f.name: _to_tree(getattr(value, f.name), inner) for f in dataclasses.fields(value)}
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.urlsafe_b64encode(bytes(value)).decode("ascii")
    raise SerializationError(f"unsupported type: {type(value).__name__}")


# PUBLIC_INTERFACE
def encode(value: Any) -> bytes:
    """Serialize value to its canonical byte encoding."""
    try:
        tree = to_tree(value)
    except RecursionError as err:
        raise SerializationError("value is too deeply nested or self-referencing") from err
    data = json.dumps(
        tree,
        ensure_ascii=False,
        allow_nan=False,
        sort_keys=True,
        separators=(",", ":"),
    ).encode("utf-8")
    if not data:
        raise EmptyValueError()
    return data


def _type_has_config(into: Any) -> bool:
    try:
        return issubclass(into, BaseModel) or dataclasses.is_dataclass(into) or is_typeddict(into)
    except TypeError:
        return False


def _build_adapter(into: Any) -> TypeAdapter:
    if _type_has_config(into):
        return TypeAdapter(into)
    return TypeAdapter(into, config=_ADAPTER_CONFIG)


_cached_adapter = lru_cache(maxsize=256)(_build_adapter)


def _type_adapter(into: Any) -> TypeAdapter:
    try:
        hash(into)
    except TypeError:
        build = _build_adapter
    else:
        build = _cached_adapter
    try:
        return build(into)
    except PydanticUserError as err:
        raise InvalidArgumentError(f"unsupported destination type: {into!r}") from err


# PUBLIC_INTERFACE
def decode(data: bytes, into: Any) -> Any:
    """Deserialize canonical bytes into an instance of the destination type.

    Use typing.Any as destination to get the plain tree back.
    """
    if into is None:
        raise InvalidArgumentError("destination cannot be None")
    adapter = _type_adapter(into)
    try:
        # Strict: no string<->number or bool<->number coercion; int still widens to float.
        return adapter.validate_json(data, strict=True)
    except ValidationError as err:
        # Validation errors echo their input; keep decrypted content out of messages and tracebacks.
        details = "; ".join(
            f"{'.'.join(str(part) for part in e['loc']) or '<root>'}: {e['msg']}"
            for e in err.errors(include_url=False, include_input=False)
        )
        raise DeserializationError(f"failed to unmarshal value: {details}") from None
