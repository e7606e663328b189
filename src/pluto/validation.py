"""Typed decoding of JSON request bodies.

Populates dataclass instances from a parsed JSON object, checking each
value against the field's annotation. Unlike query-string extraction
nothing is coerced from strings: a body that does not have the declared
shape is rejected.

Supported annotations: ``str``, ``int``, ``float``, ``bool``, ``bytes``
(from a list of byte values or a string), ``list[T]``, ``dict[str, T]``,
``T | None``, ``Any``, and nested dataclasses.
"""

from __future__ import annotations

import dataclasses
import json as json_module
import types
import typing
from typing import Any

from pluto.errors import BodyValidationError


def decode_body[T](cls: type[T], raw: bytes) -> T:
    """Parse *raw* as JSON and decode it into *cls*.

    Raises ``BodyValidationError`` on malformed JSON or a shape mismatch.
    """
    try:
        data = json_module.loads(raw or b"null")
    except (ValueError, UnicodeDecodeError) as exc:
        raise BodyValidationError(f"Body is not valid JSON: {exc}") from exc
    return decode_value(cls, data)


def decode_value(target: Any, value: Any, *, path: str = "body") -> Any:
    """Check *value* against *target* and build dataclasses where declared."""
    if target is Any:
        return value

    if isinstance(target, type) and dataclasses.is_dataclass(target):
        return _decode_dataclass(target, value, path)

    origin = typing.get_origin(target)
    if origin in (typing.Union, types.UnionType):
        args = typing.get_args(target)
        if value is None and type(None) in args:
            return None
        for arg in args:
            if arg is type(None):
                continue
            try:
                return decode_value(arg, value, path=path)
            except BodyValidationError:
                continue
        raise BodyValidationError(f"{path}: value does not match {target}", field=path)

    if origin is list:
        (item_type,) = typing.get_args(target) or (Any,)
        if not isinstance(value, list):
            raise BodyValidationError(f"{path}: expected a list", field=path)
        return [decode_value(item_type, item, path=f"{path}[{i}]") for i, item in enumerate(value)]

    if origin is dict:
        _, value_type = typing.get_args(target) or (str, Any)
        if not isinstance(value, dict):
            raise BodyValidationError(f"{path}: expected an object", field=path)
        return {k: decode_value(value_type, v, path=f"{path}.{k}") for k, v in value.items()}

    return _decode_scalar(target, value, path)


def _decode_dataclass(cls: type, value: Any, path: str) -> Any:
    if not isinstance(value, dict):
        raise BodyValidationError(f"{path}: expected an object", field=path)

    hints = typing.get_type_hints(cls)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        field_path = f"{path}.{f.name}" if path != "body" else f.name
        if f.name not in value:
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                if _is_optional(hints.get(f.name, Any)):
                    kwargs[f.name] = None
                    continue
                raise BodyValidationError(f"{field_path}: field is required", field=field_path)
            continue
        kwargs[f.name] = decode_value(hints.get(f.name, Any), value[f.name], path=field_path)
    return cls(**kwargs)


def _decode_scalar(target: Any, value: Any, path: str) -> Any:
    if target is bool:
        if isinstance(value, bool):
            return value
    elif target is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif target is float:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return float(value)
    elif target is str:
        if isinstance(value, str):
            return value
    elif target is bytes:
        if isinstance(value, str):
            return value.encode("utf-8")
        if isinstance(value, list) and all(isinstance(b, int) and 0 <= b < 256 for b in value):
            return bytes(value)
    elif target is type(None):
        if value is None:
            return None
    else:
        # Unknown annotation: accept the raw JSON value
        return value

    name = getattr(target, "__name__", str(target))
    raise BodyValidationError(f"{path}: expected {name}", field=path)


def _is_optional(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    if origin in (typing.Union, types.UnionType):
        return type(None) in typing.get_args(annotation)
    return False
