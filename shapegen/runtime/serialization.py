"""
JSON payload support for generated dataclasses.

Generated records for JSON-based protocols are decorated with
`serializable` and/or `deserializable` and declare their fields with
`wire`, which records the member's name on the wire and encoding hints in the
dataclass field metadata. `to_json` and `from_json` walk those declarations.
"""

import base64
import dataclasses
import json
import types
import typing
from typing import Any, Iterable, Mapping, Optional, Type, TypeVar

T = TypeVar("T")

WIRE_NAME = "wire_name"
BLOB = "blob"
SKIP_NONE = "skip_none"


class DeserializationError(Exception):
    """Raised when a payload does not match the expected shape."""

    pass


def wire(
    name: str,
    *,
    default: Any = dataclasses.MISSING,
    blob: bool = False,
    skip_none: bool = False,
) -> Any:
    """Declare a dataclass field carried on the wire as `name`.

    Args:
        name: Member name in the payload.
        default: Field default; omit for required members.
        blob: Encode the value as base64 text.
        skip_none: Leave the member out of the payload when it is None.
    """
    metadata = {WIRE_NAME: name, BLOB: blob, SKIP_NONE: skip_none}
    if default is dataclasses.MISSING:
        return dataclasses.field(metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


def serializable(cls: Type[T]) -> Type[T]:
    """Mark a generated record as sendable."""
    cls.__wire_serializable__ = True
    return cls


def deserializable(cls: Type[T]) -> Type[T]:
    """Mark a generated record as readable from a response."""
    cls.__wire_deserializable__ = True
    return cls


def is_serializable(cls: type) -> bool:
    return bool(getattr(cls, "__wire_serializable__", False))


def is_deserializable(cls: type) -> bool:
    return bool(getattr(cls, "__wire_deserializable__", False))


def format_scalar(value: Any) -> str:
    """Text form of a scalar for query strings, headers and XML."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_wire(value: Any) -> Any:
    """Convert generated records (and containers of them) to JSON data."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        if not is_serializable(type(value)):
            raise TypeError(f"{type(value).__name__} is not serializable")

        data = {}
        for field in dataclasses.fields(value):
            member = getattr(value, field.name)
            if member is None and field.metadata.get(SKIP_NONE, False):
                continue
            name = field.metadata.get(WIRE_NAME, field.name)
            if member is not None and field.metadata.get(BLOB, False):
                data[name] = format_scalar(bytes(member))
            else:
                data[name] = to_wire(member)
        return data

    if isinstance(value, (list, tuple)):
        return [to_wire(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): to_wire(item) for key, item in value.items()}
    if isinstance(value, (bytes, bytearray)):
        return format_scalar(value)
    return value


def to_json(value: Any, exclude: Iterable[str] = ()) -> bytes:
    """Serialize a record to a JSON body, leaving out the `exclude` wire names."""
    data = to_wire(value)
    if isinstance(data, dict):
        for name in exclude:
            data.pop(name, None)
    return json.dumps(data).encode("utf-8")


def from_json(
    cls: Type[T],
    body: Optional[bytes],
    extra: Optional[Mapping[str, Any]] = None,
) -> T:
    """Parse a JSON body into `cls`.

    Args:
        cls: Generated record type.
        body: Raw response body; empty bodies parse as ``{}``.
        extra: Wire values taken from outside the body (headers, status code).
    """
    data = parse_json_body(body)

    if extra:
        data = dict(data)
        data.update({name: value for name, value in extra.items() if value is not None})
    return from_wire(cls, data)


def parse_json_body(body: Optional[bytes]) -> Any:
    """Decode a JSON body; empty bodies decode as ``{}``."""
    try:
        return json.loads(body) if body and body.strip() else {}
    except ValueError as e:
        raise DeserializationError(f"Invalid JSON body: {e}") from e


def from_wire(tp: Any, data: Any) -> Any:
    """Convert JSON data into an instance of the annotated type `tp`."""
    if data is None:
        return None

    origin = typing.get_origin(tp)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        return from_wire(args[0], data)
    if origin is list:
        (element,) = typing.get_args(tp)
        return [from_wire(element, item) for item in data]
    if origin is dict:
        key_type, value_type = typing.get_args(tp)
        return {
            from_wire(key_type, key): from_wire(value_type, value)
            for key, value in data.items()
        }

    if dataclasses.is_dataclass(tp):
        return _record_from_wire(tp, data)
    if tp is bytes:
        return base64.b64decode(data) if isinstance(data, str) else bytes(data)
    if tp is bool:
        return data.lower() == "true" if isinstance(data, str) else bool(data)
    if tp is int:
        return int(data)
    if tp is float:
        return float(data)
    if tp is str:
        return str(data)
    return data


def _record_from_wire(cls: type, data: Any) -> Any:
    if not is_deserializable(cls):
        raise TypeError(f"{cls.__name__} is not deserializable")
    if not isinstance(data, Mapping):
        raise DeserializationError(
            f"Expected an object for {cls.__name__}, got {type(data).__name__}"
        )

    hints = typing.get_type_hints(cls)
    kwargs = {}
    for field in dataclasses.fields(cls):
        name = field.metadata.get(WIRE_NAME, field.name)
        if data.get(name) is not None:
            kwargs[field.name] = from_wire(hints[field.name], data[name])
        elif (
            field.default is dataclasses.MISSING
            and field.default_factory is dataclasses.MISSING
        ):
            raise DeserializationError(
                f"Missing required member '{name}' for {cls.__name__}"
            )
    return cls(**kwargs)
