"""Records of the massdns JSON output format."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


def _mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"expected an object, got {type(data).__name__}")
    return data


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string")
    return value


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field {key!r} must be an integer")
    return value


def _records(data: Mapping[str, Any], key: str) -> tuple[JSONRecord, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TypeError(f"field {key!r} must be a list")
    return tuple(JSONRecord.from_dict(item) for item in value)


@dataclass(frozen=True)
class JSONRecord:
    """A resource record of a massdns answer."""

    ttl: int = 0
    type: str = ""
    class_: str = ""
    name: str = ""
    data: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JSONRecord:
        """Build a record from its decoded JSON object."""
        data = _mapping(data)
        return cls(
            ttl=_int(data, "ttl"),
            type=_str(data, "type"),
            class_=_str(data, "class"),
            name=_str(data, "name"),
            data=_str(data, "data"),
        )


@dataclass(frozen=True)
class JSONResponseData:
    """The record sections of a massdns response."""

    answers: tuple[JSONRecord, ...] = ()
    authorities: tuple[JSONRecord, ...] = ()
    additionals: tuple[JSONRecord, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JSONResponseData:
        """Build the sections from their decoded JSON object."""
        data = _mapping(data)
        return cls(
            answers=_records(data, "answers"),
            authorities=_records(data, "authorities"),
            additionals=_records(data, "additionals"),
        )


@dataclass(frozen=True)
class JSONResponse:
    """A response line of a massdns JSON output file."""

    name: str = ""
    type: str = ""
    class_: str = ""
    status: str = ""
    data: JSONResponseData = JSONResponseData()
    resolver: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JSONResponse:
        """Build a response from its decoded JSON object."""
        data = _mapping(data)
        section = data.get("data")
        return cls(
            name=_str(data, "name"),
            type=_str(data, "type"),
            class_=_str(data, "class"),
            status=_str(data, "status"),
            data=JSONResponseData() if section is None else JSONResponseData.from_dict(section),
            resolver=_str(data, "resolver"),
        )