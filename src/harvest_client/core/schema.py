"""JSON decoding and encoding for Harvest resource records.

Every record is a frozen pydantic model; its field declarations are the
per-resource field table:

- required fields have no default; absence or a wrong type is a DecodeError
- validation is strict: "7" is not an int and "yes" is not a bool, only
  ISO date and timestamp strings are converted
- nullable fields are ``Optional[...] = None``; null and absence both give None
- optional fields with a default fall back to that default when absent

List responses wrap each element in a single-key envelope named after the
resource (``[{"client": {...}}, ...]``); the ``*_enveloped*`` helpers strip it.
"""

import json
import re
from datetime import date, datetime
from typing import Any, Iterable, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError  # type: ignore[import-untyped]

from harvest_client.core.errors import DecodeError

M = TypeVar("M", bound="HarvestModel")

_CLOCK_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp])\.?\s*[Mm]\.?\s*$")


class HarvestModel(BaseModel):
    """Base class for all Harvest records."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def decode(cls: type[M], data: Any) -> M:
        return decode(cls, data)

    @classmethod
    def decode_list(cls: type[M], data: Any) -> list[M]:
        return decode_list(cls, data)

    def encode(
        self, envelope: Optional[str] = None, include: Optional[Iterable[str]] = None
    ) -> dict[str, Any]:
        return encode(self, envelope, include)


def decode(model: type[M], data: Any) -> M:
    """Decode one JSON object into a record.

    Raises:
        DecodeError: Naming the first field that is missing or mistyped
    """
    if not isinstance(data, dict):
        raise DecodeError("<root>", "object", model.__name__)
    try:
        return model.model_validate_json(json.dumps(data), strict=True)
    except ValidationError as e:
        raise DecodeError.from_validation_error(model, e)


def decode_list(model: type[M], data: Any) -> list[M]:
    """Decode a JSON array of bare objects; any bad element fails the call."""
    if not isinstance(data, list):
        raise DecodeError("<root>", "array", model.__name__)
    return [decode(model, item) for item in data]


def unwrap(envelope: str, data: Any) -> Any:
    """Return the object inside a single-key envelope.

    Raises:
        DecodeError: If data is not an object carrying the envelope key
    """
    if not isinstance(data, dict) or envelope not in data:
        raise DecodeError(envelope, "enveloped object")
    return data[envelope]


def decode_enveloped(model: type[M], envelope: str, data: Any) -> M:
    return decode(model, unwrap(envelope, data))


def decode_enveloped_list(model: type[M], envelope: str, data: Any) -> list[M]:
    """Decode ``[{envelope: {...}}, ...]`` into a flat list of records."""
    if not isinstance(data, list):
        raise DecodeError("<root>", "array", model.__name__)
    return [decode_enveloped(model, envelope, item) for item in data]


def decode_optionally_enveloped(model: type[M], envelope: str, data: Any) -> M:
    """Decode an object that may or may not be wrapped in its envelope."""
    if isinstance(data, dict) and set(data) == {envelope}:
        data = data[envelope]
    return decode(model, data)


def encode(
    record: BaseModel,
    envelope: Optional[str] = None,
    include: Optional[Iterable[str]] = None,
) -> dict[str, Any]:
    """Encode a record as a JSON-compatible request body.

    Fields that are None locally are omitted rather than sent as null.

    Args:
        record: Record to encode
        envelope: Top-level key to wrap the fields in (e.g. "client")
        include: Restrict the output to these field names

    Returns:
        JSON-compatible dictionary
    """
    fields = record.model_dump(
        mode="json",
        exclude_none=True,
        include=set(include) if include is not None else None,
    )
    if envelope is None:
        return fields
    return {envelope: fields}


def format_clock_time(value: datetime) -> str:
    """Render the time-of-day of a timestamp as ``h:mm a``.

    Locale independent: 14:05 renders as ``2:05 PM``, 00:30 as ``12:30 AM``.
    """
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def parse_clock_time(text: str, day: date) -> datetime:
    """Parse an ``h:mm a`` clock time (``2:05 PM``, ``2:05pm``) on a given day.

    Raises:
        ValueError: If the text is not a 12-hour clock time
    """
    match = _CLOCK_PATTERN.match(text)
    if not match:
        raise ValueError(f"Invalid clock time: {text!r}")
    hour, minute, meridiem = int(match.group(1)), int(match.group(2)), match.group(3).upper()
    if not 1 <= hour <= 12 or minute > 59:
        raise ValueError(f"Invalid clock time: {text!r}")
    hour = hour % 12 + (12 if meridiem == "P" else 0)
    return datetime(day.year, day.month, day.day, hour, minute)


def format_date(value: date) -> str:
    """Render a calendar date as ``yyyy-MM-dd``."""
    return value.strftime("%Y-%m-%d")


def format_report_date(value: date) -> str:
    """Render a calendar date as ``yyyyMMdd`` (report range parameters)."""
    return value.strftime("%Y%m%d")
