"""Tests for record decoding, encoding and wire formats."""

from datetime import date, datetime
from typing import Optional

import pytest  # type: ignore[import-not-found]

from harvest_client.core.errors import DecodeError
from harvest_client.core.schema import (
    HarvestModel,
    decode,
    decode_enveloped,
    decode_enveloped_list,
    decode_list,
    decode_optionally_enveloped,
    encode,
    format_clock_time,
    format_date,
    format_report_date,
    parse_clock_time,
)


class Widget(HarvestModel):
    id: int
    name: str
    size: Optional[int] = None
    active: bool = True


class TestDecode:
    """Test decoding JSON objects into records."""

    def test_decode(self) -> None:
        """Test decoding a complete object."""
        widget = decode(Widget, {"id": 1, "name": "a", "size": 3, "active": False})

        assert widget == Widget(id=1, name="a", size=3, active=False)

    def test_null_and_absent_are_equivalent(self) -> None:
        """Test that a nullable field decodes the same when null or missing."""
        assert decode(Widget, {"id": 1, "name": "a", "size": None}) == decode(
            Widget, {"id": 1, "name": "a"}
        )

    def test_default_applied(self) -> None:
        """Test that absent optional fields take their default."""
        assert decode(Widget, {"id": 1, "name": "a"}).active is True

    def test_unknown_fields_ignored(self) -> None:
        """Test that extra keys in the response are dropped."""
        widget = decode(Widget, {"id": 1, "name": "a", "color": "red"})

        assert not hasattr(widget, "color")

    def test_missing_required_field(self) -> None:
        """Test that a missing required field names the field."""
        with pytest.raises(DecodeError) as exc_info:
            decode(Widget, {"id": 1})

        assert exc_info.value.field == "name"
        assert exc_info.value.expected == "str"
        assert exc_info.value.model == "Widget"

    def test_wrong_type(self) -> None:
        """Test that a mistyped field is a DecodeError."""
        with pytest.raises(DecodeError) as exc_info:
            decode(Widget, {"id": "not-a-number", "name": "a"})

        assert exc_info.value.field == "id"
        assert "Widget: field 'id' expected int" == str(exc_info.value)

    def test_not_an_object(self) -> None:
        """Test that a non-object response is rejected."""
        with pytest.raises(DecodeError, match="<root>"):
            decode(Widget, [1, 2])

    def test_records_are_frozen(self) -> None:
        """Test that decoded records are immutable."""
        widget = decode(Widget, {"id": 1, "name": "a"})

        with pytest.raises(Exception):
            widget.name = "b"  # type: ignore[misc]


class TestDecodeLists:
    """Test list and envelope decoding."""

    def test_decode_list(self) -> None:
        """Test decoding a bare array."""
        widgets = decode_list(Widget, [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])

        assert [w.id for w in widgets] == [1, 2]

    def test_empty_list(self) -> None:
        """Test that an empty array decodes to an empty list."""
        assert decode_enveloped_list(Widget, "widget", []) == []
        assert decode_list(Widget, []) == []

    def test_enveloped_list(self) -> None:
        """Test stripping per-element envelopes."""
        data = [{"widget": {"id": 1, "name": "a"}}, {"widget": {"id": 2, "name": "b"}}]

        assert [w.name for w in decode_enveloped_list(Widget, "widget", data)] == ["a", "b"]

    def test_bad_element_fails_whole_list(self) -> None:
        """Test that one bad element fails the whole decode."""
        data = [{"widget": {"id": 1, "name": "a"}}, {"widget": {"id": 2}}]

        with pytest.raises(DecodeError):
            decode_enveloped_list(Widget, "widget", data)

    def test_wrong_envelope(self) -> None:
        """Test that a missing envelope key is a DecodeError."""
        with pytest.raises(DecodeError, match="widget"):
            decode_enveloped(Widget, "widget", {"gadget": {"id": 1, "name": "a"}})

    def test_list_expected(self) -> None:
        """Test that an object where an array belongs is rejected."""
        with pytest.raises(DecodeError, match="array"):
            decode_enveloped_list(Widget, "widget", {"widget": {"id": 1, "name": "a"}})

    def test_optionally_enveloped(self) -> None:
        """Test that both wrapped and bare objects decode."""
        bare = {"id": 1, "name": "a"}

        assert decode_optionally_enveloped(Widget, "widget", bare) == Widget(id=1, name="a")
        assert decode_optionally_enveloped(Widget, "widget", {"widget": bare}) == Widget(
            id=1, name="a"
        )


class TestEncode:
    """Test encoding records as request bodies."""

    def test_envelope(self) -> None:
        """Test wrapping fields in an envelope."""
        assert encode(Widget(id=1, name="a"), "widget") == {
            "widget": {"id": 1, "name": "a", "active": True}
        }

    def test_none_omitted(self) -> None:
        """Test that unset nullable fields are left out."""
        assert "size" not in Widget(id=1, name="a").encode()

    def test_include(self) -> None:
        """Test restricting the encoded fields."""
        assert Widget(id=1, name="a", size=2).encode("widget", include=["name"]) == {
            "widget": {"name": "a"}
        }

    def test_round_trip(self) -> None:
        """Test that encoding then decoding yields an equal record."""
        widget = Widget(id=5, name="x", size=7, active=False)

        assert Widget.decode(widget.encode()) == widget


class TestWireFormats:
    """Test date and clock time formats."""

    def test_format_date(self) -> None:
        assert format_date(date(2017, 3, 5)) == "2017-03-05"

    def test_format_report_date(self) -> None:
        assert format_report_date(date(2017, 3, 5)) == "20170305"

    def test_format_clock_time(self) -> None:
        """Test 12-hour clock rendering."""
        assert format_clock_time(datetime(2017, 3, 5, 14, 5)) == "2:05 PM"
        assert format_clock_time(datetime(2017, 3, 5, 0, 30)) == "12:30 AM"
        assert format_clock_time(datetime(2017, 3, 5, 12, 0)) == "12:00 PM"
        assert format_clock_time(datetime(2017, 3, 5, 9, 41)) == "9:41 AM"

    def test_parse_clock_time(self) -> None:
        """Test parsing both server spellings of a clock time."""
        day = date(2017, 3, 5)

        assert parse_clock_time("2:05 PM", day) == datetime(2017, 3, 5, 14, 5)
        assert parse_clock_time("2:05pm", day) == datetime(2017, 3, 5, 14, 5)
        assert parse_clock_time("12:15 am", day) == datetime(2017, 3, 5, 0, 15)
        assert parse_clock_time("12:15 PM", day) == datetime(2017, 3, 5, 12, 15)

    @pytest.mark.parametrize("text", ["14:05", "13:00 PM", "2:75 PM", "noon"])
    def test_parse_clock_time_invalid(self, text: str) -> None:
        """Test that non 12-hour times are rejected."""
        with pytest.raises(ValueError):
            parse_clock_time(text, date(2017, 3, 5))
