"""Tests for request descriptors and URL building."""

import pytest  # type: ignore[import-not-found]

from harvest_client.core import request
from harvest_client.core.errors import DecodeError
from harvest_client.core.request import (
    Call,
    RequestDescriptor,
    build_headers,
    build_url,
    encode_query,
    make_call,
)


class TestEncodeQuery:
    """Test query string encoding."""

    def test_empty(self) -> None:
        """Test that no parameters give an empty suffix."""
        assert encode_query(None) == ""
        assert encode_query({}) == ""

    def test_keys_sorted(self) -> None:
        """Test that keys are emitted in lexicographic order."""
        params = {"status": "partial", "client": "23445"}

        assert encode_query(params) == "&client=23445&status=partial"

    def test_values_percent_encoded(self) -> None:
        """Test that reserved characters in values are escaped."""
        params = {"updated_since": "2017-03-05 14:05", "q": "a&b=c"}

        assert encode_query(params) == "&q=a%26b%3Dc&updated_since=2017-03-05%2014%3A05"

    def test_non_string_values(self) -> None:
        """Test that values are stringified."""
        assert encode_query({"page": 2}) == "&page=2"


class TestBuildUrl:
    """Test endpoint URL construction."""

    def test_token_always_first(self) -> None:
        """Test that the access token leads the query string."""
        url = build_url("acme", "tok", "projects", params={"client": "23445"})

        assert url == "https://acme.harvestapp.com/projects?access_token=tok&client=23445"

    def test_segments_joined(self) -> None:
        """Test that int and str segments form the path."""
        url = build_url("acme", "tok", "projects", 12, "user_assignments", 7)

        assert url == "https://acme.harvestapp.com/projects/12/user_assignments/7?access_token=tok"

    def test_token_escaped(self) -> None:
        """Test that tokens with reserved characters are escaped."""
        url = build_url("acme", "a+b/c", "daily")

        assert url.endswith("?access_token=a%2Bb%2Fc")


class TestRequestDescriptor:
    """Test request descriptors."""

    def test_headers_without_body(self) -> None:
        """Test that only Accept is sent without a body."""
        assert build_headers(False) == {"Accept": "application/json"}

    def test_headers_with_body(self) -> None:
        """Test that Content-Type is added for JSON bodies."""
        assert build_headers(True) == {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def test_make_call_serializes_body(self) -> None:
        """Test that the body is stored as JSON text."""
        call = make_call("POST", "https://acme.harvestapp.com/x", {"task": {"id": 3}})

        assert call.request.method == "POST"
        assert call.request.body == '{"task": {"id": 3}}'
        assert call.request.json() == {"task": {"id": 3}}
        assert call.request.headers["Content-Type"] == "application/json"

    def test_no_body(self) -> None:
        """Test a request without a body."""
        call = request.delete("https://acme.harvestapp.com/x")

        assert call.request.method == "DELETE"
        assert call.request.body is None
        assert call.request.json() is None
        assert "Content-Type" not in call.request.headers

    def test_redacted_url(self) -> None:
        """Test that the access token is masked for logging."""
        descriptor = RequestDescriptor(
            method="GET", url="https://acme.harvestapp.com/daily?access_token=secret&of_user=3"
        )

        assert descriptor.redacted_url() == (
            "https://acme.harvestapp.com/daily?access_token=***&of_user=3"
        )

    def test_descriptor_is_frozen(self) -> None:
        """Test that descriptors cannot be mutated."""
        descriptor = RequestDescriptor(method="GET", url="https://acme.harvestapp.com/")

        with pytest.raises(AttributeError):
            descriptor.method = "POST"  # type: ignore[misc]


class TestCall:
    """Test response decoding strategies."""

    def test_opaque_call_returns_body(self) -> None:
        """Test that opaque calls hand back the raw body."""
        call = request.post("https://acme.harvestapp.com/clients", {"client": {"name": "x"}})

        assert call.is_opaque
        assert call.parse("Created") == "Created"

    def test_decoder_applied(self) -> None:
        """Test that decoding calls receive parsed JSON."""
        call: Call[int] = request.get("https://acme.harvestapp.com/x", lambda data: data["n"])

        assert not call.is_opaque
        assert call.parse('{"n": 4}') == 4

    def test_invalid_json_raises_decode_error(self) -> None:
        """Test that a non-JSON body is a DecodeError."""
        call: Call[object] = request.get("https://acme.harvestapp.com/x", lambda data: data)

        with pytest.raises(DecodeError, match="<body>"):
            call.parse("<html>")
