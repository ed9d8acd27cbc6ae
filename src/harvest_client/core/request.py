"""HTTP request descriptors for Harvest endpoints.

Endpoint functions never talk to the network. They return a ``Call``: a
fully formed request description plus the strategy used to decode the
response body. ``harvest_client.core.transport`` executes calls.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar, Union
from urllib.parse import quote

from harvest_client.core.errors import DecodeError

T = TypeVar("T")

BASE_URL_TEMPLATE = "https://{account}.harvestapp.com"

JSON_MEDIA_TYPE = "application/json"

_TOKEN_PATTERN = re.compile(r"(access_token=)[^&]*")


@dataclass(frozen=True)
class RequestDescriptor:
    """Declarative description of one HTTP request.

    Attributes:
        method: HTTP method (GET, POST, PUT, DELETE)
        url: Absolute URL including the access token and query parameters
        headers: Request headers
        body: JSON text for write operations, None otherwise
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[str] = None

    def redacted_url(self) -> str:
        """URL with the access token value masked, for logging."""
        return _TOKEN_PATTERN.sub(r"\1***", self.url)

    def json(self) -> Any:
        """Decoded request body, or None when there is no body."""
        if self.body is None:
            return None
        return json.loads(self.body)


@dataclass(frozen=True)
class Call(Generic[T]):
    """A request descriptor paired with its response decoding strategy.

    A ``decoder`` of None marks an opaque endpoint: the response body is
    handed back as a string without decoding.
    """

    request: RequestDescriptor
    decoder: Optional[Callable[[Any], T]] = None

    @property
    def is_opaque(self) -> bool:
        return self.decoder is None

    def parse(self, text: str) -> Union[T, str]:
        """Apply the decoding strategy to a response body.

        Args:
            text: Raw response body

        Returns:
            Decoded record(s), or the body itself for opaque calls

        Raises:
            DecodeError: If the body is not JSON or does not match the shape
        """
        if self.decoder is None:
            return text
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError("<body>", f"JSON document ({e.msg})")
        return self.decoder(data)


def encode_query(params: Optional[Mapping[str, Any]]) -> str:
    """Serialize query parameters as ``&key=value`` pairs.

    Keys are emitted in lexicographic order and every value is
    percent-encoded, so ``{"status": "partial", "client": "23445"}``
    becomes ``&client=23445&status=partial``.

    Args:
        params: Mapping of parameter names to values (None or empty allowed)

    Returns:
        Query string suffix, empty when there are no parameters
    """
    if not params:
        return ""
    return "".join(f"&{key}={quote(str(params[key]), safe='')}" for key in sorted(params))


def build_url(
    account: str,
    token: str,
    *segments: Union[str, int],
    params: Optional[Mapping[str, Any]] = None,
) -> str:
    """Build an authenticated endpoint URL.

    Example:
        >>> build_url("acme", "tok", "projects", 12, "entries", params={"to": "20170305"})
        'https://acme.harvestapp.com/projects/12/entries?access_token=tok&to=20170305'
    """
    path = "/".join(str(segment) for segment in segments)
    base = BASE_URL_TEMPLATE.format(account=account)
    return f"{base}/{path}?access_token={quote(token, safe='')}{encode_query(params)}"


def build_headers(has_body: bool) -> dict[str, str]:
    """Headers sent with every call; Content-Type only with a JSON body."""
    headers = {"Accept": JSON_MEDIA_TYPE}
    if has_body:
        headers["Content-Type"] = JSON_MEDIA_TYPE
    return headers


def make_call(
    method: str,
    url: str,
    body: Optional[Mapping[str, Any]] = None,
    decoder: Optional[Callable[[Any], T]] = None,
) -> Call[T]:
    """Assemble a Call from a URL, an optional JSON body and a decoder."""
    text = json.dumps(body) if body is not None else None
    request = RequestDescriptor(
        method=method,
        url=url,
        headers=build_headers(text is not None),
        body=text,
    )
    return Call(request=request, decoder=decoder)


def get(url: str, decoder: Optional[Callable[[Any], T]] = None) -> Call[T]:
    return make_call("GET", url, decoder=decoder)


def post(
    url: str,
    body: Optional[Mapping[str, Any]] = None,
    decoder: Optional[Callable[[Any], T]] = None,
) -> Call[T]:
    return make_call("POST", url, body, decoder)


def put(
    url: str,
    body: Optional[Mapping[str, Any]] = None,
    decoder: Optional[Callable[[Any], T]] = None,
) -> Call[T]:
    return make_call("PUT", url, body, decoder)


def delete(url: str) -> Call[str]:
    return make_call("DELETE", url)
