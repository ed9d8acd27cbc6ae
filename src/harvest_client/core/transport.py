"""Execute request descriptors with httpx."""

import logging
from typing import Optional, TypeVar, Union

import httpx

from harvest_client import __version__
from harvest_client.core.config import ConfigManager
from harvest_client.core.request import Call

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"harvest-client/{__version__}"


def create_client(
    config: Optional[ConfigManager] = None, **kwargs: object
) -> httpx.AsyncClient:
    """Create an async HTTP client honouring the ``http`` config section.

    Args:
        config: Configuration manager (defaults are used when None)
        **kwargs: Extra keyword arguments for httpx.AsyncClient (e.g. transport)

    Returns:
        Configured httpx.AsyncClient; the caller owns and closes it
    """
    timeout = DEFAULT_TIMEOUT
    user_agent = DEFAULT_USER_AGENT
    if config is not None:
        timeout = float(config.get("http.timeout", DEFAULT_TIMEOUT))
        user_agent = config.get("http.user_agent", DEFAULT_USER_AGENT)
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": user_agent},
        **kwargs,  # type: ignore[arg-type]
    )


async def send(call: Call[T], client: httpx.AsyncClient) -> Union[T, str]:
    """Send one call and decode its response.

    Args:
        call: Request descriptor and decoding strategy
        client: Injected HTTP transport

    Returns:
        Decoded record(s), or the raw body for opaque calls

    Raises:
        httpx.HTTPError: Transport failures and non-2xx statuses, unmodified
        DecodeError: If the body does not match the expected shape
    """
    request = call.request
    logger.debug(f"{request.method} {request.redacted_url()}")

    response = await client.request(
        request.method,
        request.url,
        headers=dict(request.headers),
        content=request.body,
    )
    logger.debug(f"{request.method} {request.redacted_url()} -> {response.status_code}")
    response.raise_for_status()

    return call.parse(response.text)
