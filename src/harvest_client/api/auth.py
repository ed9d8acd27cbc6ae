"""OAuth implicit-grant helpers.

Harvest redirects back to the application with the access token in the URL
fragment (``#access_token=...&token_type=bearer``). These helpers build the
authorization URL and read the token out of the returned fragment.
"""

import logging
from urllib.parse import quote, urlsplit

from harvest_client.core.errors import TokenExtractionError
from harvest_client.core.request import BASE_URL_TEMPLATE

logger = logging.getLogger(__name__)


def auth_url(account: str, client_id: str, redirect_uri: str) -> str:
    """Build the URL that asks the user to authorize this client.

    Only the redirect URI is percent-encoded.

    Example:
        >>> auth_url("acme", "client123", "https://app.example.com/cb")
        'https://acme.harvestapp.com/oauth2/authorize?response_type=token&immediate=true&approval_prompt=auto&client_id=client123&redirect_uri=https%3A%2F%2Fapp.example.com%2Fcb'
    """
    base = BASE_URL_TEMPLATE.format(account=account)
    return (
        f"{base}/oauth2/authorize"
        f"?response_type=token&immediate=true&approval_prompt=auto"
        f"&client_id={client_id}"
        f"&redirect_uri={quote(redirect_uri, safe='')}"
    )


def parse_params(fragment: str) -> list[tuple[str, str]]:
    """Split a ``#key=value&key=value`` fragment into pairs.

    The first character is dropped as the leading delimiter. A segment that
    does not split into exactly two parts on ``=`` yields ``("", "")`` and
    parsing carries on with the remaining segments.

    Args:
        fragment: URL fragment including its leading ``#``

    Returns:
        List of (key, value) pairs in fragment order
    """
    pairs = []
    for segment in fragment[1:].split("&"):
        parts = segment.split("=")
        if len(parts) == 2:
            pairs.append((parts[0], parts[1]))
        else:
            logger.debug(f"Ignoring malformed fragment segment: {segment!r}")
            pairs.append(("", ""))
    return pairs


def extract_access_token(fragment: str, authentication_url: str) -> str:
    """Return the access token carried by a redirect fragment.

    Args:
        fragment: Fragment returned after authorization (``#access_token=...``)
        authentication_url: URL to send the user back to on failure

    Returns:
        The access token

    Raises:
        TokenExtractionError: If the fragment has no ``access_token`` key
    """
    for key, value in parse_params(fragment):
        if key == "access_token":
            return value
    raise TokenExtractionError(authentication_url)


def access_token_from_redirect(url: str, authentication_url: str) -> str:
    """Extract the access token from a full redirect URL or a bare fragment."""
    if url.startswith("#"):
        return extract_access_token(url, authentication_url)
    fragment = urlsplit(url).fragment
    return extract_access_token(f"#{fragment}", authentication_url)
