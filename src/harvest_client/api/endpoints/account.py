"""Account identity endpoint."""

from functools import partial

from harvest_client.api.models import WhoAmI
from harvest_client.core import request
from harvest_client.core.request import Call, build_url
from harvest_client.core.schema import decode


def who_am_i(account: str, token: str) -> Call[WhoAmI]:
    """Company and user behind the access token.

    Example:
        >>> call = who_am_i("acme", "tok")
        >>> call.request.url
        'https://acme.harvestapp.com/account/who_am_i?access_token=tok'
    """
    url = build_url(account, token, "account", "who_am_i")
    return request.get(url, partial(decode, WhoAmI))
