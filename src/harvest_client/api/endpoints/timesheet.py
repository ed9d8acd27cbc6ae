"""Timesheet endpoints (``/daily``).

Every operation can act on behalf of another user: passing ``user_id``
appends ``of_user={id}`` to the request. Timesheet responses are bare
objects; request bodies are wrapped in a ``day_entry`` envelope.
"""

from functools import partial
from typing import Optional

from harvest_client.api.models import DailyTimesheet, DayEntry, SimpleDayEntry
from harvest_client.core import request
from harvest_client.core.request import Call, build_url
from harvest_client.core.schema import decode, decode_optionally_enveloped

ENVELOPE = "day_entry"

_decode_entry = partial(decode_optionally_enveloped, DayEntry, ENVELOPE)
_decode_timesheet = partial(decode, DailyTimesheet)


def _of_user(user_id: Optional[int]) -> dict[str, str]:
    return {"of_user": str(user_id)} if user_id is not None else {}


def daily(account: str, token: str, user_id: Optional[int] = None) -> Call[DailyTimesheet]:
    """Today's entries plus the projects and tasks the user can log to."""
    url = build_url(account, token, "daily", params=_of_user(user_id))
    return request.get(url, _decode_timesheet)


def daily_for(
    account: str, token: str, day_of_year: int, year: int, user_id: Optional[int] = None
) -> Call[DailyTimesheet]:
    """Timesheet for an arbitrary day, addressed by day of year (1-366)."""
    url = build_url(account, token, "daily", day_of_year, year, params=_of_user(user_id))
    return request.get(url, _decode_timesheet)


def get_entry(
    account: str, token: str, entry_id: int, user_id: Optional[int] = None
) -> Call[DayEntry]:
    url = build_url(account, token, "daily", "show", entry_id, params=_of_user(user_id))
    return request.get(url, _decode_entry)


def create_entry(
    account: str, token: str, entry: SimpleDayEntry, user_id: Optional[int] = None
) -> Call[DayEntry]:
    """Log a new entry. Without ``hours`` the server starts a timer on it."""
    url = build_url(account, token, "daily", "add", params=_of_user(user_id))
    return request.post(url, entry.encode(ENVELOPE), _decode_entry)


def delete_entry(
    account: str, token: str, entry_id: int, user_id: Optional[int] = None
) -> Call[str]:
    url = build_url(account, token, "daily", entry_id, params=_of_user(user_id))
    return request.delete(url)


def toggle_timer(
    account: str, token: str, entry_id: int, user_id: Optional[int] = None
) -> Call[DayEntry]:
    """Start the timer on an entry, or stop it if it is running."""
    url = build_url(account, token, "daily", "timer", entry_id, params=_of_user(user_id))
    return request.get(url, _decode_entry)


def update_entry(
    account: str,
    token: str,
    entry_id: int,
    entry: SimpleDayEntry,
    user_id: Optional[int] = None,
) -> Call[DayEntry]:
    url = build_url(account, token, "daily", "update", entry_id, params=_of_user(user_id))
    return request.post(url, entry.encode(ENVELOPE), _decode_entry)
