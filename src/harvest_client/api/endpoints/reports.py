"""Time entry reports.

Reports cover a date range (``from``/``to`` as ``yyyyMMdd``) and return
``[{"day_entry": {...}}, ...]``.
"""

from datetime import date
from functools import partial
from typing import Optional

from harvest_client.api.filters import ProjectEntryFilter, UserEntryFilter
from harvest_client.api.models import DayEntry
from harvest_client.core import request
from harvest_client.core.request import Call, build_url
from harvest_client.core.schema import decode_enveloped_list, format_report_date

_decode_entries = partial(decode_enveloped_list, DayEntry, "day_entry")


def _range(start: date, end: date) -> dict[str, str]:
    if end < start:
        raise ValueError("end must not be before start")
    return {"from": format_report_date(start), "to": format_report_date(end)}


def entries_for_user(
    account: str,
    token: str,
    user_id: int,
    start: date,
    end: date,
    filters: Optional[UserEntryFilter] = None,
) -> Call[list[DayEntry]]:
    """Entries logged by one user between two dates (inclusive).

    Raises:
        ValueError: If end is before start
    """
    params = _range(start, end)
    if filters:
        params.update(filters.to_params())
    url = build_url(account, token, "people", user_id, "entries", params=params)
    return request.get(url, _decode_entries)


def entries_for_project(
    account: str,
    token: str,
    project_id: int,
    start: date,
    end: date,
    filters: Optional[ProjectEntryFilter] = None,
) -> Call[list[DayEntry]]:
    """Entries logged to one project between two dates (inclusive).

    Raises:
        ValueError: If end is before start
    """
    params = _range(start, end)
    if filters:
        params.update(filters.to_params())
    url = build_url(account, token, "projects", project_id, "entries", params=params)
    return request.get(url, _decode_entries)
