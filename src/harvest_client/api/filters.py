"""Optional query filters recognized by Harvest list endpoints.

Each filtered endpoint takes one of these small records instead of a free
form mapping; ``to_params()`` renders the set fields as query parameters.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from harvest_client.core.schema import format_report_date

INVOICE_STATUSES = ("open", "partial", "draft", "paid", "unpaid", "pastdue")


def format_timestamp(value: datetime) -> str:
    """Render an ``updated_since`` timestamp (``YYYY-MM-DD HH:MM``)."""
    return value.strftime("%Y-%m-%d %H:%M")


def yes_no(value: bool) -> str:
    return "yes" if value else "no"


@dataclass(frozen=True)
class UpdatedSinceFilter:
    """Only return records changed after a point in time."""

    updated_since: Optional[datetime] = None

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.updated_since is not None:
            params["updated_since"] = format_timestamp(self.updated_since)
        return params


@dataclass(frozen=True)
class ProjectFilter(UpdatedSinceFilter):
    """Filters for the project listing.

    Attributes:
        client: Only projects belonging to this client id
        updated_since: Only projects changed after this timestamp
    """

    client: Optional[int] = None

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.client is not None:
            params["client"] = str(self.client)
        return params


@dataclass(frozen=True)
class InvoiceFilter(UpdatedSinceFilter):
    """Filters for the invoice listing.

    Attributes:
        page: Result page (the API returns 50 invoices per page)
        start: Issued on or after this date (sent as ``from``)
        end: Issued on or before this date (sent as ``to``)
        status: One of open, partial, draft, paid, unpaid, pastdue
        client: Only invoices for this client id
        updated_since: Only invoices changed after this timestamp
    """

    page: Optional[int] = None
    start: Optional[date] = None
    end: Optional[date] = None
    status: Optional[str] = None
    client: Optional[int] = None

    def __post_init__(self) -> None:
        if self.status is not None and self.status not in INVOICE_STATUSES:
            raise ValueError(
                f"Invalid invoice status: {self.status}. "
                f"Expected one of: {', '.join(INVOICE_STATUSES)}"
            )

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.page is not None:
            params["page"] = str(self.page)
        if self.start is not None:
            params["from"] = format_report_date(self.start)
        if self.end is not None:
            params["to"] = format_report_date(self.end)
        if self.status is not None:
            params["status"] = self.status
        if self.client is not None:
            params["client"] = str(self.client)
        return params


@dataclass(frozen=True)
class EntryReportFilter(UpdatedSinceFilter):
    """Filters shared by the time entry reports."""

    billable: Optional[bool] = None
    only_billed: Optional[bool] = None
    only_unbilled: Optional[bool] = None
    is_closed: Optional[bool] = None

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.billable is not None:
            params["billable"] = yes_no(self.billable)
        if self.only_billed:
            params["only_billed"] = "yes"
        if self.only_unbilled:
            params["only_unbilled"] = "yes"
        if self.is_closed is not None:
            params["is_closed"] = yes_no(self.is_closed)
        return params


@dataclass(frozen=True)
class UserEntryFilter(EntryReportFilter):
    """Report filters for one user's entries, optionally within a project."""

    project_id: Optional[int] = None

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.project_id is not None:
            params["project_id"] = str(self.project_id)
        return params


@dataclass(frozen=True)
class ProjectEntryFilter(EntryReportFilter):
    """Report filters for one project's entries, optionally for one user."""

    user_id: Optional[int] = None

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.user_id is not None:
            params["user_id"] = str(self.user_id)
        return params
