"""Pydantic records for Harvest API resources.

Each resource has a full record, decoded from API responses, and most have a
``Simple*`` variant holding only the fields a caller may set on create or
update. Records are frozen; decoding always produces a new value.
"""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import Field, ValidationInfo, field_serializer, field_validator  # type: ignore[import-untyped]

from harvest_client.core.schema import HarvestModel, format_clock_time, parse_clock_time

# ============================================================================
# Timesheet
# ============================================================================


class DayEntry(HarvestModel):
    """Time entry as returned by the timesheet and report endpoints.

    Attributes:
        id: Entry identifier
        spent_at: Day the time was logged against
        user_id: Owner of the entry
        project_id: Project the time was logged to
        task_id: Task the time was logged to
        hours: Logged hours (including a running timer)
        notes: Free text notes
        client: Client name (timesheet endpoints only)
        project: Project name (timesheet endpoints only)
        task: Task name (timesheet endpoints only)
        timer_started_at: Set while a timer is running on this entry
        started_at: Start clock time for timestamp-based accounts ("8:00am")
        ended_at: End clock time for timestamp-based accounts
        is_closed: Whether the entry was approved/locked
        is_billed: Whether the entry was invoiced
    """

    id: int
    spent_at: date
    user_id: int
    project_id: int
    task_id: int
    hours: float
    notes: Optional[str] = None
    client: Optional[str] = None
    project: Optional[str] = None
    task: Optional[str] = None
    hours_without_timer: Optional[float] = None
    hours_with_timer: Optional[float] = None
    timer_started_at: Optional[datetime] = None
    started_at: Optional[str] = None
    ended_at: Optional[str] = None
    is_closed: bool = False
    is_billed: bool = False
    adjustment_record: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_running(self) -> bool:
        """Check if a timer is currently running on this entry."""
        return self.timer_started_at is not None


class SimpleDayEntry(HarvestModel):
    """Caller-settable fields of a time entry.

    ``started_at``/``ended_at`` are full timestamps locally and travel as
    ``h:mm a`` clock times on the wire.
    """

    project_id: int
    task_id: int
    spent_at: date
    hours: Optional[float] = None
    notes: Optional[str] = None
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None

    @field_validator("started_at", "ended_at", mode="before")
    @classmethod
    def read_clock_time(cls, value: Any, info: ValidationInfo) -> Any:
        spent_at = info.data.get("spent_at")
        if isinstance(value, str) and isinstance(spent_at, date):
            try:
                return parse_clock_time(value, spent_at)
            except ValueError:
                return value
        return value

    @field_serializer("started_at", "ended_at")
    def write_clock_time(self, value: Optional[datetime]) -> Optional[str]:
        return format_clock_time(value) if value is not None else None

    @classmethod
    def from_entry(cls, entry: DayEntry) -> "SimpleDayEntry":
        """Settable subset of an existing entry (clock times are not carried)."""
        return cls(
            project_id=entry.project_id,
            task_id=entry.task_id,
            spent_at=entry.spent_at,
            hours=entry.hours,
            notes=entry.notes,
        )


class DailyTask(HarvestModel):
    """Task a user may log time to, as listed by the daily timesheet."""

    id: int
    name: str
    billable: bool = False


class DailyProject(HarvestModel):
    """Project a user may log time to, with its assignable tasks."""

    id: int
    name: str
    code: Optional[str] = None
    billable: bool = False
    client: Optional[str] = None
    client_id: Optional[int] = None
    tasks: list[DailyTask] = Field(default_factory=list)


class DailyTimesheet(HarvestModel):
    """Response of the ``/daily`` endpoints."""

    for_day: date
    day_entries: list[DayEntry] = Field(default_factory=list)
    projects: list[DailyProject] = Field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return sum(entry.hours for entry in self.day_entries)


# ============================================================================
# Users
# ============================================================================


class User(HarvestModel):
    """Person on the Harvest account."""

    id: int
    email: str
    first_name: str
    last_name: str
    is_admin: bool = False
    is_active: bool = True
    is_contractor: bool = False
    has_access_to_all_future_projects: bool = False
    wants_newsletter: bool = False
    timezone: Optional[str] = None
    telephone: Optional[str] = None
    department: Optional[str] = None
    default_hourly_rate: Optional[float] = None
    cost_rate: Optional[float] = None
    identity_account_id: Optional[int] = None
    identity_user_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class SimpleUser(HarvestModel):
    """Fields accepted when creating or updating a person."""

    email: str
    first_name: str
    last_name: str
    is_admin: Optional[bool] = None
    is_contractor: Optional[bool] = None
    has_access_to_all_future_projects: Optional[bool] = None
    timezone: Optional[str] = None
    telephone: Optional[str] = None
    department: Optional[str] = None
    default_hourly_rate: Optional[float] = None
    cost_rate: Optional[float] = None

    @classmethod
    def from_user(cls, user: User) -> "SimpleUser":
        return cls(
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            is_admin=user.is_admin,
            is_contractor=user.is_contractor,
            has_access_to_all_future_projects=user.has_access_to_all_future_projects,
            timezone=user.timezone,
            telephone=user.telephone,
            department=user.department,
            default_hourly_rate=user.default_hourly_rate,
            cost_rate=user.cost_rate,
        )


class UserAssignment(HarvestModel):
    """Membership of a user in a project."""

    id: int
    user_id: int
    project_id: int
    is_project_manager: bool = False
    deactivated: bool = False
    hourly_rate: Optional[float] = None
    budget: Optional[float] = None
    estimate: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SimpleUserAssignment(HarvestModel):
    """Mutable fields of a user assignment."""

    is_project_manager: Optional[bool] = None
    deactivated: Optional[bool] = None
    hourly_rate: Optional[float] = None
    budget: Optional[float] = None
    estimate: Optional[float] = None


# ============================================================================
# Tasks
# ============================================================================


class Task(HarvestModel):
    id: int
    name: str
    billable_by_default: bool = False
    deactivated: bool = False
    is_default: bool = False
    default_hourly_rate: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SimpleTask(HarvestModel):
    name: str
    billable_by_default: Optional[bool] = None
    is_default: Optional[bool] = None
    default_hourly_rate: Optional[float] = None

    @classmethod
    def from_task(cls, task: Task) -> "SimpleTask":
        return cls(
            name=task.name,
            billable_by_default=task.billable_by_default,
            is_default=task.is_default,
            default_hourly_rate=task.default_hourly_rate,
        )


class TaskAssignment(HarvestModel):
    """Task made available on a project."""

    id: int
    project_id: int
    task_id: int
    billable: bool = False
    deactivated: bool = False
    hourly_rate: Optional[float] = None
    budget: Optional[float] = None
    estimate: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SimpleTaskAssignment(HarvestModel):
    billable: Optional[bool] = None
    deactivated: Optional[bool] = None
    hourly_rate: Optional[float] = None
    budget: Optional[float] = None
    estimate: Optional[float] = None


# ============================================================================
# Account
# ============================================================================


class CompanyModules(HarvestModel):
    """Feature modules enabled on the account."""

    expenses: bool = False
    invoices: bool = False
    estimates: bool = False
    approval: bool = False


class Company(HarvestModel):
    name: str
    base_uri: str
    full_domain: str
    active: bool = True
    week_start_day: Optional[str] = None
    time_format: Optional[str] = None
    clock: Optional[str] = None
    decimal_symbol: Optional[str] = None
    thousands_separator: Optional[str] = None
    color_scheme: Optional[str] = None
    plan_type: Optional[str] = None
    modules: CompanyModules = Field(default_factory=CompanyModules)


class AccountUser(HarvestModel):
    """The authenticated user as seen by ``who_am_i``."""

    id: int
    email: str
    first_name: str
    last_name: str
    admin: bool = False
    timestamp_timers: bool = False
    timezone: Optional[str] = None
    timezone_identifier: Optional[str] = None
    timezone_utc_offset: Optional[int] = None
    avatar_url: Optional[str] = None


class WhoAmI(HarvestModel):
    """Identity of the account and user behind an access token."""

    company: Company
    user: AccountUser


# ============================================================================
# Invoices
# ============================================================================


class Invoice(HarvestModel):
    """Invoice record.

    Attributes:
        id: Invoice identifier
        client_id: Billed client
        number: Human invoice number
        amount: Total amount
        due_amount: Outstanding amount
        state: draft, open, partial, paid or closed
        issued_at: Issue date
        due_at: Due date
        csv_line_items: Line items in Harvest's CSV representation
    """

    id: int
    client_id: int
    number: str
    amount: float
    due_amount: Optional[float] = None
    state: Optional[str] = None
    currency: Optional[str] = None
    subject: Optional[str] = None
    notes: Optional[str] = None
    purchase_order: Optional[str] = None
    issued_at: Optional[date] = None
    due_at: Optional[date] = None
    due_at_human_format: Optional[str] = None
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    tax: Optional[float] = None
    tax_amount: Optional[float] = None
    tax2: Optional[float] = None
    tax2_amount: Optional[float] = None
    discount: Optional[float] = None
    discount_amount: Optional[float] = None
    client_key: Optional[str] = None
    estimate_id: Optional[int] = None
    recurring_invoice_id: Optional[int] = None
    retainer_id: Optional[int] = None
    created_by_id: Optional[int] = None
    csv_line_items: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SimpleInvoice(HarvestModel):
    """Fields accepted when creating or updating an invoice.

    ``kind`` selects how line items are generated: free_form, project, task,
    people or detailed. The import_* fields take "yes"/"no".
    """

    client_id: int
    subject: Optional[str] = None
    number: Optional[str] = None
    currency: Optional[str] = None
    issued_at: Optional[date] = None
    due_at_human_format: Optional[str] = None
    notes: Optional[str] = None
    purchase_order: Optional[str] = None
    kind: Optional[str] = None
    projects_to_invoice: Optional[str] = None
    import_hours: Optional[str] = None
    import_expense: Optional[str] = None
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    expense_period_start: Optional[date] = None
    expense_period_end: Optional[date] = None
    csv_line_items: Optional[str] = None
    tax: Optional[float] = None
    tax2: Optional[float] = None
    discount: Optional[float] = None


class InvoiceMessage(HarvestModel):
    id: int
    invoice_id: int
    body: Optional[str] = None
    subject: Optional[str] = None
    sent_by: Optional[str] = None
    sent_by_email: Optional[str] = None
    full_recipient_list: Optional[str] = None
    send_me_a_copy: bool = False
    include_pay_pal_link: bool = False
    thank_you: bool = False
    reminder: bool = False
    send_reminder_on: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SimpleInvoiceMessage(HarvestModel):
    """Message sent with an invoice; ``recipients`` is comma separated."""

    recipients: Optional[str] = None
    body: Optional[str] = None
    subject: Optional[str] = None
    attach_pdf: Optional[bool] = None
    send_me_a_copy: Optional[bool] = None
    include_pay_pal_link: Optional[bool] = None


class InvoiceItemCategory(HarvestModel):
    id: int
    name: str
    use_as_service: bool = False
    use_as_expense: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SimpleInvoiceItemCategory(HarvestModel):
    name: str
    use_as_service: Optional[bool] = None
    use_as_expense: Optional[bool] = None


class Payment(HarvestModel):
    """Payment recorded against an invoice."""

    id: int
    invoice_id: int
    amount: float
    paid_at: Optional[datetime] = None
    notes: Optional[str] = None
    recorded_by: Optional[str] = None
    recorded_by_email: Optional[str] = None
    pay_pal_transaction_id: Optional[str] = None
    authorization: Optional[str] = None
    payment_gateway_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SimplePayment(HarvestModel):
    amount: float
    paid_at: Optional[date] = None
    notes: Optional[str] = None


# ============================================================================
# Projects
# ============================================================================


class Project(HarvestModel):
    """Project record.

    Attributes:
        id: Project identifier
        client_id: Owning client
        name: Display name
        code: Short project code
        bill_by: Project, Tasks, People or none
        budget_by: project, project_cost, task, person or none
        starts_on: First day of the project
        ends_on: Last day of the project
    """

    id: int
    client_id: int
    name: str
    code: Optional[str] = None
    active: bool = True
    billable: bool = False
    bill_by: Optional[str] = None
    hourly_rate: Optional[float] = None
    budget: Optional[float] = None
    budget_by: Optional[str] = None
    notify_when_over_budget: bool = False
    over_budget_notification_percentage: Optional[float] = None
    over_budget_notified_at: Optional[date] = None
    show_budget_to_all: bool = False
    estimate: Optional[float] = None
    estimate_by: Optional[str] = None
    starts_on: Optional[date] = None
    ends_on: Optional[date] = None
    notes: Optional[str] = None
    cost_budget: Optional[float] = None
    cost_budget_include_expenses: bool = False
    hint_earliest_record_at: Optional[date] = None
    hint_latest_record_at: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SimpleProject(HarvestModel):
    """Fields accepted when creating or updating a project."""

    client_id: int
    name: str
    code: Optional[str] = None
    active: Optional[bool] = None
    billable: Optional[bool] = None
    bill_by: Optional[str] = None
    hourly_rate: Optional[float] = None
    budget: Optional[float] = None
    budget_by: Optional[str] = None
    notify_when_over_budget: Optional[bool] = None
    over_budget_notification_percentage: Optional[float] = None
    show_budget_to_all: Optional[bool] = None
    estimate: Optional[float] = None
    estimate_by: Optional[str] = None
    starts_on: Optional[date] = None
    ends_on: Optional[date] = None
    notes: Optional[str] = None
    cost_budget: Optional[float] = None

    @classmethod
    def from_project(cls, project: Project) -> "SimpleProject":
        return cls(
            client_id=project.client_id,
            name=project.name,
            code=project.code,
            active=project.active,
            billable=project.billable,
            bill_by=project.bill_by,
            hourly_rate=project.hourly_rate,
            budget=project.budget,
            budget_by=project.budget_by,
            notify_when_over_budget=project.notify_when_over_budget,
            over_budget_notification_percentage=project.over_budget_notification_percentage,
            show_budget_to_all=project.show_budget_to_all,
            estimate=project.estimate,
            estimate_by=project.estimate_by,
            starts_on=project.starts_on,
            ends_on=project.ends_on,
            notes=project.notes,
            cost_budget=project.cost_budget,
        )


# ============================================================================
# Clients
# ============================================================================


class Client(HarvestModel):
    id: int
    name: str
    active: bool = True
    currency: Optional[str] = None
    currency_symbol: Optional[str] = None
    details: Optional[str] = None
    highrise_id: Optional[int] = None
    cache_version: Optional[int] = None
    default_invoice_timeframe: Optional[str] = None
    last_invoice_kind: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SimpleClient(HarvestModel):
    """Fields accepted when creating or updating a client."""

    name: str
    currency: Optional[str] = None
    currency_symbol: Optional[str] = None
    active: Optional[bool] = None
    details: Optional[str] = None
    highrise_id: Optional[int] = None

    @classmethod
    def from_client(cls, client: Client) -> "SimpleClient":
        return cls(
            name=client.name,
            currency=client.currency,
            currency_symbol=client.currency_symbol,
            active=client.active,
            details=client.details,
            highrise_id=client.highrise_id,
        )


class Contact(HarvestModel):
    """Contact person at a client."""

    id: int
    client_id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    title: Optional[str] = None
    phone_office: Optional[str] = None
    phone_mobile: Optional[str] = None
    fax: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SimpleContact(HarvestModel):
    client_id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    title: Optional[str] = None
    phone_office: Optional[str] = None
    phone_mobile: Optional[str] = None
    fax: Optional[str] = None
