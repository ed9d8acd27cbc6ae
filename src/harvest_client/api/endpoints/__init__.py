"""API endpoints.

This package contains one module per Harvest resource family. Each function
builds a ``Call`` (request descriptor plus response decoder) and performs no
I/O; pass the call to ``harvest_client.core.transport.send`` to execute it.

Available modules:
- timesheet: Daily timesheet and time entries
- users: People and project user assignments
- reports: Time entry reports per user or project
- tasks: Tasks and project task assignments
- account: Identity of the authenticated user
- invoices: Invoices, messages, item categories and payments
- projects: Projects
- clients: Clients and contacts
"""

__all__ = [
    "account",
    "clients",
    "invoices",
    "projects",
    "reports",
    "tasks",
    "timesheet",
    "users",
]

from harvest_client.api.endpoints import (  # noqa: F401
    account,
    clients,
    invoices,
    projects,
    reports,
    tasks,
    timesheet,
    users,
)
