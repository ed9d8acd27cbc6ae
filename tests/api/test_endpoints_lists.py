"""Tests shared by every list endpoint."""

from datetime import date
from typing import Any, Callable

import pytest  # type: ignore[import-not-found]

from harvest_client.api.endpoints import clients, invoices, projects, reports, tasks, users
from harvest_client.core.errors import DecodeError
from harvest_client.core.request import Call

MARCH_1 = date(2017, 3, 1)
MARCH_31 = date(2017, 3, 31)

LIST_CALLS: list[tuple[str, Callable[[], Call[Any]]]] = [
    ("list_users", lambda: users.list_users("acme", "tok")),
    ("list_user_assignments", lambda: users.list_user_assignments("acme", "tok", 3554414)),
    ("entries_for_user", lambda: reports.entries_for_user("acme", "tok", 1, MARCH_1, MARCH_31)),
    (
        "entries_for_project",
        lambda: reports.entries_for_project("acme", "tok", 1, MARCH_1, MARCH_31),
    ),
    ("list_tasks", lambda: tasks.list_tasks("acme", "tok")),
    ("list_task_assignments", lambda: tasks.list_task_assignments("acme", "tok", 3554414)),
    ("list_invoices", lambda: invoices.list_invoices("acme", "tok")),
    ("list_messages", lambda: invoices.list_messages("acme", "tok", 1)),
    ("list_categories", lambda: invoices.list_categories("acme", "tok")),
    ("list_payments", lambda: invoices.list_payments("acme", "tok", 1)),
    ("list_projects", lambda: projects.list_projects("acme", "tok")),
    ("list_clients", lambda: clients.list_clients("acme", "tok")),
    ("list_contacts", lambda: clients.list_contacts("acme", "tok")),
    ("list_client_contacts", lambda: clients.list_client_contacts("acme", "tok", 23445)),
]


class TestListEndpoints:
    """Test behaviour common to all list endpoints."""

    @pytest.mark.parametrize(
        "build", [build for _, build in LIST_CALLS], ids=[name for name, _ in LIST_CALLS]
    )
    def test_empty_array_decodes_to_empty_list(self, build: Callable[[], Call[Any]]) -> None:
        """Test that an empty response array gives an empty list."""
        call = build()

        assert call.request.method == "GET"
        assert call.parse("[]") == []

    @pytest.mark.parametrize(
        "build", [build for _, build in LIST_CALLS], ids=[name for name, _ in LIST_CALLS]
    )
    def test_object_instead_of_array(self, build: Callable[[], Call[Any]]) -> None:
        """Test that a non-array response is a decode failure."""
        with pytest.raises(DecodeError):
            build().parse("{}")
