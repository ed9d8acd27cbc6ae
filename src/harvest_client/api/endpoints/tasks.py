"""Task and project task assignment endpoints."""

from functools import partial
from typing import Optional

from harvest_client.api.filters import UpdatedSinceFilter
from harvest_client.api.models import SimpleTask, SimpleTaskAssignment, Task, TaskAssignment
from harvest_client.core import request
from harvest_client.core.request import Call, build_url
from harvest_client.core.schema import decode_enveloped, decode_enveloped_list


def list_tasks(
    account: str, token: str, filters: Optional[UpdatedSinceFilter] = None
) -> Call[list[Task]]:
    params = filters.to_params() if filters else None
    url = build_url(account, token, "tasks", params=params)
    return request.get(url, partial(decode_enveloped_list, Task, "task"))


def get_task(account: str, token: str, task_id: int) -> Call[Task]:
    url = build_url(account, token, "tasks", task_id)
    return request.get(url, partial(decode_enveloped, Task, "task"))


def create_task(account: str, token: str, task: SimpleTask) -> Call[str]:
    url = build_url(account, token, "tasks")
    return request.post(url, task.encode("task"))


def update_task(account: str, token: str, task_id: int, task: SimpleTask) -> Call[str]:
    url = build_url(account, token, "tasks", task_id)
    return request.put(url, task.encode("task"))


def delete_task(account: str, token: str, task_id: int) -> Call[str]:
    """Delete a task. The server refuses tasks that already have time logged."""
    url = build_url(account, token, "tasks", task_id)
    return request.delete(url)


def activate_task(account: str, token: str, task_id: int) -> Call[str]:
    """Reactivate an archived task."""
    url = build_url(account, token, "tasks", task_id, "activate")
    return request.post(url)


# ============================================================================
# Task assignments
# ============================================================================


def list_task_assignments(
    account: str, token: str, project_id: int
) -> Call[list[TaskAssignment]]:
    url = build_url(account, token, "projects", project_id, "task_assignments")
    return request.get(url, partial(decode_enveloped_list, TaskAssignment, "task_assignment"))


def get_task_assignment(
    account: str, token: str, project_id: int, assignment_id: int
) -> Call[TaskAssignment]:
    url = build_url(account, token, "projects", project_id, "task_assignments", assignment_id)
    return request.get(url, partial(decode_enveloped, TaskAssignment, "task_assignment"))


def assign_task(account: str, token: str, project_id: int, task_id: int) -> Call[str]:
    """Make an existing task available on a project."""
    url = build_url(account, token, "projects", project_id, "task_assignments")
    return request.post(url, {"task": {"id": task_id}})


def create_and_assign_task(account: str, token: str, project_id: int, name: str) -> Call[str]:
    """Create a new task and assign it to a project in one call."""
    url = build_url(
        account, token, "projects", project_id, "task_assignments", "add_with_create_new_task"
    )
    return request.post(url, {"task": {"name": name}})


def update_task_assignment(
    account: str,
    token: str,
    project_id: int,
    assignment_id: int,
    assignment: SimpleTaskAssignment,
) -> Call[str]:
    url = build_url(account, token, "projects", project_id, "task_assignments", assignment_id)
    return request.put(url, assignment.encode("task_assignment"))


def remove_task_assignment(
    account: str, token: str, project_id: int, assignment_id: int
) -> Call[str]:
    url = build_url(account, token, "projects", project_id, "task_assignments", assignment_id)
    return request.delete(url)
