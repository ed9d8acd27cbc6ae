"""People and project user assignment endpoints."""

from functools import partial
from typing import Optional

from harvest_client.api.filters import UpdatedSinceFilter
from harvest_client.api.models import SimpleUser, SimpleUserAssignment, User, UserAssignment
from harvest_client.core import request
from harvest_client.core.request import Call, build_url
from harvest_client.core.schema import decode_enveloped, decode_enveloped_list


def list_users(
    account: str, token: str, filters: Optional[UpdatedSinceFilter] = None
) -> Call[list[User]]:
    params = filters.to_params() if filters else None
    url = build_url(account, token, "people", params=params)
    return request.get(url, partial(decode_enveloped_list, User, "user"))


def get_user(account: str, token: str, user_id: int) -> Call[User]:
    url = build_url(account, token, "people", user_id)
    return request.get(url, partial(decode_enveloped, User, "user"))


def create_user(account: str, token: str, user: SimpleUser) -> Call[str]:
    """Invite a new person. The response body is returned undecoded."""
    url = build_url(account, token, "people")
    return request.post(url, user.encode("user"))


def update_user(account: str, token: str, user_id: int, user: SimpleUser) -> Call[str]:
    url = build_url(account, token, "people", user_id)
    return request.put(url, user.encode("user"))


def delete_user(account: str, token: str, user_id: int) -> Call[str]:
    url = build_url(account, token, "people", user_id)
    return request.delete(url)


def toggle_user(account: str, token: str, user_id: int) -> Call[str]:
    """Activate a deactivated person, or deactivate an active one."""
    url = build_url(account, token, "people", user_id, "toggle")
    return request.post(url)


# ============================================================================
# User assignments
# ============================================================================


def list_user_assignments(
    account: str, token: str, project_id: int
) -> Call[list[UserAssignment]]:
    url = build_url(account, token, "projects", project_id, "user_assignments")
    return request.get(url, partial(decode_enveloped_list, UserAssignment, "user_assignment"))


def get_user_assignment(
    account: str, token: str, project_id: int, assignment_id: int
) -> Call[UserAssignment]:
    url = build_url(account, token, "projects", project_id, "user_assignments", assignment_id)
    return request.get(url, partial(decode_enveloped, UserAssignment, "user_assignment"))


def assign_user(account: str, token: str, project_id: int, user_id: int) -> Call[str]:
    url = build_url(account, token, "projects", project_id, "user_assignments")
    return request.post(url, {"user": {"id": user_id}})


def update_user_assignment(
    account: str,
    token: str,
    project_id: int,
    assignment_id: int,
    assignment: SimpleUserAssignment,
) -> Call[str]:
    url = build_url(account, token, "projects", project_id, "user_assignments", assignment_id)
    return request.put(url, assignment.encode("user_assignment"))


def remove_user_assignment(
    account: str, token: str, project_id: int, assignment_id: int
) -> Call[str]:
    url = build_url(account, token, "projects", project_id, "user_assignments", assignment_id)
    return request.delete(url)
