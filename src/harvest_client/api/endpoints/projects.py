"""Project endpoints."""

from functools import partial
from typing import Optional

from harvest_client.api.filters import ProjectFilter
from harvest_client.api.models import Project, SimpleProject
from harvest_client.core import request
from harvest_client.core.request import Call, build_url
from harvest_client.core.schema import decode_enveloped, decode_enveloped_list


def list_projects(
    account: str, token: str, filters: Optional[ProjectFilter] = None
) -> Call[list[Project]]:
    """All projects, optionally narrowed to one client or recent changes.

    Example:
        >>> call = list_projects("acme", "tok", ProjectFilter(client=23445))
        >>> call.request.url
        'https://acme.harvestapp.com/projects?access_token=tok&client=23445'
    """
    params = filters.to_params() if filters else None
    url = build_url(account, token, "projects", params=params)
    return request.get(url, partial(decode_enveloped_list, Project, "project"))


def get_project(account: str, token: str, project_id: int) -> Call[Project]:
    url = build_url(account, token, "projects", project_id)
    return request.get(url, partial(decode_enveloped, Project, "project"))


def create_project(account: str, token: str, project: SimpleProject) -> Call[str]:
    url = build_url(account, token, "projects")
    return request.post(url, project.encode("project"))


def update_project(
    account: str, token: str, project_id: int, project: SimpleProject
) -> Call[str]:
    url = build_url(account, token, "projects", project_id)
    return request.put(url, project.encode("project"))


def toggle_project(account: str, token: str, project_id: int) -> Call[str]:
    """Archive an active project, or reactivate an archived one."""
    url = build_url(account, token, "projects", project_id, "toggle")
    return request.put(url)


def delete_project(account: str, token: str, project_id: int) -> Call[str]:
    url = build_url(account, token, "projects", project_id)
    return request.delete(url)
