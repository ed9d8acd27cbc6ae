"""Client and client contact endpoints."""

from functools import partial
from typing import Optional

from harvest_client.api.filters import UpdatedSinceFilter
from harvest_client.api.models import Client, Contact, SimpleClient, SimpleContact
from harvest_client.core import request
from harvest_client.core.request import Call, build_url
from harvest_client.core.schema import decode_enveloped, decode_enveloped_list


def list_clients(
    account: str, token: str, filters: Optional[UpdatedSinceFilter] = None
) -> Call[list[Client]]:
    params = filters.to_params() if filters else None
    url = build_url(account, token, "clients", params=params)
    return request.get(url, partial(decode_enveloped_list, Client, "client"))


def get_client(account: str, token: str, client_id: int) -> Call[Client]:
    url = build_url(account, token, "clients", client_id)
    return request.get(url, partial(decode_enveloped, Client, "client"))


def create_client(account: str, token: str, client: SimpleClient) -> Call[str]:
    url = build_url(account, token, "clients")
    return request.post(url, client.encode("client"))


def update_client(account: str, token: str, client_id: int, client: SimpleClient) -> Call[str]:
    url = build_url(account, token, "clients", client_id)
    return request.put(url, client.encode("client"))


def toggle_client(account: str, token: str, client_id: int) -> Call[str]:
    """Flip a client between active and inactive.

    The server rejects deactivation while the client has active projects.
    """
    url = build_url(account, token, "clients", client_id, "toggle")
    return request.post(url)


def delete_client(account: str, token: str, client_id: int) -> Call[str]:
    url = build_url(account, token, "clients", client_id)
    return request.delete(url)


# ============================================================================
# Contacts
# ============================================================================


def list_contacts(
    account: str, token: str, filters: Optional[UpdatedSinceFilter] = None
) -> Call[list[Contact]]:
    params = filters.to_params() if filters else None
    url = build_url(account, token, "contacts", params=params)
    return request.get(url, partial(decode_enveloped_list, Contact, "contact"))


def list_client_contacts(
    account: str, token: str, client_id: int, filters: Optional[UpdatedSinceFilter] = None
) -> Call[list[Contact]]:
    params = filters.to_params() if filters else None
    url = build_url(account, token, "clients", client_id, "contacts", params=params)
    return request.get(url, partial(decode_enveloped_list, Contact, "contact"))


def get_contact(account: str, token: str, contact_id: int) -> Call[Contact]:
    url = build_url(account, token, "contacts", contact_id)
    return request.get(url, partial(decode_enveloped, Contact, "contact"))


def create_contact(account: str, token: str, contact: SimpleContact) -> Call[str]:
    url = build_url(account, token, "contacts")
    return request.post(url, contact.encode("contact"))


def update_contact(
    account: str, token: str, contact_id: int, contact: SimpleContact
) -> Call[str]:
    url = build_url(account, token, "contacts", contact_id)
    return request.put(url, contact.encode("contact"))


def delete_contact(account: str, token: str, contact_id: int) -> Call[str]:
    url = build_url(account, token, "contacts", contact_id)
    return request.delete(url)
