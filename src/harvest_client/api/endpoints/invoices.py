"""Invoice endpoints: invoices, messages, item categories and payments."""

from functools import partial
from typing import Optional

from harvest_client.api.filters import InvoiceFilter
from harvest_client.api.models import (
    Invoice,
    InvoiceItemCategory,
    InvoiceMessage,
    Payment,
    SimpleInvoice,
    SimpleInvoiceItemCategory,
    SimpleInvoiceMessage,
    SimplePayment,
)
from harvest_client.core import request
from harvest_client.core.request import Call, build_url
from harvest_client.core.schema import decode_enveloped, decode_enveloped_list

MESSAGE_ACTIONS = ("mark_as_sent", "mark_as_draft", "mark_as_closed", "re_open")

# ============================================================================
# Invoices
# ============================================================================


def list_invoices(
    account: str, token: str, filters: Optional[InvoiceFilter] = None
) -> Call[list[Invoice]]:
    params = filters.to_params() if filters else None
    url = build_url(account, token, "invoices", params=params)
    return request.get(url, partial(decode_enveloped_list, Invoice, "invoice"))


def get_invoice(account: str, token: str, invoice_id: int) -> Call[Invoice]:
    url = build_url(account, token, "invoices", invoice_id)
    return request.get(url, partial(decode_enveloped, Invoice, "invoice"))


def create_invoice(account: str, token: str, invoice: SimpleInvoice) -> Call[str]:
    url = build_url(account, token, "invoices")
    return request.post(url, invoice.encode("invoice"))


def update_invoice(
    account: str, token: str, invoice_id: int, invoice: SimpleInvoice
) -> Call[str]:
    url = build_url(account, token, "invoices", invoice_id)
    return request.put(url, invoice.encode("invoice"))


def delete_invoice(account: str, token: str, invoice_id: int) -> Call[str]:
    url = build_url(account, token, "invoices", invoice_id)
    return request.delete(url)


# ============================================================================
# Messages
# ============================================================================


def list_messages(account: str, token: str, invoice_id: int) -> Call[list[InvoiceMessage]]:
    url = build_url(account, token, "invoices", invoice_id, "messages")
    return request.get(url, partial(decode_enveloped_list, InvoiceMessage, "message"))


def get_message(
    account: str, token: str, invoice_id: int, message_id: int
) -> Call[InvoiceMessage]:
    url = build_url(account, token, "invoices", invoice_id, "messages", message_id)
    return request.get(url, partial(decode_enveloped, InvoiceMessage, "message"))


def send_message(
    account: str, token: str, invoice_id: int, message: SimpleInvoiceMessage
) -> Call[str]:
    """Email the invoice to the message's recipients."""
    url = build_url(account, token, "invoices", invoice_id, "messages")
    return request.post(url, message.encode("invoice_message"))


def delete_message(account: str, token: str, invoice_id: int, message_id: int) -> Call[str]:
    url = build_url(account, token, "invoices", invoice_id, "messages", message_id)
    return request.delete(url)


def change_state(
    account: str,
    token: str,
    invoice_id: int,
    action: str,
    message: Optional[SimpleInvoiceMessage] = None,
) -> Call[str]:
    """Move an invoice between states without emailing it.

    Args:
        action: One of mark_as_sent, mark_as_draft, mark_as_closed, re_open
        message: Optional note recorded with the state change

    Raises:
        ValueError: If the action is not a known state transition
    """
    if action not in MESSAGE_ACTIONS:
        raise ValueError(
            f"Invalid invoice action: {action}. Expected one of: {', '.join(MESSAGE_ACTIONS)}"
        )
    url = build_url(account, token, "invoices", invoice_id, "messages", action)
    body = message.encode("invoice_message") if message is not None else None
    return request.post(url, body)


def mark_as_sent(
    account: str, token: str, invoice_id: int, message: Optional[SimpleInvoiceMessage] = None
) -> Call[str]:
    return change_state(account, token, invoice_id, "mark_as_sent", message)


def mark_as_draft(
    account: str, token: str, invoice_id: int, message: Optional[SimpleInvoiceMessage] = None
) -> Call[str]:
    return change_state(account, token, invoice_id, "mark_as_draft", message)


def mark_as_closed(
    account: str, token: str, invoice_id: int, message: Optional[SimpleInvoiceMessage] = None
) -> Call[str]:
    """Write off an invoice."""
    return change_state(account, token, invoice_id, "mark_as_closed", message)


def re_open(
    account: str, token: str, invoice_id: int, message: Optional[SimpleInvoiceMessage] = None
) -> Call[str]:
    return change_state(account, token, invoice_id, "re_open", message)


# ============================================================================
# Item categories
# ============================================================================


def list_categories(account: str, token: str) -> Call[list[InvoiceItemCategory]]:
    url = build_url(account, token, "invoice_item_categories")
    return request.get(
        url, partial(decode_enveloped_list, InvoiceItemCategory, "invoice_item_category")
    )


def create_category(
    account: str, token: str, category: SimpleInvoiceItemCategory
) -> Call[str]:
    url = build_url(account, token, "invoice_item_categories")
    return request.post(url, category.encode("invoice_item_category"))


def update_category(
    account: str, token: str, category_id: int, category: SimpleInvoiceItemCategory
) -> Call[str]:
    url = build_url(account, token, "invoice_item_categories", category_id)
    return request.put(url, category.encode("invoice_item_category"))


def delete_category(account: str, token: str, category_id: int) -> Call[str]:
    url = build_url(account, token, "invoice_item_categories", category_id)
    return request.delete(url)


# ============================================================================
# Payments
# ============================================================================


def list_payments(account: str, token: str, invoice_id: int) -> Call[list[Payment]]:
    url = build_url(account, token, "invoices", invoice_id, "payments")
    return request.get(url, partial(decode_enveloped_list, Payment, "payment"))


def get_payment(account: str, token: str, invoice_id: int, payment_id: int) -> Call[Payment]:
    url = build_url(account, token, "invoices", invoice_id, "payments", payment_id)
    return request.get(url, partial(decode_enveloped, Payment, "payment"))


def create_payment(
    account: str, token: str, invoice_id: int, payment: SimplePayment
) -> Call[str]:
    url = build_url(account, token, "invoices", invoice_id, "payments")
    return request.post(url, payment.encode("payment"))


def delete_payment(account: str, token: str, invoice_id: int, payment_id: int) -> Call[str]:
    url = build_url(account, token, "invoices", invoice_id, "payments", payment_id)
    return request.delete(url)
