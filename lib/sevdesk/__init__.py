"""sevdesk API client library.

Usage:
    from sevdesk import SevdeskClient

    client = SevdeskClient.from_settings()
    customers = client.contacts.all_customers()

    invoice = client.invoices.create(
        contact_id=42,
        items=[{"name": "Beratung", "price": 90, "quantity": 8}],
        parameters={"status": 200},
    )
"""

from .config import SevdeskSettings, DocumentDefaults, get_settings, load_required_defaults
from .contacts import ContactApi
from .documents import (
    INVOICE,
    ORDER,
    DocumentKind,
    DocumentParameterBuilder,
    LineItem,
    normalize_line_items,
)
from .errors import (
    ConfigurationMissing,
    EmptyLineItems,
    RemoteGenericError,
    RemoteNotFound,
    RemoteUnauthorized,
    SevdeskApiError,
    SevdeskError,
    TransportFailure,
)
from .invoices import InvoiceApi
from .merge import deep_merge
from .models import SevContact, SevInvoice, SevOrder, SevTextTemplate
from .orders import OrderApi
from .sevdesk_client import Country, ObjectType, Routes, SequenceResolver, SevdeskClient
from .text_templates import TextTemplateApi

__all__ = [
    "SevdeskClient",
    "SevdeskSettings",
    "DocumentDefaults",
    "get_settings",
    "load_required_defaults",
    "SequenceResolver",
    "DocumentParameterBuilder",
    "DocumentKind",
    "INVOICE",
    "ORDER",
    "LineItem",
    "normalize_line_items",
    "deep_merge",
    "ContactApi",
    "InvoiceApi",
    "OrderApi",
    "TextTemplateApi",
    "SevContact",
    "SevInvoice",
    "SevOrder",
    "SevTextTemplate",
    "Routes",
    "ObjectType",
    "Country",
    "SevdeskError",
    "SevdeskApiError",
    "ConfigurationMissing",
    "EmptyLineItems",
    "RemoteNotFound",
    "RemoteUnauthorized",
    "RemoteGenericError",
    "TransportFailure",
]
