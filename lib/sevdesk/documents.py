"""Request payloads for invoice and order creation.

sevdesk creates documents through its factory endpoints, which expect one
header object plus the list of positions in a single request body:

    {
        "invoice": {...header...},
        "invoicePosSave": [{...position...}, ...],
    }

Orders use the same structure under "order" / "orderPosSave".

Usage:
    builder = DocumentParameterBuilder(client, settings, INVOICE)
    payload = builder.build(contact_id=42, raw_items=[{"name": "Beratung", "price": 90}])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .config import DocumentDefaults, get_settings, load_required_defaults
from .errors import EmptyLineItems, TransportFailure
from .merge import deep_merge
from .sevdesk_client import Country, ObjectType, SequenceResolver

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Document status shared by invoices and orders
STATUS_DRAFT = 100


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


@dataclass(frozen=True)
class DocumentKind:
    """Wire names for one document type."""
    name: str  # invoice / order
    object_name: str  # Invoice / Order
    header_prefix: str
    sequence_object_type: str
    default_subtype: str
    subtype_field: str  # invoiceType / orderType

    @property
    def header_key(self) -> str:
        return self.name

    @property
    def positions_key(self) -> str:
        return f"{self.name}PosSave"

    @property
    def position_object_name(self) -> str:
        return f"{self.object_name}Pos"

    @property
    def number_field(self) -> str:
        return f"{self.name}Number"

    @property
    def date_field(self) -> str:
        return f"{self.name}Date"

    @property
    def needs_invoice_type(self) -> bool:
        return self.subtype_field == "invoiceType"


INVOICE = DocumentKind(
    name="invoice",
    object_name="Invoice",
    header_prefix="Rechnung NR. ",
    sequence_object_type=ObjectType.INVOICE,
    default_subtype="RE",
    subtype_field="invoiceType",
)

ORDER = DocumentKind(
    name="order",
    object_name="Order",
    header_prefix="Angebot NR. ",
    sequence_object_type=ObjectType.ORDER,
    default_subtype="AN",
    subtype_field="orderType",
)


@dataclass
class LineItem:
    """One position of an invoice or order.

    Example:
        item = LineItem(name="Beratung", price=90, quantity=8, tax_rate=19)
        item.to_api_dict(INVOICE)
    """
    name: str
    price: float
    tax_rate: float
    quantity: float = 1
    text: str = ""
    discount: float = 0
    unit_id: int = 1
    part_id: Optional[int] = None

    def to_api_dict(self, kind: DocumentKind = INVOICE) -> Dict[str, Any]:
        """Convert to sevdesk position format."""
        item: Dict[str, Any] = {
            "objectName": kind.position_object_name,
            "mapAll": "true",
            "quantity": self.quantity,
            "price": self.price,
            "name": self.name,
            "text": self.text,
            "taxRate": self.tax_rate,
            "discount": self.discount,
            "unity": {
                "id": self.unit_id,
                "objectName": "Unity",
            },
        }
        if self.part_id is not None:
            item["part"] = {"id": self.part_id, "objectName": "Part"}
        return item

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], defaults: DocumentDefaults) -> "LineItem":
        """Create LineItem from caller supplied item data, filling in defaults."""
        return cls(
            name=raw["name"],
            price=raw["price"],
            tax_rate=raw.get("tax_rate", defaults.tax_rate),
            quantity=raw.get("quantity", 1),
            text=raw.get("text", ""),
            discount=raw.get("discount", 0),
            unit_id=raw.get("unit_id", 1),
            part_id=raw.get("part_id"),
        )


def normalize_line_items(
    raw_items: Optional[Iterable[Mapping[str, Any]]],
    defaults: DocumentDefaults,
    kind: DocumentKind = INVOICE,
) -> List[LineItem]:
    """Turn raw item dicts into LineItems, keeping their order.

    Items without a name or a price are skipped.

    Raises:
        EmptyLineItems: if no items were passed at all
    """
    raw_items = list(raw_items or [])
    if not raw_items:
        raise EmptyLineItems(kind.name)

    items = []
    for raw in raw_items:
        if "name" not in raw or "price" not in raw:
            logger.debug(f"Skipping {kind.name} item without name or price: {raw!r}")
            continue
        items.append(LineItem.from_raw(raw, defaults))
    return items


class DocumentParameterBuilder:
    """Assembles the creation payload for an invoice or order.

    The computed payload (header with configured defaults, next document
    number and normalized positions) is deep merged with the caller's
    overrides, which win at every level. Two override keys are also read as
    shortcuts: ``country`` (StaticCountry id) and ``status``; orders take
    their type from ``orderType``.
    """

    def __init__(
        self,
        gateway: Any,
        config: Any,
        kind: DocumentKind = INVOICE,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Args:
            gateway: Anything with ``call(method, path, parameters)``
            config: Anything with ``get(key)``, usually SevdeskSettings
            kind: INVOICE or ORDER
            clock: Source of the document date
        """
        self.gateway = gateway
        self.config = config
        self.kind = kind
        self.clock = clock
        self.sequences = SequenceResolver(gateway)

    def build(
        self,
        contact_id: Any,
        raw_items: Optional[Iterable[Mapping[str, Any]]],
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Build the request body for the factory save endpoint.

        Raises:
            EmptyLineItems: no items passed
            ConfigurationMissing: a required setting is empty
            SevdeskApiError: the next document number could not be fetched
        """
        overrides = dict(overrides or {})
        raw_items = list(raw_items or [])
        # No remote call for a document that can never be valid
        if not raw_items:
            raise EmptyLineItems(self.kind.name)

        defaults = load_required_defaults(self.config, include_invoice_type=self.kind.needs_invoice_type)
        subtype = self._subtype(overrides)
        number = self.sequences.next_number(self.kind.sequence_object_type, subtype)
        items = normalize_line_items(raw_items, defaults, self.kind)

        computed = {
            self.kind.header_key: self._header(contact_id, number, defaults, subtype, overrides),
            self.kind.positions_key: [item.to_api_dict(self.kind) for item in items],
        }
        return deep_merge(computed, overrides)

    def _subtype(self, overrides: Mapping[str, Any]) -> str:
        if self.kind.needs_invoice_type:
            return self.kind.default_subtype
        return overrides.get(self.kind.subtype_field) or self.kind.default_subtype

    def _header(
        self,
        contact_id: Any,
        number: str,
        defaults: DocumentDefaults,
        subtype: str,
        overrides: Mapping[str, Any],
    ) -> Dict[str, Any]:
        kind = self.kind
        header: Dict[str, Any] = {
            "objectName": kind.object_name,
            "contact": {
                "id": contact_id,
                "objectName": "Contact",
            },
            "header": f"{kind.header_prefix}{number}",
            kind.number_field: number,
            kind.date_field: self.clock().strftime(DATE_FORMAT),
            "discount": 0,
            "addressCountry": {
                "id": _or_default(overrides.get("country"), Country.GERMANY),
                "objectName": "StaticCountry",
            },
            "status": _or_default(overrides.get("status"), STATUS_DRAFT),
            "contactPerson": {
                "id": defaults.sev_user_id,
                "objectName": "SevUser",
            },
            "taxRate": defaults.tax_rate,
            "taxText": defaults.tax_text,
            "taxType": defaults.tax_type,
            "currency": defaults.currency,
            "mapAll": "true",
        }
        if kind.needs_invoice_type:
            header["invoiceType"] = defaults.invoice_type
        else:
            header["orderType"] = subtype
            # drafts of the same order are versioned starting at 0
            header["version"] = 0
        return header


class DocumentApi:
    """Calls shared by the invoice and order resources."""

    kind: DocumentKind = INVOICE
    route: str = ""
    create_route: str = ""

    def __init__(
        self,
        client: Any,
        config: Any = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.client = client
        self.config = config
        self.clock = clock

    def _list(self, params: Optional[Dict[str, Any]] = None) -> List[Dict]:
        return self.client.get(self.route, params or {}).get("objects", [])

    def all_by_status(self, status: int) -> List[Dict]:
        return self._list({"status": status})

    def all_by_contact(self, contact_id: Any) -> List[Dict]:
        """List documents of one contact."""
        return self._list({"contact": {"id": contact_id, "objectName": "Contact"}})

    def all_before(self, timestamp: int) -> List[Dict]:
        """List documents dated on or before ``timestamp``."""
        return self._list({"endDate": timestamp})

    def all_after(self, timestamp: int) -> List[Dict]:
        """List documents dated on or after ``timestamp``."""
        return self._list({"startDate": timestamp})

    def builder(self) -> DocumentParameterBuilder:
        config = self.config if self.config is not None else get_settings()
        return DocumentParameterBuilder(self.client, config, self.kind, self.clock)

    def _create(
        self,
        contact_id: Any,
        items: Optional[Iterable[Mapping[str, Any]]],
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload = self.builder().build(contact_id, items, parameters)
        result = self.client.post(self.create_route, payload)
        created = (result.get("objects") or {}).get(self.kind.header_key)
        if not created:
            logger.warning(f"sevdesk returned no {self.kind.name} after save: {result!r}")
            raise TransportFailure(f"No {self.kind.name} in save response")
        logger.info(
            f"Created {self.kind.name} {created.get(self.kind.number_field)} for contact {contact_id}"
        )
        return created

    def get_raw_pdf_data(self, document_id: Any, preview: bool = True) -> Dict[str, Any]:
        """Return the PDF object (filename, base64 content, mimeType).

        Args:
            document_id: Document ID
            preview: If True the document is not marked as sent
        """
        result = self.client.get(f"{self.route}/{document_id}/getPdf", {"preventSendBy": preview})
        return result.get("objects", {})

    def send_per_mail(self, document_id: Any, email: str, subject: str, text: str) -> Dict[str, Any]:
        """Send a document by email."""
        return self.client.post(f"{self.route}/{document_id}/sendViaEmail", {
            "toEmail": email,
            "subject": subject,
            "text": text,
        })
