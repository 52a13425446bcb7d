"""sevdesk invoices.

See https://api.sevdesk.de/#tag/Invoice
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .documents import INVOICE, DocumentApi
from .models import SevInvoice
from .sevdesk_client import Routes


class InvoiceApi(DocumentApi):
    """Invoice listing, creation and delivery.

    Usage:
        invoices = client.invoices
        invoice = invoices.create(contact_id=42, items=[{"name": "Beratung", "price": 90, "quantity": 8}])
        invoices.send_per_mail(invoice.id, "kunde@example.com", "Ihre Rechnung", "Anbei ...")
    """

    kind = INVOICE
    route = Routes.INVOICE
    create_route = Routes.CREATE_INVOICE

    # Invoice status
    DEACTIVATED_RECURRING = 50
    DRAFT = 100
    OPEN = 200
    PAYED = 1000

    # Invoice types
    NORMAL_INVOICE = "RE"
    RECURRING_INVOICE = "WKR"
    CANCELLATION_INVOICE = "SR"
    REMINDER_INVOICE = "MA"
    PART_INVOICE = "TR"
    FINAL_INVOICE = "ER"

    def all(self) -> List[Dict]:
        """List all invoices."""
        return self._list()

    def all_draft(self) -> List[Dict]:
        return self.all_by_status(self.DRAFT)

    def all_open(self) -> List[Dict]:
        return self.all_by_status(self.OPEN)

    def all_payed(self) -> List[Dict]:
        return self.all_by_status(self.PAYED)

    def create(
        self,
        contact_id: Any,
        items: Optional[Iterable[Mapping[str, Any]]],
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> SevInvoice:
        """Create an invoice with the next free invoice number.

        Args:
            contact_id: sevdesk contact id of the recipient
            items: Position dicts with at least name and price
            parameters: Overrides merged over the generated payload, e.g.
                {"status": 200} or {"invoice": {"header": "Rechnung Mai"}}
        """
        return SevInvoice.from_api(self._create(contact_id, items, parameters))

    def update(self, invoice_id: Any, parameters: Mapping[str, Any]) -> SevInvoice:
        """Update an existing invoice."""
        result = self.client.put(f"{Routes.INVOICE}/{invoice_id}", parameters)
        return SevInvoice.from_api(result.get("objects"))

    def create_invoice_from_order(
        self,
        order_id: Any,
        amount_type: str,
        amount: float,
        partial_type: str = NORMAL_INVOICE,
    ) -> Dict[str, Any]:
        """Create an invoice from an existing order.

        Args:
            order_id: Order ID
            amount_type: How ``amount`` is meant: "percentage", "net" or "gross"
            amount: Amount for this invoice
            partial_type: "RE", "TR" or "ER"
        """
        result = self.client.post(f"{Routes.INVOICE}/Factory/createInvoiceFromOrder", {
            "order": {"id": order_id, "objectName": "Order"},
            "type": amount_type,
            "amount": amount,
            "partialType": partial_type,
        })
        return result.get("objects", {})
