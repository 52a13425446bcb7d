"""sevdesk orders (estimates, order confirmations, delivery notes).

See https://api.sevdesk.de/#tag/Order
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .documents import ORDER, DocumentApi
from .errors import RemoteNotFound
from .models import SevOrder
from .sevdesk_client import Routes, SequenceResolver


class OrderApi(DocumentApi):
    """Order listing and creation.

    The order type is read from the ``orderType`` parameter and defaults to
    an estimate:

        client.orders.create(42, items, {"orderType": OrderApi.ORDER_CONFIRMATION})
    """

    kind = ORDER
    route = Routes.ORDER
    create_route = Routes.CREATE_ORDER

    # Order status
    DRAFT = 100
    DELIVERED = 200
    REJECTED_OR_CANCELLED = 300
    ACCEPTED = 500
    PARTIALLY_CALCULATED = 750
    CALCULATED = 1000

    # Order types
    ESTIMATE_OR_PROPOSAL = "AN"
    ORDER_CONFIRMATION = "AB"
    DELIVERY_NOTE = "LI"

    DEFAULT_LIMIT = 9999

    def all(self, depth: int = 0, limit: int = DEFAULT_LIMIT) -> List[Dict]:
        """List all orders with category and unity embedded."""
        return self._list({"depth": depth, "limit": limit, "embed": "category,unity", "countAll": "true"})

    def all_draft(self) -> List[Dict]:
        return self.all_by_status(self.DRAFT)

    def all_open(self) -> List[Dict]:
        return self.all_by_status(self.DELIVERED)

    def all_accepted(self) -> List[Dict]:
        return self.all_by_status(self.ACCEPTED)

    def get(self, order_id: Any) -> SevOrder:
        """Get a single order by ID."""
        objects = self.client.get(f"{Routes.ORDER}/{order_id}").get("objects")
        if not objects:
            raise RemoteNotFound(f"Order with id {order_id} not found")
        return SevOrder.from_api(objects[0])

    def create(
        self,
        contact_id: Any,
        items: Optional[Iterable[Mapping[str, Any]]],
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> SevOrder:
        """Create an order with the next free order number."""
        return SevOrder.from_api(self._create(contact_id, items, parameters))

    def next_order_number(self, order_type: str = ESTIMATE_OR_PROPOSAL, use_next_number: bool = False) -> Any:
        return SequenceResolver(self.client).next_order_number(order_type, use_next_number)
