"""sevdesk contacts.

See https://api.sevdesk.de/#tag/Contact
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .errors import RemoteNotFound
from .models import SevContact
from .sevdesk_client import Routes

if TYPE_CHECKING:
    from .sevdesk_client import SevdeskClient

logger = logging.getLogger(__name__)


class ContactApi:
    """Contact listing, creation, update and deletion.

    Listing methods return organisations only by default; pass ``depth=1``
    to include persons.
    """

    # Contact categories
    SUPPLIER = 2
    CUSTOMER = 3
    PARTNER = 4
    PROSPECT_CUSTOMER = 28

    DEFAULT_LIMIT = 999999

    def __init__(self, client: "SevdeskClient") -> None:
        self.client = client

    # ==================== LIST ====================

    def _list(self, params: Dict[str, Any], depth: int, limit: int) -> List[Dict]:
        params = {**params, "depth": depth, "limit": limit}
        return self.client.get(Routes.CONTACT, params).get("objects", [])

    @staticmethod
    def _category(category_id: int) -> Dict[str, Any]:
        return {"id": category_id, "objectName": "Category"}

    def all(self, depth: int = 0, limit: int = DEFAULT_LIMIT) -> List[Dict]:
        """List all contacts."""
        return self._list({}, depth, limit)

    def all_by_city(self, city: str, depth: int = 0, limit: int = DEFAULT_LIMIT) -> List[Dict]:
        """List contacts located in ``city``."""
        return self._list({"city": city}, depth, limit)

    def all_suppliers(self, depth: int = 0, limit: int = DEFAULT_LIMIT) -> List[Dict]:
        return self.all_custom(self.SUPPLIER, depth, limit)

    def all_customers(self, depth: int = 0, limit: int = DEFAULT_LIMIT) -> List[Dict]:
        return self.all_custom(self.CUSTOMER, depth, limit)

    def all_partners(self, depth: int = 0, limit: int = DEFAULT_LIMIT) -> List[Dict]:
        return self.all_custom(self.PARTNER, depth, limit)

    def all_prospect_customers(self, depth: int = 0, limit: int = DEFAULT_LIMIT) -> List[Dict]:
        return self.all_custom(self.PROSPECT_CUSTOMER, depth, limit)

    def all_custom(self, contact_category: int, depth: int = 0, limit: int = DEFAULT_LIMIT) -> List[Dict]:
        """List contacts of an arbitrary category id."""
        return self._list({"category": self._category(contact_category)}, depth, limit)

    # ==================== GET ====================

    def get(self, contact_id: Any) -> SevContact:
        """Get a single contact by ID."""
        objects = self.client.get(f"{Routes.CONTACT}/{contact_id}").get("objects")
        if not objects:
            raise RemoteNotFound(f"Contact with id {contact_id} not found")
        return SevContact.from_api(objects[0])

    # ==================== CREATE ====================

    def _create(self, contact_type: int, parameters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        data = dict(parameters or {})
        data["category"] = self._category(contact_type)
        result = self.client.post(Routes.CONTACT, data)
        logger.info(f"Created contact {data.get('name')!r} in category {contact_type}")
        return result

    def create_supplier(self, organisation_name: str, parameters: Optional[Dict[str, Any]] = None) -> SevContact:
        return self.create_custom(organisation_name, self.SUPPLIER, parameters)

    def create_customer(self, organisation_name: str, parameters: Optional[Dict[str, Any]] = None) -> SevContact:
        return self.create_custom(organisation_name, self.CUSTOMER, parameters)

    def create_partner(self, organisation_name: str, parameters: Optional[Dict[str, Any]] = None) -> SevContact:
        return self.create_custom(organisation_name, self.PARTNER, parameters)

    def create_prospect_customer(
        self, organisation_name: str, parameters: Optional[Dict[str, Any]] = None
    ) -> SevContact:
        return self.create_custom(organisation_name, self.PROSPECT_CUSTOMER, parameters)

    def create_custom(
        self,
        organisation_name: str,
        contact_category: int,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> SevContact:
        """Create an organisation contact in the given category.

        Args:
            organisation_name: Contact name
            contact_category: Category id (SUPPLIER, CUSTOMER, ... or a custom one)
            parameters: Additional contact fields
        """
        data = dict(parameters or {})
        data["name"] = organisation_name
        return SevContact.from_api(self._create(contact_category, data).get("objects"))

    # ==================== UPDATE / DELETE ====================

    def update(self, contact_id: Any, parameters: Optional[Dict[str, Any]] = None) -> SevContact:
        """Update an existing contact."""
        result = self.client.put(f"{Routes.CONTACT}/{contact_id}", parameters or {})
        return SevContact.from_api(result.get("objects"))

    def delete(self, contact_id: Any) -> Dict[str, Any]:
        """Delete a contact."""
        return self.client.delete(f"{Routes.CONTACT}/{contact_id}")
