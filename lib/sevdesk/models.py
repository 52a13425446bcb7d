"""Value objects wrapping sevdesk API responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional


def _ref_id(value: Any) -> Optional[str]:
    """Id of a nested object reference like {"id": "5", "objectName": "Contact"}."""
    if isinstance(value, dict):
        ref = value.get("id")
        return str(ref) if ref is not None else None
    return None


def _decimal(value: Any) -> Optional[Decimal]:
    if value in (None, ""):
        return None
    return Decimal(str(value))


def _int(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    return int(value)


@dataclass
class SevObject:
    """Fields every sevdesk object carries. ``raw`` keeps the full response."""
    id: Optional[str] = None
    object_name: str = ""
    create: Optional[str] = None
    update: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @staticmethod
    def _base(data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": str(data["id"]) if data.get("id") is not None else None,
            "object_name": data.get("objectName", ""),
            "create": data.get("create"),
            "update": data.get("update"),
            "raw": data,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Return the original API representation."""
        return dict(self.raw)


@dataclass
class SevContact(SevObject):
    """A sevdesk contact (organisation or person)."""
    name: Optional[str] = None
    customer_number: Optional[str] = None
    category_id: Optional[str] = None
    parent_id: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SevContact":
        """Create from sevdesk API response."""
        data = data or {}
        return cls(
            **cls._base(data),
            name=data.get("name"),
            customer_number=data.get("customerNumber"),
            category_id=_ref_id(data.get("category")),
            parent_id=_ref_id(data.get("parent")),
        )


@dataclass
class SevInvoice(SevObject):
    """A sevdesk invoice."""
    invoice_number: Optional[str] = None
    invoice_type: Optional[str] = None
    invoice_date: Optional[str] = None
    contact_id: Optional[str] = None
    status: Optional[int] = None
    currency: Optional[str] = None
    sum_net: Optional[Decimal] = None
    sum_gross: Optional[Decimal] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SevInvoice":
        """Create from sevdesk API response."""
        data = data or {}
        return cls(
            **cls._base(data),
            invoice_number=data.get("invoiceNumber"),
            invoice_type=data.get("invoiceType"),
            invoice_date=data.get("invoiceDate"),
            contact_id=_ref_id(data.get("contact")),
            status=_int(data.get("status")),
            currency=data.get("currency"),
            sum_net=_decimal(data.get("sumNet")),
            sum_gross=_decimal(data.get("sumGross")),
        )


@dataclass
class SevOrder(SevObject):
    """A sevdesk order (estimate, order confirmation or delivery note)."""
    order_number: Optional[str] = None
    order_type: Optional[str] = None
    order_date: Optional[str] = None
    contact_id: Optional[str] = None
    status: Optional[int] = None
    version: Optional[int] = None
    currency: Optional[str] = None
    sum_net: Optional[Decimal] = None
    sum_gross: Optional[Decimal] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SevOrder":
        """Create from sevdesk API response."""
        data = data or {}
        return cls(
            **cls._base(data),
            order_number=data.get("orderNumber"),
            order_type=data.get("orderType"),
            order_date=data.get("orderDate"),
            contact_id=_ref_id(data.get("contact")),
            status=_int(data.get("status")),
            version=_int(data.get("version")),
            currency=data.get("currency"),
            sum_net=_decimal(data.get("sumNet")),
            sum_gross=_decimal(data.get("sumGross")),
        )


@dataclass
class SevTextTemplate(SevObject):
    category: Optional[str] = None
    object_type: Optional[str] = None
    text_type: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SevTextTemplate":
        data = data or {}
        return cls(
            **cls._base(data),
            category=data.get("category"),
            object_type=data.get("objectType"),
            text_type=data.get("textType"),
            text=data.get("text"),
        )
