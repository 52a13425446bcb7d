"""sevdesk text templates (letter and document texts)."""

from __future__ import annotations

from typing import Any, Dict, List, TYPE_CHECKING

from .models import SevTextTemplate
from .sevdesk_client import Routes

if TYPE_CHECKING:
    from .sevdesk_client import SevdeskClient


class TextTemplateApi:

    DEFAULT_LIMIT = 1000

    def __init__(self, client: "SevdeskClient") -> None:
        self.client = client

    def all(self, limit: int = DEFAULT_LIMIT) -> List[Dict]:
        """List all text templates."""
        return self.client.get(Routes.TEXT_TEMPLATE, {"limit": limit}).get("objects", [])

    def get(self, category: Any, object_type: str, text_type: str) -> List[SevTextTemplate]:
        """Get the templates matching a category, object type and text type.

        Args:
            category: Template category id
            object_type: e.g. RE (invoice) or AN (estimate)
            text_type: HEAD or FOOT
        """
        objects = self.client.get(Routes.TEXT_TEMPLATE, {
            "category": category,
            "objectType": object_type,
            "textType": text_type,
        }).get("objects", [])
        return [SevTextTemplate.from_api(item) for item in objects]
