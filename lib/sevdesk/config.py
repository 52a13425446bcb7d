"""
Configuration settings for the sevdesk client.
Uses pydantic-settings for environment variable management.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationMissing

# Order matters: it is the order missing keys are reported in.
REQUIRED_DOCUMENT_KEYS = (
    "tax_rate",
    "tax_text",
    "tax_type",
    "invoice_type",
    "currency",
    "sev_user_id",
)


class SevdeskSettings(BaseSettings):
    """Client settings loaded from SEVDESK_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SEVDESK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    # API access
    api_token: str = ""
    base_url: str = "https://my.sevdesk.de"
    request_timeout: float = 30.0

    # Document defaults (required when creating invoices/orders)
    tax_rate: Optional[float] = None
    tax_text: str = ""
    tax_type: str = ""  # default, eu, noteu, custom, ss
    invoice_type: str = ""  # RE, WKR, SR, MA, TR, ER
    currency: str = ""
    sev_user_id: Optional[int] = None

    def get(self, key: str) -> Any:
        """Return a setting by name, or None if there is no such setting."""
        return getattr(self, key, None)


@lru_cache
def get_settings() -> SevdeskSettings:
    """Get cached settings instance."""
    return SevdeskSettings()


@dataclass(frozen=True)
class DocumentDefaults:
    """Validated configuration values every invoice/order needs."""
    tax_rate: float
    tax_text: str
    tax_type: str
    currency: str
    sev_user_id: int
    invoice_type: Optional[str] = None


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() in ("", "0")
    return not value


def load_required_defaults(config: Any, include_invoice_type: bool = True) -> DocumentDefaults:
    """Read and validate the document defaults from ``config``.

    ``config`` only needs a ``get(key)`` method. Every required key is checked
    before failing, so the raised ConfigurationMissing names all missing keys
    (in REQUIRED_DOCUMENT_KEYS order); its ``key`` is the first one.

    Orders have no invoice type, pass ``include_invoice_type=False`` for them.
    """
    keys = [k for k in REQUIRED_DOCUMENT_KEYS if include_invoice_type or k != "invoice_type"]
    values = {key: config.get(key) for key in keys}

    missing = [key for key in keys if _is_empty(values[key])]
    if missing:
        raise ConfigurationMissing(missing[0], missing)

    return DocumentDefaults(
        tax_rate=values["tax_rate"],
        tax_text=values["tax_text"],
        tax_type=values["tax_type"],
        currency=values["currency"],
        sev_user_id=values["sev_user_id"],
        invoice_type=values.get("invoice_type"),
    )
