"""sevdesk API client.

sevdesk is a German accounting SaaS. This module holds the HTTP side of the
library: the authenticated session, error classification and the document
number sequences. Resource specific calls live in the contacts, invoices,
orders and text_templates modules and all go through ``SevdeskClient.call``.

API Reference: https://api.sevdesk.de/
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, TYPE_CHECKING

import requests

from .config import SevdeskSettings, get_settings
from .errors import (
    ConfigurationMissing,
    RemoteGenericError,
    RemoteNotFound,
    RemoteUnauthorized,
    TransportFailure,
)

if TYPE_CHECKING:
    from .contacts import ContactApi
    from .invoices import InvoiceApi
    from .orders import OrderApi
    from .text_templates import TextTemplateApi

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30.0
API_PREFIX = "/api/v1/"
HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

# sevdesk error code for "object not found"
ERROR_CODE_NOT_FOUND = 151
GENERIC_ERROR_MESSAGE = "Something went wrong."


class Routes:
    """API paths relative to /api/v1/."""
    CONTACT = "Contact"
    INVOICE = "Invoice"
    CREATE_INVOICE = "Invoice/Factory/saveInvoice"
    ORDER = "Order"
    CREATE_ORDER = "Order/Factory/saveOrder"
    NEXT_ORDER_NUMBER = "Order/Factory/getNextOrderNumber"
    SEQUENCE = "SevSequence/Factory/getByType"
    TEXT_TEMPLATE = "TextTemplate"


class ObjectType:
    """Object types known to the sequence endpoint."""
    INVOICE = "Invoice"
    CREDIT_NOTE = "CreditNote"
    ORDER = "Order"


class Country:
    """StaticCountry ids."""
    GERMANY = 1


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def flatten_query(params: Optional[Mapping[str, Any]], prefix: str = "") -> List[Tuple[str, Any]]:
    """Flatten nested query parameters into bracket notation.

    sevdesk filters by related objects with keys like ``contact[id]``:

        >>> flatten_query({"contact": {"id": 5, "objectName": "Contact"}})
        [('contact[id]', 5), ('contact[objectName]', 'Contact')]
    """
    pairs: List[Tuple[str, Any]] = []
    for key, value in (params or {}).items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if isinstance(value, Mapping):
            pairs.extend(flatten_query(value, name))
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                if isinstance(item, Mapping):
                    pairs.extend(flatten_query(item, f"{name}[{index}]"))
                else:
                    pairs.append((f"{name}[{index}]", _query_value(item)))
        elif value is not None:
            pairs.append((name, _query_value(value)))
    return pairs


class SevdeskClient:
    """Remote call gateway for the sevdesk API.

    Usage:
        client = SevdeskClient.from_settings()
        invoices = client.invoices.all_open()
        contact = client.contacts.get(12345)
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = "https://my.sevdesk.de",
        timeout: float = REQUEST_TIMEOUT,
        settings: Optional[SevdeskSettings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize client with API token.

        Args:
            api_token: sevdesk API token from Settings > Users
            base_url: API host, without the /api/v1 prefix
            timeout: Per request timeout in seconds
            settings: Document defaults source for invoices/orders
            session: Pre-configured requests session (tests, proxies)
        """
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": api_token,
            "Accept": "application/json",
        })

    @classmethod
    def from_settings(cls, settings: Optional[SevdeskSettings] = None) -> "SevdeskClient":
        """Create client from SEVDESK_* settings.

        Args:
            settings: Settings instance. Defaults to the cached environment settings.
        """
        settings = settings or get_settings()
        if not settings.api_token:
            raise ConfigurationMissing("api_token")
        return cls(
            api_token=settings.api_token,
            base_url=settings.base_url,
            timeout=settings.request_timeout,
            settings=settings,
        )

    # ==================== RESOURCES ====================

    @property
    def contacts(self) -> "ContactApi":
        from .contacts import ContactApi
        return ContactApi(self)

    @property
    def invoices(self) -> "InvoiceApi":
        from .invoices import InvoiceApi
        return InvoiceApi(self, self._document_config())

    @property
    def orders(self) -> "OrderApi":
        from .orders import OrderApi
        return OrderApi(self, self._document_config())

    @property
    def text_templates(self) -> "TextTemplateApi":
        from .text_templates import TextTemplateApi
        return TextTemplateApi(self)

    def _document_config(self) -> SevdeskSettings:
        return self.settings or get_settings()

    # ==================== TRANSPORT ====================

    def call(
        self,
        method: str,
        path: str,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Execute an API call and return the decoded JSON body.

        GET and DELETE parameters are sent as query string, everything else
        as JSON body.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            path: API path relative to /api/v1/ (e.g. Invoice/123)
            parameters: Query parameters or request body

        Raises:
            RemoteNotFound: sevdesk reported error code 151
            RemoteUnauthorized: the token was rejected
            RemoteGenericError: sevdesk returned an error message
            TransportFailure: connection problems or unclassified errors
        """
        method = method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = f"{self.base_url}{API_PREFIX}{path.lstrip('/')}"
        params = None
        json_data = None
        if method in ("GET", "DELETE"):
            params = flatten_query(parameters)
        else:
            json_data = dict(parameters or {})

        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"Request to sevdesk failed: {e}")
            raise TransportFailure(str(e)) from e

        if not response.ok:
            self._raise_for_response(response)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise TransportFailure(f"Invalid JSON in response from {path}", response.status_code) from e

    def _raise_for_response(self, response: requests.Response) -> None:
        """Translate an error response into a typed exception."""
        status_code = response.status_code
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                code = error.get("code")
                message = error.get("message")
                if code == ERROR_CODE_NOT_FOUND:
                    logger.warning(f"sevdesk object not found: {message}")
                    raise RemoteNotFound(message or "Object not found", status_code, code)
                if message:
                    logger.warning(f"sevdesk error {code}: {message}")
                    raise RemoteGenericError(message, status_code, code)
            if body.get("status") == 401:
                raise RemoteUnauthorized(body.get("message") or "Unauthorized", status_code)

        if status_code == 401:
            raise RemoteUnauthorized("Unauthorized", status_code)

        logger.warning(f"Unclassified sevdesk error response: HTTP {status_code}")
        raise TransportFailure(GENERIC_ERROR_MESSAGE, status_code)

    def get(self, path: str, parameters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.call("GET", path, parameters)

    def post(self, path: str, parameters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.call("POST", path, parameters)

    def put(self, path: str, parameters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.call("PUT", path, parameters)

    def patch(self, path: str, parameters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.call("PATCH", path, parameters)

    def delete(self, path: str, parameters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.call("DELETE", path, parameters)


class SequenceResolver:
    """Looks up the next free document number.

    Works with anything exposing ``call(method, path, parameters)``.
    """

    PLACEHOLDER = "%NUMBER"

    def __init__(self, gateway: Any) -> None:
        self.gateway = gateway

    def next_number(self, object_type: str, document_subtype: str) -> str:
        """Return the formatted next number, e.g. ``RE-1042``.

        Args:
            object_type: ObjectType.INVOICE, ObjectType.ORDER, ...
            document_subtype: Invoice type (RE, ...) or order type (AN, AB, LI)
        """
        response = self.gateway.call(
            "GET", Routes.SEQUENCE, {"objectType": object_type, "type": document_subtype}
        )
        sequence = response["objects"]
        number = str(sequence["format"]).replace(self.PLACEHOLDER, str(sequence["nextSequence"]))
        logger.debug(f"Next {object_type}/{document_subtype} number: {number}")
        return number

    def next_order_number(self, order_type: str, use_next_number: bool = False) -> Any:
        """Return the next order number as computed by the order factory."""
        response = self.gateway.call(
            "GET",
            Routes.NEXT_ORDER_NUMBER,
            {"orderType": order_type, "useNextNumber": use_next_number},
        )
        return response["objects"]
