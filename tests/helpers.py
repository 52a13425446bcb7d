"""Shared test doubles for the sevdesk client tests."""

from __future__ import annotations

from datetime import datetime
from unittest.mock import MagicMock

import requests

FIXED_NOW = datetime(2024, 3, 15, 10, 30, 0)

DOCUMENT_CONFIG = {
    "tax_rate": 19,
    "tax_text": "Umsatzsteuer 19%",
    "tax_type": "default",
    "invoice_type": "RE",
    "currency": "EUR",
    "sev_user_id": 777,
}

SEQUENCE_RESPONSE = {"objects": {"nextSequence": 1042, "format": "RE-%NUMBER"}}


def make_response(status_code: int = 200, body=None, raw: bytes = None) -> MagicMock:
    """Fake requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    if raw is not None:
        response.content = raw
        response.json.side_effect = ValueError("No JSON object could be decoded")
    elif body is None:
        response.content = b""
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.content = b"{...}"
        response.json.return_value = body
    return response


class FakeGateway:
    """Records calls and answers from a queue of canned results."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def call(self, method, path, parameters=None):
        self.calls.append((method, path, parameters))
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def sent(session: MagicMock, index: int = -1) -> dict:
    """Keyword arguments of a recorded session.request call."""
    return session.request.call_args_list[index].kwargs
