from __future__ import annotations

import pytest
import requests

from sevdesk import (
    RemoteGenericError,
    RemoteNotFound,
    RemoteUnauthorized,
    SequenceResolver,
    TransportFailure,
)
from sevdesk.sevdesk_client import flatten_query

from tests.helpers import FakeGateway, make_response, sent


class TestFlattenQuery:

    def test_flat_params_pass_through(self) -> None:
        assert flatten_query({"status": 100, "limit": 10}) == [("status", 100), ("limit", 10)]

    def test_nested_maps_use_brackets(self) -> None:
        params = {"contact": {"id": 5, "objectName": "Contact"}, "depth": 0}

        assert flatten_query(params) == [
            ("contact[id]", 5),
            ("contact[objectName]", "Contact"),
            ("depth", 0),
        ]

    def test_lists_are_indexed(self) -> None:
        assert flatten_query({"ids": [3, 4]}) == [("ids[0]", 3), ("ids[1]", 4)]

    def test_booleans_and_none(self) -> None:
        assert flatten_query({"preventSendBy": True, "countAll": False, "skip": None}) == [
            ("preventSendBy", "true"),
            ("countAll", "false"),
        ]

    def test_empty(self) -> None:
        assert flatten_query(None) == []


class TestCall:

    def test_token_is_sent_as_header(self, client) -> None:
        assert client.session.headers["Authorization"] == "secret-token"
        assert client.session.headers["Accept"] == "application/json"

    def test_get_sends_query(self, client, session) -> None:
        session.request.return_value = make_response(body={"objects": []})

        result = client.get("Contact", {"category": {"id": 3, "objectName": "Category"}})

        assert result == {"objects": []}
        kwargs = sent(session)
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == "https://my.sevdesk.de/api/v1/Contact"
        assert kwargs["params"] == [("category[id]", 3), ("category[objectName]", "Category")]
        assert kwargs["json"] is None
        assert kwargs["timeout"] == 30.0

    def test_post_sends_json_body(self, client, session) -> None:
        session.request.return_value = make_response(body={"objects": {"id": "1"}})

        client.post("Contact", {"name": "ACME GmbH", "category": {"id": 3, "objectName": "Category"}})

        kwargs = sent(session)
        assert kwargs["method"] == "POST"
        assert kwargs["params"] is None
        assert kwargs["json"] == {"name": "ACME GmbH", "category": {"id": 3, "objectName": "Category"}}

    @pytest.mark.parametrize("method", ["put", "patch"])
    def test_update_methods_send_json(self, client, session, method) -> None:
        session.request.return_value = make_response(body={"objects": {}})

        getattr(client, method)("Invoice/5", {"status": 200})

        assert sent(session)["method"] == method.upper()
        assert sent(session)["json"] == {"status": 200}

    def test_delete_uses_query(self, client, session) -> None:
        session.request.return_value = make_response(body={"objects": [None]})

        client.delete("Contact/5")

        assert sent(session)["method"] == "DELETE"
        assert sent(session)["url"].endswith("/api/v1/Contact/5")
        assert sent(session)["json"] is None

    def test_empty_body_returns_empty_dict(self, client, session) -> None:
        session.request.return_value = make_response(body=None)

        assert client.delete("Contact/5") == {}

    def test_unknown_method_is_rejected(self, client) -> None:
        with pytest.raises(ValueError):
            client.call("TRACE", "Contact")

    def test_invalid_json_is_transport_failure(self, client, session) -> None:
        session.request.return_value = make_response(raw=b"<html>")

        with pytest.raises(TransportFailure):
            client.get("Contact")


class TestErrorClassification:

    def test_code_151_is_not_found(self, client, session) -> None:
        session.request.return_value = make_response(
            400, {"error": {"code": 151, "message": "Contact with id 5 not found"}}
        )

        with pytest.raises(RemoteNotFound) as excinfo:
            client.get("Contact/5")

        assert excinfo.value.message == "Contact with id 5 not found"
        assert excinfo.value.code == 151
        assert excinfo.value.status_code == 400

    def test_error_message_is_generic_error(self, client, session) -> None:
        session.request.return_value = make_response(
            422, {"error": {"code": 14, "message": "Invalid field invoiceDate"}}
        )

        with pytest.raises(RemoteGenericError, match="Invalid field invoiceDate"):
            client.post("Invoice/Factory/saveInvoice", {})

    def test_status_401_in_body_is_unauthorized(self, client, session) -> None:
        session.request.return_value = make_response(401, {"status": 401, "message": "Authentication required"})

        with pytest.raises(RemoteUnauthorized, match="Authentication required"):
            client.get("Contact")

    def test_http_401_without_body_is_unauthorized(self, client, session) -> None:
        session.request.return_value = make_response(401, raw=b"")

        with pytest.raises(RemoteUnauthorized):
            client.get("Contact")

    def test_unclassified_error(self, client, session) -> None:
        session.request.return_value = make_response(500, raw=b"Internal Server Error")

        with pytest.raises(TransportFailure, match="Something went wrong."):
            client.get("Contact")

    def test_error_without_message_falls_through(self, client, session) -> None:
        session.request.return_value = make_response(400, {"error": {"code": 3, "message": None}})

        with pytest.raises(TransportFailure):
            client.get("Contact")

    def test_connection_error(self, client, session) -> None:
        session.request.side_effect = requests.exceptions.ConnectionError("connection refused")

        with pytest.raises(TransportFailure, match="connection refused"):
            client.get("Contact")


class TestSequenceResolver:

    def test_placeholder_is_replaced(self) -> None:
        gateway = FakeGateway({"objects": {"nextSequence": 1042, "format": "RE-%NUMBER"}})

        number = SequenceResolver(gateway).next_number("Invoice", "RE")

        assert number == "RE-1042"
        assert gateway.calls == [
            ("GET", "SevSequence/Factory/getByType", {"objectType": "Invoice", "type": "RE"})
        ]

    def test_format_without_placeholder(self) -> None:
        gateway = FakeGateway({"objects": {"nextSequence": 7, "format": "AN-2024"}})

        assert SequenceResolver(gateway).next_number("Order", "AN") == "AN-2024"

    def test_gateway_errors_propagate(self) -> None:
        gateway = FakeGateway(RemoteUnauthorized("Authentication required", 401))

        with pytest.raises(RemoteUnauthorized):
            SequenceResolver(gateway).next_number("Invoice", "RE")

    def test_next_order_number(self) -> None:
        gateway = FakeGateway({"objects": "AN-1001"})

        assert SequenceResolver(gateway).next_order_number("AN", True) == "AN-1001"
        assert gateway.calls == [
            ("GET", "Order/Factory/getNextOrderNumber", {"orderType": "AN", "useNextNumber": True})
        ]

    def test_works_over_real_client(self, client, session) -> None:
        session.request.return_value = make_response(body={"objects": {"nextSequence": 3, "format": "%NUMBER/24"}})

        assert SequenceResolver(client).next_number("Invoice", "RE") == "3/24"
        assert sent(session)["params"] == [("objectType", "Invoice"), ("type", "RE")]
