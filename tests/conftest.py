from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from sevdesk import SevdeskClient, SevdeskSettings

from tests.helpers import DOCUMENT_CONFIG


@pytest.fixture
def settings() -> SevdeskSettings:
    return SevdeskSettings(_env_file=None, api_token="secret-token", **DOCUMENT_CONFIG)


@pytest.fixture
def session() -> MagicMock:
    fake = MagicMock(spec=requests.Session)
    fake.headers = {}
    return fake


@pytest.fixture
def client(session, settings) -> SevdeskClient:
    return SevdeskClient(api_token="secret-token", settings=settings, session=session)
