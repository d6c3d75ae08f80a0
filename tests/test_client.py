"""
Tests for the GraphQL client
"""

from unittest.mock import MagicMock

import pytest
import requests

from dato_hugo.client import DatoApiError, DatoClient


def _session(body, status_error=None):
    session = MagicMock()
    session.headers = {}
    response = session.post.return_value
    response.json.return_value = body
    if status_error:
        response.raise_for_status.side_effect = status_error
    return session


def test_headers():
    session = _session({"data": {}})

    DatoClient("token", environment="staging", include_drafts=True, session=session)

    assert session.headers["Authorization"] == "Bearer token"
    assert session.headers["X-Environment"] == "staging"
    assert session.headers["X-Include-Drafts"] == "true"


def test_query_returns_data():
    session = _session({"data": {"home": {"introText": "hi"}}})
    client = DatoClient("token", api_url="https://graphql.example/", session=session)

    data = client.query("{ home { introText } }", {"locale": "en"})

    assert data == {"home": {"introText": "hi"}}
    session.post.assert_called_once_with(
        "https://graphql.example/",
        json={"query": "{ home { introText } }", "variables": {"locale": "en"}},
        timeout=30.0,
    )


def test_graphql_errors_raise():
    session = _session({"errors": [{"message": "Field 'x' doesn't exist"}]})
    client = DatoClient("token", session=session)

    with pytest.raises(DatoApiError) as excinfo:
        client.query("{ x }")

    assert "Field 'x' doesn't exist" in str(excinfo.value)
    assert excinfo.value.errors == [{"message": "Field 'x' doesn't exist"}]


def test_http_errors_propagate():
    session = _session({}, status_error=requests.HTTPError("401 Unauthorized"))
    client = DatoClient("token", session=session)

    with pytest.raises(requests.HTTPError):
        client.query("{ home { introText } }")


def test_context_manager_closes_session():
    session = _session({"data": {}})

    with DatoClient("token", session=session):
        pass

    session.close.assert_called_once()
