# File: tests/clients/test_sizing_api_client.py
"""Tests for the Python API client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from clients.python.sizing_api_client import SanitarySizingClient

CLIENT_MODULE = "clients.python.sizing_api_client.requests"


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return response


@pytest.fixture
def client():
    return SanitarySizingClient("http://localhost:8000/", "dev_key", timeout=5)


class TestClientSetup:
    def test_base_url_trailing_slash_removed(self, client):
        assert client.base_url == "http://localhost:8000"

    def test_api_key_header(self, client):
        assert client.headers == {"X-API-Key": "dev_key"}


class TestCheckConnection:
    """Health endpoint probing."""

    @patch(CLIENT_MODULE + ".get")
    def test_success(self, mock_get, client):
        mock_get.return_value = _response(200)
        assert client.check_connection() == (True, "Connection successful")
        mock_get.assert_called_once_with(
            "http://localhost:8000/health",
            headers={"X-API-Key": "dev_key"},
            timeout=5,
        )

    @patch(CLIENT_MODULE + ".get")
    def test_bad_status(self, mock_get, client):
        mock_get.return_value = _response(503)
        ok, message = client.check_connection()
        assert not ok
        assert "503" in message

    @patch(CLIENT_MODULE + ".get")
    def test_connection_error(self, mock_get, client):
        mock_get.side_effect = requests.ConnectionError("refused")
        ok, message = client.check_connection()
        assert not ok
        assert "refused" in message


class TestSizeSegments:
    """POST /sizing/size."""

    @patch(CLIENT_MODULE + ".post")
    def test_payload(self, mock_post, client):
        mock_post.return_value = _response(200, {"count_sized": 1})
        segments = [{"id": "s1", "endpoint_a": [0, 0, 1], "endpoint_b": [0, 0, 0], "load_units": 4}]

        result = client.size_segments(segments, config={"length_units": "inches"})

        assert result == {"count_sized": 1}
        _, kwargs = mock_post.call_args
        assert mock_post.call_args[0][0] == "http://localhost:8000/sizing/size"
        assert kwargs["json"] == {"segments": segments, "config": {"length_units": "inches"}}

    @patch(CLIENT_MODULE + ".post")
    def test_config_omitted(self, mock_post, client):
        mock_post.return_value = _response(200, {"count_sized": 0})
        client.size_segments([])
        assert mock_post.call_args[1]["json"] == {"segments": []}

    @patch(CLIENT_MODULE + ".post")
    def test_http_error_raised(self, mock_post, client):
        mock_post.return_value = _response(401)
        with pytest.raises(requests.HTTPError):
            client.size_segments([])


class TestGetTables:
    @patch(CLIENT_MODULE + ".get")
    def test_get_tables(self, mock_get, client):
        mock_get.return_value = _response(200, {"length_units": "feet"})
        assert client.get_tables() == {"length_units": "feet"}
        assert mock_get.call_args[0][0] == "http://localhost:8000/sizing/tables"
