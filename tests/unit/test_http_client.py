"""
Unit tests for the requests-based upstream client.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from datalink.clients import HttpUpstreamClient
from datalink.core.exceptions import FetchError
from datalink.core.upstream import FetchRequest


def fake_response(status_code=200, text="[]", headers=None):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.headers = headers or {"Content-Type": "application/json"}
    return response


@pytest.fixture
def client():
    client = HttpUpstreamClient(name="test", max_retries=3, user_agent="datalink-tests")
    yield client
    client.close()


class TestHttpUpstreamClient:
    """Tests for HttpUpstreamClient.fetch."""

    def test_success(self, client):
        with patch.object(client.session, "request", return_value=fake_response(text='[{"a": 1}]')) as mock_request:
            response = client.fetch(FetchRequest(url="https://example.test/items"))

        assert response.status_code == 200
        assert response.json() == [{"a": 1}]
        args, kwargs = mock_request.call_args
        assert args == ("GET", "https://example.test/items")
        assert kwargs["timeout"] == 30

    def test_headers(self, client):
        """Test User-Agent and Content-Type are added without clobbering."""
        request = FetchRequest(
            url="https://example.test/items",
            method="post",
            headers={"Accept": "application/json"},
            body='{"q": 1}',
            content_type="application/json",
        )

        with patch.object(client.session, "request", return_value=fake_response()) as mock_request:
            client.fetch(request)

        args, kwargs = mock_request.call_args
        assert args[0] == "POST"
        assert kwargs["data"] == '{"q": 1}'
        assert kwargs["headers"] == {
            "Accept": "application/json",
            "User-Agent": "datalink-tests",
            "Content-Type": "application/json",
        }

    def test_params_appended(self, client):
        request = FetchRequest(url="https://example.test/items?state=all", params={"page": 2})

        with patch.object(client.session, "request", return_value=fake_response()) as mock_request:
            client.fetch(request)

        assert mock_request.call_args[0][1] == "https://example.test/items?state=all&page=2"

    def test_client_error_not_retried(self, client):
        """Test a 404 fails immediately with its status code."""
        with patch.object(client.session, "request", return_value=fake_response(404)) as mock_request:
            with pytest.raises(FetchError) as exc_info:
                client.fetch(FetchRequest(url="https://example.test/missing"))

        assert exc_info.value.status_code == 404
        assert exc_info.value.url == "https://example.test/missing"
        assert mock_request.call_count == 1

    @patch("datalink.clients.http_client.time.sleep")
    def test_server_error_retried(self, mock_sleep, client):
        """Test 5xx answers are retried with exponential backoff."""
        responses = [fake_response(503), fake_response(502), fake_response(200, text="[1]")]

        with patch.object(client.session, "request", side_effect=responses):
            response = client.fetch(FetchRequest(url="https://example.test/items"))

        assert response.json() == [1]
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]

    @patch("datalink.clients.http_client.time.sleep")
    def test_retries_exhausted(self, mock_sleep, client):
        with patch.object(client.session, "request", return_value=fake_response(500)) as mock_request:
            with pytest.raises(FetchError) as exc_info:
                client.fetch(FetchRequest(url="https://example.test/items"))

        assert mock_request.call_count == 3
        assert exc_info.value.status_code == 500

    @patch("datalink.clients.http_client.time.sleep")
    def test_transport_error(self, mock_sleep, client):
        error = requests.exceptions.ConnectionError("connection refused")

        with patch.object(client.session, "request", side_effect=error):
            with pytest.raises(FetchError) as exc_info:
                client.fetch(FetchRequest(url="https://example.test/items"))

        assert exc_info.value.status_code is None
        assert "connection refused" in str(exc_info.value)

    def test_unsupported_method(self, client):
        with pytest.raises(FetchError):
            client.fetch(FetchRequest(url="https://example.test/items", method="TRACE"))

    def test_get_name(self, client):
        assert client.get_name() == "test"
