# tests/test_providers.py
"""
Provider Tests - Unit Tests for the Bundesbank Fetcher

This module contains unit tests for BundesbankFetcher, including URL
construction, request headers, and the mapping of HTTP errors, timeouts
and empty bodies to FetchError.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- eurofx.adapters.providers.bundesbank (BundesbankFetcher)
- eurofx.domain.errors (FetchError)
- unittest.mock (Mock for HTTP session mocking)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock, patch  # Mock objects and patching for testing without real API calls
import requests  # HTTP library (used for mocking responses)

from eurofx.adapters.providers.bundesbank import BundesbankFetcher
from eurofx.domain.errors import FetchError


def _response(status_code=200, text="TIME_PERIOD,OBS_VALUE\n2024-01-15,1.0850\n"):
    resp = Mock()
    resp.status_code = status_code
    resp.text = text
    return resp


class TestBundesbankFetcherInit:
    def test_init_with_defaults(self):
        fetcher = BundesbankFetcher()
        assert fetcher.base_url == "https://api.statistiken.bundesbank.de/rest/data"
        assert fetcher.series_id == "BBEX3"
        assert fetcher.timeout == 30

    def test_init_with_custom_params(self):
        fetcher = BundesbankFetcher(base_url="http://test.com/rest/", series_id="BBEX9", timeout=5)
        assert fetcher.base_url == "http://test.com/rest"
        assert fetcher.series_id == "BBEX9"
        assert fetcher.timeout == 5

    def test_build_url(self):
        fetcher = BundesbankFetcher(base_url="http://test.com/rest")
        assert fetcher.build_url(" usd ") == "http://test.com/rest/BBEX3/D.USD.EUR.BB.AC.000"

    def test_build_url_from_settings(self):
        with patch("eurofx.adapters.providers.bundesbank.settings") as mock_settings:
            mock_settings.bundesbank_base_url = "http://mirror.test/data"
            mock_settings.bundesbank_series_id = "BBEX7"
            mock_settings.http_timeout_seconds = 10
            fetcher = BundesbankFetcher(session=Mock())

        assert fetcher.build_url("GBP") == "http://mirror.test/data/BBEX7/D.GBP.EUR.BB.AC.000"


class TestBundesbankFetch:
    def test_fetch_success(self):
        session = Mock()
        session.get.return_value = _response()
        fetcher = BundesbankFetcher(base_url="http://test.com", timeout=7, session=session)

        body = fetcher.fetch("gbp")

        assert body.startswith("TIME_PERIOD")
        session.get.assert_called_once_with(
            "http://test.com/BBEX3/D.GBP.EUR.BB.AC.000",
            headers={"Accept": "text/csv"},
            timeout=7,
        )

    @patch("eurofx.adapters.providers.bundesbank.requests.Session.get")
    def test_fetch_uses_requests_session(self, mock_get):
        mock_get.return_value = _response()

        BundesbankFetcher().fetch("USD")

        mock_get.assert_called_once()

    @pytest.mark.parametrize("status", [301, 404, 500, 503])
    def test_fetch_non_2xx(self, status):
        session = Mock()
        session.get.return_value = _response(status_code=status, text="error")
        fetcher = BundesbankFetcher(session=session)

        with pytest.raises(FetchError, match=f"HTTP {status}") as exc_info:
            fetcher.fetch("USD")

        assert exc_info.value.currency_code == "USD"
        assert exc_info.value.status_code == status

    def test_fetch_timeout(self):
        session = Mock()
        session.get.side_effect = requests.exceptions.Timeout("read timed out")
        fetcher = BundesbankFetcher(session=session, timeout=3)

        with pytest.raises(FetchError, match="timeout after 3s"):
            fetcher.fetch("USD")

    def test_fetch_network_error(self):
        session = Mock()
        session.get.side_effect = requests.exceptions.ConnectionError("connection refused")
        fetcher = BundesbankFetcher(session=session)

        with pytest.raises(FetchError, match="request failed"):
            fetcher.fetch("USD")

    @pytest.mark.parametrize("text", ["", "   \n"])
    def test_fetch_empty_body(self, text):
        session = Mock()
        session.get.return_value = _response(text=text)
        fetcher = BundesbankFetcher(session=session)

        with pytest.raises(FetchError, match="empty body"):
            fetcher.fetch("USD")

    def test_close(self):
        session = Mock()
        BundesbankFetcher(session=session).close()
        session.close.assert_called_once()
