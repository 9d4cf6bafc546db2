"""
Unit tests for sources.py

Every JobSource.search() must swallow provider failures and return its
fallback: a LinkedIn search link for JSearch, [] for the others.
"""

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import patch

import pytest
import requests

from careerpath.connectors.sources import (
    AdzunaSource,
    ArbeitnowSource,
    IndiaSearchLinksSource,
    JoobleSource,
    JSearchSource,
    RemoteOKSource,
    build_sources,
    call_with_deadline,
)
from careerpath.core.config import ProviderSettings
from careerpath.core.jobs_schema import SEARCH_LINK_COMPANY
from tests.helpers import make_response


def _assert_linkedin_fallback(records, query="React", location=None):
    assert len(records) == 1
    rec = records[0]
    assert rec.company == SEARCH_LINK_COMPANY
    assert rec.apply_url.startswith("https://www.linkedin.com/jobs/search/?keywords=")
    assert query in rec.title
    if location:
        assert rec.location == location


# ---------- JSearch ----------


@patch("careerpath.connectors.jsearch.requests.get")
def test_jsearch_without_key_skips_network(mock_get, bare_settings):
    records = JSearchSource(bare_settings).search("React", "India")
    _assert_linkedin_fallback(records, location="India")
    assert "geoId=102713980" in records[0].apply_url
    mock_get.assert_not_called()


@pytest.mark.parametrize(
    "failure",
    [
        requests.Timeout("timed out"),
        requests.ConnectionError("dns"),
    ],
)
@patch("careerpath.connectors.jsearch.requests.get")
def test_jsearch_network_failures_fall_back(mock_get, failure, full_settings):
    mock_get.side_effect = failure
    _assert_linkedin_fallback(JSearchSource(full_settings).search("React"))


@patch("careerpath.connectors.jsearch.requests.get")
def test_jsearch_http_error_falls_back(mock_get, full_settings):
    mock_get.return_value = make_response({"message": "nope"}, status=403)
    _assert_linkedin_fallback(JSearchSource(full_settings).search("React"))


@patch("careerpath.connectors.jsearch.requests.get")
def test_jsearch_quota_falls_back(mock_get, full_settings):
    mock_get.return_value = make_response({"message": "You have exceeded the DAILY quota"})
    _assert_linkedin_fallback(JSearchSource(full_settings).search("React"))


@patch("careerpath.connectors.jsearch.requests.get")
def test_jsearch_malformed_json_falls_back(mock_get, full_settings):
    mock_get.return_value = make_response(json_error=ValueError("No JSON object could be decoded"))
    _assert_linkedin_fallback(JSearchSource(full_settings).search("React"))


@patch("careerpath.connectors.jsearch.requests.get")
def test_jsearch_empty_results_fall_back(mock_get, full_settings):
    mock_get.return_value = make_response({"status": "OK", "data": []})
    _assert_linkedin_fallback(JSearchSource(full_settings).search("React"))


@patch("careerpath.connectors.jsearch.requests.get")
def test_jsearch_success_returns_real_records(mock_get, full_settings):
    mock_get.return_value = make_response(
        {"data": [{"job_id": "1", "job_title": "React Dev", "employer_name": "Acme", "job_city": "Pune"}]}
    )
    [job] = JSearchSource(full_settings).search("React", "India")
    assert job.id == "jsearch-1"
    assert not job.is_search_link
    # location is not sent to JSearch
    assert "India" not in str(mock_get.call_args)


@patch("careerpath.connectors.jsearch.requests.get")
def test_jsearch_uses_configured_timeout_and_host(mock_get):
    settings = ProviderSettings(jsearch_api_key="k", jsearch_host="alt.host", jsearch_timeout=3)
    mock_get.return_value = make_response({"data": []})
    JSearchSource(settings).search("React")
    args, kwargs = mock_get.call_args
    assert args[0] == "https://alt.host/search"
    assert kwargs["timeout"] == 3


# ---------- sources with an empty fallback ----------


@patch("requests.get")
def test_adzuna_without_credentials_returns_empty(mock_get, bare_settings):
    assert AdzunaSource(bare_settings).search("Nurse") == []
    mock_get.assert_not_called()


@patch("requests.post")
def test_jooble_without_key_returns_empty(mock_post, bare_settings):
    assert JoobleSource(bare_settings).search("Nurse") == []
    mock_post.assert_not_called()


@pytest.mark.parametrize(
    "response",
    [
        make_response(status=500),
        make_response(json_error=requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)),
        make_response({"unexpected": "shape"}),
    ],
)
@patch("requests.get")
def test_get_based_sources_degrade_to_empty(mock_get, response, full_settings):
    mock_get.return_value = response
    assert ArbeitnowSource(full_settings).search("Nurse") == []
    assert RemoteOKSource(full_settings).search("Nurse") == []
    assert AdzunaSource(full_settings).search("Nurse") == []


@patch("requests.get", side_effect=requests.Timeout("slow"))
def test_get_based_sources_timeout_to_empty(mock_get, full_settings):
    assert ArbeitnowSource(full_settings).search("Nurse") == []
    assert RemoteOKSource(full_settings).search("Nurse") == []
    assert AdzunaSource(full_settings).search("Nurse") == []


@patch("requests.post", side_effect=requests.ConnectionError("refused"))
def test_jooble_connection_error_to_empty(mock_post, full_settings):
    assert JoobleSource(full_settings).search("Nurse", "Mumbai") == []


@patch("requests.post")
def test_jooble_sends_location(mock_post, full_settings):
    mock_post.return_value = make_response({"jobs": [{"id": 5, "title": "Nurse", "company": "Fortis"}]})
    [job] = JoobleSource(full_settings).search("Nurse", "Mumbai")
    assert job.id == "jooble-5"
    assert mock_post.call_args.kwargs["json"]["location"] == "Mumbai"


@patch("requests.get")
def test_adzuna_uses_configured_country(mock_get):
    settings = ProviderSettings(adzuna_app_id="i", adzuna_app_key="k", adzuna_country="in")
    mock_get.return_value = make_response({"results": []})
    assert AdzunaSource(settings).search("Nurse") == []
    assert mock_get.call_args.args[0] == "https://api.adzuna.com/v1/api/jobs/in/search/1"


@patch("requests.get")
def test_adzuna_salary_uses_configured_country_currency(mock_get):
    settings = ProviderSettings(adzuna_app_id="i", adzuna_app_key="k", adzuna_country="in")
    mock_get.return_value = make_response(
        {"results": [{"id": 1, "title": "Nurse", "salary_min": 300000, "salary_max": 500000}]}
    )
    [job] = AdzunaSource(settings).search("Nurse")
    assert job.salary == "₹300,000 - ₹500,000"


def test_source_with_invalid_record_degrades(full_settings):
    with patch("requests.get") as mock_get:
        # a numeric description is not something the normalizer can clean
        mock_get.return_value = make_response({"data": [{"slug": "x", "title": "Dev", "description": 123}]})
        assert ArbeitnowSource(full_settings).search("Dev") == []


# ---------- India links ----------


def test_india_links_only_for_india():
    src = IndiaSearchLinksSource()
    assert src.search("Java", "Berlin") == []
    assert src.search("Java", None) == []
    links = src.search("Java", "Bangalore, India")
    assert [r.company for r in links] == ["Naukri.com", "LinkedIn India"]


# ---------- build_sources ----------


def test_build_sources_default_order(bare_settings):
    names = [s.source_name for s in build_sources(bare_settings)]
    assert names == ["jsearch", "arbeitnow", "remoteok", "adzuna", "jooble"]


def test_build_sources_with_india_links():
    names = [s.source_name for s in build_sources(ProviderSettings(india_search_links=True))]
    assert names[-1] == "india-links"


# ---------- wall-clock deadline ----------


class _TrickleHandler(BaseHTTPRequestHandler):
    """Sends a small JSON body one byte at a time."""

    body = b'{"data": []}'
    delay = 0.3

    def do_GET(self):
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(self.body)))
        self.end_headers()
        try:
            for i in range(len(self.body)):
                self.wfile.write(self.body[i:i + 1])
                self.wfile.flush()
                time.sleep(self.delay)
        except OSError:
            pass

    def log_message(self, format, *args):
        pass


@pytest.fixture
def trickle_url(monkeypatch):
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    server = ThreadingHTTPServer(("127.0.0.1", 0), _TrickleHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_port}/api/job-board-api"
    server.shutdown()
    server.server_close()


def test_trickling_body_is_cut_off_at_source_timeout(trickle_url):
    source = ArbeitnowSource(ProviderSettings(source_timeout=1))
    with patch("careerpath.connectors.arbeitnow.ARBEITNOW_URL", trickle_url):
        started = time.monotonic()
        records = source.search("python")
        elapsed = time.monotonic() - started

    assert records == []
    assert elapsed < 2.5


def test_call_with_deadline_raises_requests_timeout():
    def slow():
        time.sleep(1)
        return []

    with pytest.raises(requests.Timeout):
        call_with_deadline(slow, 0.1)


def test_call_with_deadline_passes_results_and_errors_through():
    assert call_with_deadline(lambda: ["ok"], 1) == ["ok"]
    assert call_with_deadline(lambda: ["ok"], None) == ["ok"]

    def broken():
        raise requests.ConnectionError("refused")

    with pytest.raises(requests.ConnectionError):
        call_with_deadline(broken, 1)
