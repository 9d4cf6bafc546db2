"""
Job sources: one per external provider, all exposing the same capability.

    source.search(query, location=None) -> List[ExternalJobRecord]

A source never raises. Missing credentials, timeouts, HTTP errors, malformed
JSON and quota messages are logged and turned into that source's fallback
(a LinkedIn search link for JSearch, an empty list for everyone else).
Credentials come from ProviderSettings at construction time.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Callable, List, Optional, Protocol

import requests

from careerpath.connectors.adzuna import fetch_adzuna_jobs
from careerpath.connectors.adzuna_normalize import normalize_adzuna_payload
from careerpath.connectors.arbeitnow import fetch_arbeitnow_jobs, normalize_arbeitnow_payload
from careerpath.connectors.jooble import fetch_jooble_jobs, normalize_jooble_payload
from careerpath.connectors.jsearch import fetch_jsearch_jobs
from careerpath.connectors.jsearch_normalize import normalize_jsearch_payload
from careerpath.connectors.remoteok import fetch_remoteok_jobs, normalize_remoteok_jobs
from careerpath.core import logger as log
from careerpath.core.config import ProviderSettings
from careerpath.core.errors import QuotaExceededError, SourceError
from careerpath.core.jobs_schema import ExternalJobRecord
from careerpath.core.search_links import (
    linkedin_india_search_link,
    linkedin_search_link,
    naukri_search_link,
)


Records = List[ExternalJobRecord]


class JobSource(Protocol):
    source_name: str

    def search(self, query: str, location: Optional[str] = None) -> Records:
        ...


def _no_results() -> Records:
    return []


def call_with_deadline(run: Callable[[], Records], seconds: Optional[float]) -> Records:
    """
    Run one provider call on a worker thread and stop waiting after `seconds`.

    The requests timeout bounds each socket read, not the whole response, so a
    provider that trickles its body would otherwise hold the search open.
    The abandoned worker is left to finish on its own.
    """
    if not seconds:
        return run()

    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="source-call")
    try:
        return pool.submit(run).result(timeout=seconds)
    except FuturesTimeoutError:
        raise requests.Timeout(f"no complete response within {seconds}s") from None
    finally:
        pool.shutdown(wait=False)


def soft_search(
    source_name: str,
    run: Callable[[], Records],
    query: str,
    fallback: Callable[[], Records] = _no_results,
    fallback_on_empty: bool = False,
    deadline: Optional[float] = None,
) -> Records:
    """
    Run one fetch+normalize call and map every provider failure to the fallback.
    `deadline` caps the whole call in seconds, body download included.
    """
    try:
        records = call_with_deadline(run, deadline)
    except requests.Timeout:
        log.warning(f"{source_name} request timed out")
        return fallback()
    except QuotaExceededError as e:
        log.warning(f"{source_name} quota exceeded: {e.message}")
        return fallback()
    except SourceError as e:
        log.warning(f"{source_name} unavailable: {e.message}")
        return fallback()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        log.warning(f"{source_name} API error: {status}")
        return fallback()
    except requests.exceptions.JSONDecodeError as e:
        log.warning(f"{source_name} returned malformed JSON: {e}")
        return fallback()
    except requests.RequestException as e:
        log.warning(f"{source_name} request failed: {e}")
        return fallback()
    except (ValueError, TypeError, AttributeError, KeyError) as e:
        # unexpected payload shape (incl. pydantic ValidationError)
        log.warning(f"{source_name} payload could not be normalized: {e}")
        return fallback()

    if not records and fallback_on_empty:
        log.info(f"{source_name} returned no data for query: {query}")
        return fallback()

    log.info(f"{source_name} found {len(records)} jobs for query: {query}")
    return records


class JSearchSource:
    """JSearch (Google Jobs aggregation via RapidAPI). Falls back to a LinkedIn search link."""

    source_name = "jsearch"

    def __init__(self, settings: ProviderSettings):
        self.api_key = settings.jsearch_api_key
        self.host = settings.jsearch_host
        self.timeout = settings.jsearch_timeout

    def search(self, query: str, location: Optional[str] = None) -> Records:
        def fallback() -> Records:
            return linkedin_search_link(query, location)

        if not self.api_key:
            log.warning("JSearch API key not configured - providing LinkedIn search link")
            return fallback()

        # location is left out of the query on purpose; filtering happens after aggregation
        def run() -> Records:
            payload = fetch_jsearch_jobs(
                query=query,
                rapidapi_key=self.api_key,
                host=self.host,
                timeout=self.timeout,
            )
            return normalize_jsearch_payload(payload)

        return soft_search(
            self.source_name,
            run,
            query,
            fallback=fallback,
            fallback_on_empty=True,
            deadline=self.timeout,
        )


class ArbeitnowSource:
    source_name = "arbeitnow"

    def __init__(self, settings: ProviderSettings):
        self.timeout = settings.source_timeout

    def search(self, query: str, location: Optional[str] = None) -> Records:
        def run() -> Records:
            return normalize_arbeitnow_payload(fetch_arbeitnow_jobs(query=query, timeout=self.timeout))

        return soft_search(self.source_name, run, query, deadline=self.timeout)


class RemoteOKSource:
    source_name = "remoteok"

    def __init__(self, settings: ProviderSettings):
        self.timeout = settings.source_timeout

    def search(self, query: str, location: Optional[str] = None) -> Records:
        def run() -> Records:
            return normalize_remoteok_jobs(fetch_remoteok_jobs(timeout=self.timeout), query)

        return soft_search(self.source_name, run, query, deadline=self.timeout)


class AdzunaSource:
    source_name = "adzuna"

    def __init__(self, settings: ProviderSettings):
        self.app_id = settings.adzuna_app_id
        self.app_key = settings.adzuna_app_key
        self.country = settings.adzuna_country
        self.timeout = settings.source_timeout

    def search(self, query: str, location: Optional[str] = None) -> Records:
        if not (self.app_id and self.app_key):
            log.warning("Adzuna API credentials not configured")
            return []

        def run() -> Records:
            payload = fetch_adzuna_jobs(
                country=self.country,
                app_id=self.app_id,
                app_key=self.app_key,
                what=query,
                timeout=self.timeout,
            )
            return normalize_adzuna_payload(payload, self.country)

        return soft_search(self.source_name, run, query, deadline=self.timeout)


class JoobleSource:
    source_name = "jooble"

    def __init__(self, settings: ProviderSettings):
        self.api_key = settings.jooble_api_key
        self.timeout = settings.source_timeout

    def search(self, query: str, location: Optional[str] = None) -> Records:
        if not self.api_key:
            log.warning("Jooble API key not configured")
            return []

        def run() -> Records:
            payload = fetch_jooble_jobs(
                api_key=self.api_key,
                keywords=query,
                location=location,
                timeout=self.timeout,
            )
            return normalize_jooble_payload(payload)

        return soft_search(self.source_name, run, query, deadline=self.timeout)


class IndiaSearchLinksSource:
    """
    Naukri + LinkedIn India search links for India-located searches.
    Opt-in via ProviderSettings.india_search_links; no network I/O.
    """

    source_name = "india-links"

    def search(self, query: str, location: Optional[str] = None) -> Records:
        if "india" not in (location or "").lower():
            return []
        return [naukri_search_link(query), linkedin_india_search_link(query)]


def build_sources(settings: Optional[ProviderSettings] = None) -> List[JobSource]:
    settings = settings or ProviderSettings.from_env()

    sources: List[JobSource] = [
        JSearchSource(settings),
        ArbeitnowSource(settings),
        RemoteOKSource(settings),
        AdzunaSource(settings),
        JoobleSource(settings),
    ]
    if settings.india_search_links:
        sources.append(IndiaSearchLinksSource())
    return sources
