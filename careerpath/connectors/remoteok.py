from __future__ import annotations

from typing import Any, Dict, List
import requests

from careerpath.core.jobs_schema import ExternalJobRecord
from careerpath.core.jobs_utils import (
    COMPANY_UNAVAILABLE,
    UNTITLED,
    clean_description,
    format_salary,
    text_or,
    url_or_none,
)


REMOTEOK_URL = "https://remoteok.com/api"
MAX_REMOTEOK_RESULTS = 10

# RemoteOK rejects requests without a browser-ish User-Agent
_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) CareerPathJobs/1.0",
    "Accept": "application/json",
}


def fetch_remoteok_jobs(*, timeout: int = 10) -> List[Dict[str, Any]]:
    """
    RemoteOK public API. Returns the full feed (a JSON list); there is no
    server-side search, so matching happens in normalize_remoteok_jobs().
    """
    r = requests.get(REMOTEOK_URL, headers=_DEFAULT_HEADERS, timeout=timeout)
    r.raise_for_status()
    return r.json()


def _searchable_text(job: Dict[str, Any]) -> str:
    tags = job.get("tags") or []
    if not isinstance(tags, list):
        tags = []
    return f"{job.get('position') or ''} {job.get('company') or ''} {' '.join(str(t) for t in tags)}".lower()


def normalize_remoteok_jobs(
    feed: Any,
    query: str,
    limit: int = MAX_REMOTEOK_RESULTS,
) -> List[ExternalJobRecord]:
    if not isinstance(feed, list):
        return []

    q = (query or "").strip().lower()
    out: List[ExternalJobRecord] = []

    for j in feed:
        # first element of the feed is a legal notice, not a job
        if not isinstance(j, dict) or "position" not in j:
            continue
        if q not in _searchable_text(j):
            continue

        out.append(
            ExternalJobRecord(
                id=f"remoteok-{j.get('id') or j.get('slug') or len(out)}",
                title=text_or(j.get("position"), UNTITLED),
                company=text_or(j.get("company"), COMPANY_UNAVAILABLE),
                location=text_or(j.get("location"), "Remote"),
                salary=format_salary(j.get("salary_min"), j.get("salary_max")),
                description=clean_description(j.get("description")),
                source="remoteok",
                apply_url=url_or_none(j.get("url"), j.get("apply_url")),
            )
        )
        if len(out) >= limit:
            break

    return out
