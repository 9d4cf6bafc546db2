from __future__ import annotations

from typing import Any, Dict, List, Optional
import requests

from careerpath.core.jobs_schema import ExternalJobRecord
from careerpath.core.jobs_utils import (
    COMPANY_UNAVAILABLE,
    SALARY_NOT_DISCLOSED,
    UNTITLED,
    clean_description,
    format_salary,
    is_remote_location,
    text_or,
    url_or_none,
)


JOOBLE_BASE = "https://jooble.org/api"


def fetch_jooble_jobs(
    *,
    api_key: str,
    keywords: str,
    location: Optional[str] = None,
    timeout: int = 10,
) -> Dict[str, Any]:
    """
    Jooble REST API. The key goes in the path; the search is a JSON POST body.
    Returns raw JSON dict with the postings under 'jobs'.
    """
    body: Dict[str, Any] = {
        "keywords": keywords,
        "location": location or "",
    }
    r = requests.post(f"{JOOBLE_BASE}/{api_key}", json=body, timeout=timeout)
    r.raise_for_status()
    return r.json()


def _name(value: Any) -> Optional[str]:
    # Jooble has shipped both {"name": ...} objects and plain strings here
    if isinstance(value, dict):
        return value.get("name")
    return value


def _jooble_salary(job: Dict[str, Any]) -> str:
    salary = (job.get("salary") or "").strip() if isinstance(job.get("salary"), str) else ""
    if salary:
        return salary
    estimated = job.get("estimated_salary")
    if estimated:
        return format_salary(estimated, None)
    return SALARY_NOT_DISCLOSED


def normalize_jooble_payload(payload: Dict[str, Any]) -> List[ExternalJobRecord]:
    jobs = payload.get("jobs") if isinstance(payload, dict) else None
    if not isinstance(jobs, list):
        return []

    out: List[ExternalJobRecord] = []
    for idx, j in enumerate(jobs):
        if not isinstance(j, dict):
            continue

        native_id = j.get("uid") or j.get("id") or idx
        location = text_or(_name(j.get("location")), "Location Not Specified")
        if j.get("is_remote_job") and not is_remote_location(location):
            location = f"{location} (Remote)"

        out.append(
            ExternalJobRecord(
                id=f"jooble-{native_id}",
                title=text_or(j.get("title") or j.get("position"), UNTITLED),
                company=text_or(_name(j.get("company")), COMPANY_UNAVAILABLE),
                location=location,
                salary=_jooble_salary(j),
                description=clean_description(j.get("snippet") or j.get("content")),
                source="jooble",
                apply_url=url_or_none(j.get("link"), j.get("url")),
            )
        )

    return out
