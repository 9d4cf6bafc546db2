from __future__ import annotations

from typing import Any, Dict, List
import requests

from careerpath.core.jobs_schema import ExternalJobRecord
from careerpath.core.jobs_utils import (
    COMPANY_UNAVAILABLE,
    SALARY_NOT_DISCLOSED,
    UNTITLED,
    clean_description,
    is_remote_location,
    text_or,
    url_or_none,
)


ARBEITNOW_URL = "https://www.arbeitnow.com/api/job-board-api"


def fetch_arbeitnow_jobs(*, query: str, timeout: int = 10) -> Dict[str, Any]:
    """
    Arbeitnow job board API (Europe + remote, no auth).
    Returns raw JSON dict with the postings under 'data'.
    """
    r = requests.get(ARBEITNOW_URL, params={"search": query}, timeout=timeout)
    r.raise_for_status()
    return r.json()


def normalize_arbeitnow_payload(payload: Dict[str, Any]) -> List[ExternalJobRecord]:
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        return []

    out: List[ExternalJobRecord] = []
    for idx, j in enumerate(data):
        if not isinstance(j, dict):
            continue

        location = text_or(j.get("location"), "Europe")
        if j.get("remote") and not is_remote_location(location):
            location = f"{location} (Remote)"

        out.append(
            ExternalJobRecord(
                id=f"arbeitnow-{j.get('slug') or idx}",
                title=text_or(j.get("title"), UNTITLED),
                company=text_or(j.get("company_name"), COMPANY_UNAVAILABLE),
                location=location,
                salary=SALARY_NOT_DISCLOSED,
                description=clean_description(j.get("description")),
                source="arbeitnow",
                apply_url=url_or_none(j.get("url")),
            )
        )

    return out
