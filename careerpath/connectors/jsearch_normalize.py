from __future__ import annotations

from typing import Any, Dict, List, Optional

from careerpath.core.jobs_schema import ExternalJobRecord
from careerpath.core.jobs_utils import (
    COMPANY_UNAVAILABLE,
    UNTITLED,
    clean_description,
    format_salary,
    text_or,
    url_or_none,
)


def _jsearch_location(city: Optional[str], state: Optional[str], country: Optional[str]) -> str:
    city = city.strip() if isinstance(city, str) else ""
    state = state.strip() if isinstance(state, str) else ""
    country = country.strip() if isinstance(country, str) else ""
    if city:
        return f"{city}, {state}" if state else city
    # job_country is usually an ISO code; only a spelled-out name is useful as a location
    if len(country) > 2:
        return country
    return "Remote"


def normalize_jsearch_payload(payload: Dict[str, Any]) -> List[ExternalJobRecord]:
    """
    Normalize JSearch response into ExternalJobRecord list (provider order kept).
    Missing/invalid 'data' yields an empty list.
    """
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        return []

    out: List[ExternalJobRecord] = []
    for idx, it in enumerate(data):
        if not isinstance(it, dict):
            continue

        country = it.get("job_country")
        country = country.strip() if isinstance(country, str) else ""

        out.append(
            ExternalJobRecord(
                id=f"jsearch-{it.get('job_id') or idx}",
                title=text_or(it.get("job_title"), UNTITLED),
                company=text_or(it.get("employer_name"), COMPANY_UNAVAILABLE),
                location=_jsearch_location(it.get("job_city"), it.get("job_state"), country),
                salary=format_salary(
                    it.get("job_min_salary"),
                    it.get("job_max_salary"),
                    it.get("job_salary_currency") or "USD",
                ),
                description=clean_description(it.get("job_description")),
                source="jsearch",
                apply_url=url_or_none(it.get("job_apply_link")),
                country_code=country or None,
            )
        )

    return out
