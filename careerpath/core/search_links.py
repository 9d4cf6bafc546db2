"""
Synthetic "search link" records.

When a source cannot return real postings we still hand the user something to
click: a manual search URL on a jobs site, with the query (and, when we know
it, the location id) embedded.
"""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import quote

from careerpath.core.jobs_schema import SEARCH_LINK_COMPANY, ExternalJobRecord
from careerpath.core.jobs_utils import SALARY_VARIES, now_millis


LINKEDIN_SEARCH_URL = "https://www.linkedin.com/jobs/search/"
NAUKRI_BASE = "https://www.naukri.com"

# LinkedIn geoId per location name (lowercase, trimmed)
LINKEDIN_GEO_IDS = {
    "india": "102713980",
    "united states": "103644243",
    "usa": "103644243",
    "uk": "101165590",
    "united kingdom": "101165590",
    "germany": "100253013",
    "france": "100505898",
    "canada": "103714735",
    "australia": "100490277",
    "japan": "102029554",
    "singapore": "102454443",
    "dubai": "100893291",
    "uae": "100893291",
    "netherlands": "102890719",
    "spain": "100994617",
    "italy": "103350119",
    "brazil": "100988488",
    "mexico": "103596953",
    "ireland": "101393091",
}


def resolve_linkedin_geo_id(location: Optional[str]) -> Optional[str]:
    if not location:
        return None
    return LINKEDIN_GEO_IDS.get(location.strip().lower())


def linkedin_search_url(query: str, location: Optional[str] = None) -> str:
    url = f"{LINKEDIN_SEARCH_URL}?keywords={quote(query, safe='')}"
    geo_id = resolve_linkedin_geo_id(location)
    if geo_id:
        url += f"&geoId={geo_id}"
    return url


def linkedin_search_link(query: str, location: Optional[str] = None) -> List[ExternalJobRecord]:
    """
    Exactly one LinkedIn search record. Unknown locations give a keyword-only URL.
    """
    loc = (location or "").strip() or None
    where = f" in {loc}" if loc else ""

    return [
        ExternalJobRecord(
            id=f"linkedin-search-{now_millis()}",
            title=f'Search "{query}"{where} on LinkedIn',
            company=SEARCH_LINK_COMPANY,
            location=loc or "Worldwide",
            salary=SALARY_VARIES,
            description=(
                f"Click to search for {query} positions{where} on LinkedIn. "
                "LinkedIn's filters will be applied to show jobs in your selected location."
            ),
            source="jsearch",
            apply_url=linkedin_search_url(query, loc),
            country_code=loc or "Global",
        )
    ]


def naukri_search_link(query: str) -> ExternalJobRecord:
    return ExternalJobRecord(
        id=f"naukri-india-search-{now_millis()}",
        title=f"Search {query} jobs on Naukri.com",
        company="Naukri.com",
        location="India",
        salary=SALARY_VARIES,
        description=(
            f"Browse real {query} job listings from India's largest job portal "
            "with thousands of active positions."
        ),
        source="arbeitnow",
        apply_url=f"{NAUKRI_BASE}/jobs-{quote(query, safe='')}",
        country_code="India",
    )


def linkedin_india_search_link(query: str) -> ExternalJobRecord:
    return ExternalJobRecord(
        id=f"linkedin-india-search-{now_millis()}",
        title=f"Search {query} jobs on LinkedIn India",
        company="LinkedIn India",
        location="India",
        salary=SALARY_VARIES,
        description=(
            f"Find real {query} job opportunities across India on LinkedIn. "
            "Click apply URL to search directly."
        ),
        source="arbeitnow",
        apply_url=f"{LINKEDIN_SEARCH_URL}?keywords={quote(query, safe='')}&location=India",
        country_code="India",
    )
