from __future__ import annotations

from typing import Any, Dict
import requests

from careerpath.core.errors import QuotaExceededError


DEFAULT_HOST = "jsearch.p.rapidapi.com"


def is_quota_message(payload: Any) -> bool:
    if not isinstance(payload, dict):
        return False
    msg = str(payload.get("message") or "").lower()
    return "exceeded" in msg and "quota" in msg


def fetch_jsearch_jobs(
    *,
    query: str,
    rapidapi_key: str,
    num_pages: int = 2,
    date_posted: str = "all",
    host: str = DEFAULT_HOST,
    timeout: int = 8,
) -> Dict[str, Any]:
    """
    Calls JSearch 'Job Search' endpoint on RapidAPI.
    Searches globally; location filtering happens after aggregation.
    Returns raw JSON dict. Raises QuotaExceededError when RapidAPI reports the plan is used up.
    """
    url = f"https://{host}/search"
    headers = {
        "x-rapidapi-key": rapidapi_key,
        "x-rapidapi-host": host,
    }
    params: Dict[str, Any] = {
        "query": query,
        "page": 1,
        "num_pages": num_pages,
        "date_posted": date_posted,
    }

    r = requests.get(url, headers=headers, params=params, timeout=timeout)
    r.raise_for_status()
    payload = r.json()

    if is_quota_message(payload):
        raise QuotaExceededError("jsearch", str(payload.get("message")))
    return payload
