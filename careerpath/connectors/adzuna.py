from __future__ import annotations

from typing import Any, Dict
import requests


ADZUNA_BASE = "https://api.adzuna.com/v1/api/jobs"


def fetch_adzuna_jobs(
    *,
    country: str,
    app_id: str,
    app_key: str,
    what: str,
    results_per_page: int = 10,
    timeout: int = 10,
) -> Dict[str, Any]:
    """
    Adzuna Jobs API, first results page of one country index.
    Example:
      GET https://api.adzuna.com/v1/api/jobs/gb/search/1?app_id=...&app_key=...&what=...&results_per_page=10

    Returns JSON payload (dict).
    """
    url = f"{ADZUNA_BASE}/{country}/search/1"

    params: Dict[str, Any] = {
        "app_id": app_id,
        "app_key": app_key,
        "what": what,
        "results_per_page": results_per_page,
    }

    r = requests.get(
        url,
        params=params,
        headers={"Content-Type": "application/json"},
        timeout=timeout,
    )
    r.raise_for_status()
    return r.json()
