"""
Test helpers: fake HTTP responses, record builders and stub sources.
"""

from typing import Any, List, Optional
from unittest.mock import Mock

import requests

from careerpath.core.jobs_schema import ExternalJobRecord


def make_response(json_data: Any = None, status: int = 200, json_error: Optional[Exception] = None) -> Mock:
    """Mock requests.Response with raise_for_status() and json() behaving like the real one."""
    resp = Mock()
    resp.status_code = status
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} Error", response=resp)
    else:
        resp.raise_for_status.return_value = None
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = json_data
    return resp


def make_record(
    title: str = "Software Engineer",
    company: str = "Acme",
    location: str = "Berlin, Germany",
    salary: str = "Salary not disclosed",
    source: str = "arbeitnow",
    id: Optional[str] = None,
    apply_url: Optional[str] = "https://example.com/apply",
    country_code: Optional[str] = None,
) -> ExternalJobRecord:
    return ExternalJobRecord(
        id=id or f"{source}-{title.lower().replace(' ', '-')}",
        title=title,
        company=company,
        location=location,
        salary=salary,
        description="Build things.",
        source=source,
        apply_url=apply_url,
        country_code=country_code,
    )


class StaticSource:
    """Source that returns a fixed list."""

    def __init__(self, name: str, jobs: List[ExternalJobRecord]):
        self.source_name = name
        self._jobs = jobs
        self.calls = []

    def search(self, query, location=None):
        self.calls.append((query, location))
        return list(self._jobs)


class ExplodingSource:
    """Source that breaks its contract and raises."""

    source_name = "exploding"

    def search(self, query, location=None):
        raise RuntimeError("boom")


