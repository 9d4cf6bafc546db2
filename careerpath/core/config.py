from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional


DEFAULT_JSEARCH_HOST = "jsearch.p.rapidapi.com"

_TRUE = {"1", "true", "yes", "on"}


def _clean(v: Optional[str]) -> Optional[str]:
    v = (v or "").strip()
    return v or None


def _int(v: Optional[str], default: Optional[int]) -> Optional[int]:
    try:
        return int(str(v).strip())
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class ProviderSettings:
    """
    Credentials and limits for the external job sources.
    Built once (usually from the environment) and handed to each source.
    """

    jsearch_api_key: Optional[str] = None
    jsearch_host: str = DEFAULT_JSEARCH_HOST
    adzuna_app_id: Optional[str] = None
    adzuna_app_key: Optional[str] = None
    adzuna_country: str = "gb"
    jooble_api_key: Optional[str] = None

    jsearch_timeout: int = 8
    source_timeout: int = 10
    max_workers: Optional[int] = None   # None -> one thread per source

    india_search_links: bool = False
    log_level: str = "INFO"

    @property
    def has_jsearch(self) -> bool:
        return bool(self.jsearch_api_key)

    @property
    def has_adzuna(self) -> bool:
        return bool(self.adzuna_app_id and self.adzuna_app_key)

    @property
    def has_jooble(self) -> bool:
        return bool(self.jooble_api_key)

    def with_overrides(self, **changes) -> "ProviderSettings":
        # blank UI inputs should not wipe env values
        changes = {k: v for k, v in changes.items() if v not in (None, "")}
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProviderSettings":
        env = os.environ if environ is None else environ
        return cls(
            jsearch_api_key=_clean(env.get("JSEARCH_API_KEY")),
            jsearch_host=_clean(env.get("RAPIDAPI_HOST")) or DEFAULT_JSEARCH_HOST,
            adzuna_app_id=_clean(env.get("ADZUNA_APP_ID")),
            adzuna_app_key=_clean(env.get("ADZUNA_APP_KEY")),
            adzuna_country=(_clean(env.get("ADZUNA_COUNTRY")) or "gb").lower(),
            jooble_api_key=_clean(env.get("JOOBLE_API_KEY")),
            jsearch_timeout=_int(env.get("JSEARCH_TIMEOUT"), 8),
            source_timeout=_int(env.get("JOB_SEARCH_TIMEOUT"), 10),
            max_workers=_int(env.get("JOB_SEARCH_MAX_WORKERS"), None),
            india_search_links=(env.get("INDIA_SEARCH_LINKS") or "").strip().lower() in _TRUE,
            log_level=(_clean(env.get("CAREERPATH_LOG_LEVEL")) or "INFO").upper(),
        )
