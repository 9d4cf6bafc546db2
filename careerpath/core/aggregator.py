"""
External job aggregation.

Fans a query out to every job source at once, waits for all of them to settle,
then filters, dedupes and caps the merged list.

Ordering:
- Sources are concatenated in the order they were given
- Within a source, provider order is preserved through filter and dedupe

Error handling:
- Sources are expected to swallow their own failures (see connectors.sources)
- A source that raises anyway is logged and contributes nothing; the others
  are unaffected
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Union

from careerpath.connectors.sources import JobSource, build_sources
from careerpath.core import logger as log
from careerpath.core.config import ProviderSettings
from careerpath.core.jobs_schema import ExternalJobRecord, JobFilters, JobListing
from careerpath.core.jobs_utils import SALARY_NOT_DISCLOSED, dedupe_jobs, filter_jobs


MAX_RESULTS = 60
APPLY_URL_PREFIX = "apply_url:"


def gather_from_sources(
    sources: Sequence[JobSource],
    query: str,
    location: Optional[str] = None,
    max_workers: Optional[int] = None,
) -> List[ExternalJobRecord]:
    """
    Run every source.search() concurrently and wait for all of them.

    No source is cancelled because another finished first; each one is
    bounded by its own request timeout.
    """
    if not sources:
        return []

    workers = max_workers or len(sources)
    all_jobs: List[ExternalJobRecord] = []

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="job-source") as pool:
        futures = [(src, pool.submit(src.search, query, location)) for src in sources]

        # iterate in submission order so the merge is deterministic
        for src, fut in futures:
            name = getattr(src, "source_name", type(src).__name__)
            try:
                jobs = fut.result()
            except Exception as e:
                log.error(f"{name} failed unexpectedly: {e!r}")
                continue
            all_jobs.extend(jobs or [])

    return all_jobs


def search_external_jobs(
    filters: JobFilters,
    sources: Optional[Sequence[JobSource]] = None,
    settings: Optional[ProviderSettings] = None,
) -> List[ExternalJobRecord]:
    """
    query -> all sources (parallel) -> filter -> dedupe -> first MAX_RESULTS.

    A blank query returns [] without contacting any source.
    """
    query = (filters.query or "").strip()
    if not query:
        return []

    settings = settings or ProviderSettings.from_env()
    if sources is None:
        sources = build_sources(settings)

    all_jobs = gather_from_sources(
        sources,
        query,
        filters.location,
        max_workers=settings.max_workers,
    )
    names = ", ".join(getattr(s, "source_name", type(s).__name__) for s in sources)
    log.info(f"Total jobs from all sources: {len(all_jobs)} ({names})")

    filtered = filter_jobs(all_jobs, filters)
    deduped = dedupe_jobs(filtered)
    result = deduped[:MAX_RESULTS]

    log.success(
        f"Returning {len(result)} jobs for '{query}' "
        f"(filtered {len(filtered)}, unique {len(deduped)})"
    )
    return result


def convert_to_job_listing(
    job: ExternalJobRecord,
    created_at: Optional[datetime] = None,
) -> JobListing:
    """
    Map an internal record to the listing shape the presentation layer consumes.

    The apply URL is exposed as a field and also as an 'apply_url:<url>'
    keyword for clients that only read keywords.
    """
    keywords = [job.title, job.company, job.source]
    if job.apply_url:
        keywords.append(f"{APPLY_URL_PREFIX}{job.apply_url}")

    listing = JobListing(
        id=job.id,
        title=job.title,
        company=job.company,
        location=job.location,
        description=job.description,
        salary_range=job.salary or SALARY_NOT_DISCLOSED,
        experience_level="entry",
        keywords=keywords,
        apply_url=job.apply_url,
    )
    if created_at is not None:
        listing = listing.model_copy(update={"created_at": created_at})
    return listing


def search_job_listings(
    filters: JobFilters,
    sources: Optional[Sequence[JobSource]] = None,
    settings: Optional[ProviderSettings] = None,
) -> List[JobListing]:
    created_at = datetime.now().astimezone()
    return [
        convert_to_job_listing(j, created_at=created_at)
        for j in search_external_jobs(filters, sources=sources, settings=settings)
    ]


def extract_apply_url(listing: Union[JobListing, Iterable[str]]) -> Optional[str]:
    """
    Apply URL from a listing: the explicit field first, then the encoded keyword.
    Also accepts a bare keyword list.
    """
    if isinstance(listing, JobListing):
        if listing.apply_url:
            return listing.apply_url
        keywords: Iterable[str] = listing.keywords
    else:
        keywords = listing

    for kw in keywords or []:
        if isinstance(kw, str) and kw.startswith(APPLY_URL_PREFIX):
            url = kw[len(APPLY_URL_PREFIX):].strip()
            if url:
                return url
    return None
