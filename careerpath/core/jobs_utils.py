from __future__ import annotations

import re
import time
from typing import Any, Iterable, List, Optional, Set, Tuple

from bs4 import BeautifulSoup

from careerpath.core.jobs_schema import ExternalJobRecord, JobFilters


DESCRIPTION_LIMIT = 500

NO_DESCRIPTION = "No description available"
SALARY_NOT_DISCLOSED = "Salary not disclosed"
SALARY_VARIES = "Salary varies"
UNTITLED = "Untitled Position"
COMPANY_UNAVAILABLE = "Company Name Unavailable"

CURRENCY_SYMBOLS = {
    "USD": "$",
    "GBP": "£",
    "EUR": "€",
    "INR": "₹",
}

_NUMBER_RE = re.compile(r"\d[\d,]*(?:\.\d+)?")


def now_millis() -> int:
    return int(time.time() * 1000)


def text_or(value: Any, placeholder: str) -> str:
    """Stripped string value, or the placeholder when missing/blank."""
    if value is None:
        return placeholder
    s = str(value).strip()
    return s or placeholder


def url_or_none(*candidates: Any) -> Optional[str]:
    """First non-blank string among the candidates; non-string values are skipped."""
    for value in candidates:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def strip_html(text: Optional[str]) -> str:
    """
    Drop markup and decode entities (&nbsp;, &amp;, ...). Whitespace is collapsed.
    """
    if not text:
        return ""
    if "<" not in text and "&" not in text:
        return re.sub(r"\s+", " ", text).strip()
    plain = BeautifulSoup(text, "html.parser").get_text(" ", strip=True)
    plain = plain.replace("\xa0", " ")
    return re.sub(r"\s+", " ", plain).strip()


def clean_description(text: Optional[str], limit: int = DESCRIPTION_LIMIT) -> str:
    plain = strip_html(text)[:limit].rstrip()
    return plain or NO_DESCRIPTION


def _to_number(v: Any) -> Optional[float]:
    if v is None or isinstance(v, bool):
        return None
    try:
        n = float(v)
    except (TypeError, ValueError):
        return None
    return n if n > 0 else None


def _fmt_amount(v: float) -> str:
    if float(v).is_integer():
        return f"{int(v):,}"
    return f"{v:,.2f}"


def format_salary(
    salary_min: Any,
    salary_max: Any,
    currency: Optional[str] = None,
    symbol: Optional[str] = None,
) -> str:
    """
    Supported shapes:
      "$80,000 - $120,000 USD"   (full range)
      "$80,000+ USD"             (minimum only)
      "Up to $120,000 USD"       (maximum only)
    Zero or missing on both sides renders as "Salary not disclosed".
    The currency suffix is only added when a currency code is given.
    """
    lo = _to_number(salary_min)
    hi = _to_number(salary_max)
    if lo is None and hi is None:
        return SALARY_NOT_DISCLOSED

    code = currency.strip().upper() if isinstance(currency, str) else ""
    if symbol is None:
        symbol = CURRENCY_SYMBOLS.get(code, "$")
    suffix = f" {code}" if code else ""

    if lo is not None and hi is not None:
        return f"{symbol}{_fmt_amount(lo)} - {symbol}{_fmt_amount(hi)}{suffix}"
    if lo is not None:
        return f"{symbol}{_fmt_amount(lo)}+{suffix}"
    return f"Up to {symbol}{_fmt_amount(hi)}{suffix}"


def salary_numbers(salary: str) -> List[float]:
    """All numeric tokens in a salary string, with thousands separators folded."""
    out: List[float] = []
    for tok in _NUMBER_RE.findall(salary or ""):
        tok = tok.replace(",", "")
        if not tok:
            continue
        try:
            out.append(float(tok))
        except ValueError:
            continue
    return out


def is_remote_location(location: str) -> bool:
    return "remote" in (location or "").lower()


def matches_job_type(job: ExternalJobRecord, job_type: Optional[str]) -> bool:
    if job_type == "remote":
        return is_remote_location(job.location)
    if job_type == "onsite":
        return not is_remote_location(job.location)
    # hybrid (and unset) passes everything
    return True


def matches_location(job: ExternalJobRecord, location: Optional[str]) -> bool:
    wanted = (location or "").strip().lower()
    if not wanted:
        return True
    if job.is_search_link:
        return True

    job_loc = job.location.strip().lower()
    country = (job.country_code or "").strip().lower()

    if wanted in job_loc or (job_loc and job_loc in wanted):
        return True
    if country and (wanted in country or country in wanted):
        return True
    return False


def matches_salary(
    job: ExternalJobRecord,
    salary_min: Optional[float],
    salary_max: Optional[float],
) -> bool:
    if not salary_min and not salary_max:
        return True

    nums = salary_numbers(job.salary)
    if not nums:
        return True

    if salary_min and max(nums) < salary_min:
        return False
    if salary_max and min(nums) > salary_max:
        return False
    return True


def filter_jobs(jobs: Iterable[ExternalJobRecord], filters: JobFilters) -> List[ExternalJobRecord]:
    """
    Keep records matching ALL provided criteria. Order is preserved.
    """
    out: List[ExternalJobRecord] = []
    for j in jobs:
        if not matches_job_type(j, filters.job_type):
            continue
        if not matches_location(j, filters.location):
            continue
        if not matches_salary(j, filters.salary_min, filters.salary_max):
            continue
        out.append(j)
    return out


def dedupe_signature(job: ExternalJobRecord) -> Tuple[str, str]:
    return (job.title.lower().strip(), job.company.lower().strip())


def dedupe_jobs(jobs: Iterable[ExternalJobRecord]) -> List[ExternalJobRecord]:
    """
    Drop near-duplicates by (title, company). First occurrence wins, order is stable.
    """
    seen: Set[Tuple[str, str]] = set()
    out: List[ExternalJobRecord] = []
    for j in jobs:
        sig = dedupe_signature(j)
        if sig in seen:
            continue
        seen.add(sig)
        out.append(j)
    return out
