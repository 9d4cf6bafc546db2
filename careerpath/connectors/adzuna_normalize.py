from __future__ import annotations

from typing import Any, Dict, List, Optional

from careerpath.core.jobs_schema import ExternalJobRecord
from careerpath.core.jobs_utils import (
    COMPANY_UNAVAILABLE,
    CURRENCY_SYMBOLS,
    UNTITLED,
    clean_description,
    format_salary,
    text_or,
    url_or_none,
)


# Adzuna country index -> currency its salaries are reported in
ADZUNA_CURRENCIES = {
    "gb": "GBP",
    "us": "USD",
    "in": "INR",
    "de": "EUR",
    "fr": "EUR",
    "nl": "EUR",
    "it": "EUR",
    "es": "EUR",
    "at": "EUR",
    "be": "EUR",
    "au": "AUD",
    "ca": "CAD",
    "nz": "NZD",
    "sg": "SGD",
    "za": "ZAR",
    "pl": "PLN",
    "br": "BRL",
    "mx": "MXN",
    "ch": "CHF",
}


def adzuna_salary(salary_min: Any, salary_max: Any, country: Optional[str] = "gb") -> str:
    """
    Salary text in the currency of the Adzuna index.
    Known currencies get their symbol ("£28,000 - £34,000"); others get the
    ISO code instead ("60,000 - 80,000 AUD").
    """
    code = ADZUNA_CURRENCIES.get((country or "").strip().lower())
    symbol = CURRENCY_SYMBOLS.get(code or "")
    if symbol:
        return format_salary(salary_min, salary_max, symbol=symbol)
    return format_salary(salary_min, salary_max, currency=code, symbol="")


def normalize_adzuna_payload(payload: Dict[str, Any], country: str = "gb") -> List[ExternalJobRecord]:
    """
    Normalize Adzuna payload into ExternalJobRecord list.
    `country` is the index that was searched; it decides the salary currency.
    """
    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list):
        return []

    out: List[ExternalJobRecord] = []
    for idx, r in enumerate(results):
        if not isinstance(r, dict):
            continue

        company = (r.get("company") or {}).get("display_name")
        location = (r.get("location") or {}).get("display_name")

        out.append(
            ExternalJobRecord(
                id=f"adzuna-{r.get('id') or idx}",
                title=text_or(r.get("title"), UNTITLED),
                company=text_or(company, COMPANY_UNAVAILABLE),
                location=text_or(location, "Location Not Specified"),
                salary=adzuna_salary(r.get("salary_min"), r.get("salary_max"), country),
                description=clean_description(r.get("description")),
                source="adzuna",
                # redirect_url is the apply/redirect link
                apply_url=url_or_none(r.get("redirect_url")),
            )
        )

    return out
