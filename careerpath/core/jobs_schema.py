from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


JobSourceName = Literal["jsearch", "remoteok", "adzuna", "arbeitnow", "jooble"]
JobType = Literal["remote", "onsite", "hybrid"]

# Search-link records carry this company value; the link already encodes location.
SEARCH_LINK_COMPANY = "LinkedIn"


class ExternalJobRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Source-prefixed id, e.g. 'adzuna-12345'.")
    title: str
    company: str
    location: str
    salary: str
    description: str
    source: JobSourceName
    apply_url: Optional[str] = None
    country_code: Optional[str] = None   # secondary location signal, filtering only

    @field_validator("id", "title", "company", "location", "salary", "description")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v

    @property
    def is_search_link(self) -> bool:
        return self.company == SEARCH_LINK_COMPANY


class JobFilters(BaseModel):
    """
    Search criteria coming from the web layer.
    Accepts both snake_case and the camelCase keys used by request bodies.
    """

    model_config = ConfigDict(populate_by_name=True)

    query: str
    job_type: Optional[JobType] = Field(default=None, alias="jobType")
    location: Optional[str] = None
    salary_min: Optional[float] = Field(default=None, alias="salaryMin")
    salary_max: Optional[float] = Field(default=None, alias="salaryMax")


class JobListing(BaseModel):
    id: str
    title: str
    company: str
    location: str
    description: str
    salary_range: str
    experience_level: str = "entry"
    keywords: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    apply_url: Optional[str] = None
