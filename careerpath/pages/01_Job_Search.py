# careerpath/pages/01_Job_Search.py
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from collections import defaultdict

import streamlit as st
from pydantic import ValidationError

from careerpath.core.aggregator import extract_apply_url, search_job_listings
from careerpath.core.config import ProviderSettings
from careerpath.core.jobs_schema import JobFilters
from careerpath.core.logger import setup_logger

st.set_page_config(page_title="Job Search", layout="wide")
st.title("Job Search")
st.caption("Live postings from several job boards. Fresh, deduped, apply links first.")
st.divider()

env_settings = ProviderSettings.from_env()
setup_logger(env_settings.log_level)

# ---------------------------
# Provider credentials
# ---------------------------
with st.expander("Provider keys", expanded=False):
    st.write("Defaults come from environment variables. Blank fields keep the environment value.")
    jsearch_key = st.text_input("JSEARCH_API_KEY", value="", type="password")
    adzuna_id = st.text_input("ADZUNA_APP_ID", value="", type="password")
    adzuna_key = st.text_input("ADZUNA_APP_KEY", value="", type="password")
    jooble_key = st.text_input("JOOBLE_API_KEY", value="", type="password")
    india_links = st.checkbox("Add Naukri / LinkedIn India links for India searches", value=env_settings.india_search_links)

settings = env_settings.with_overrides(
    jsearch_api_key=jsearch_key.strip(),
    adzuna_app_id=adzuna_id.strip(),
    adzuna_app_key=adzuna_key.strip(),
    jooble_api_key=jooble_key.strip(),
    india_search_links=india_links,
)

# ---------------------------
# Filters
# ---------------------------
col_a, col_b, col_c = st.columns([2, 1, 1], gap="large")

with col_a:
    query = st.text_input("Role or skill", value="")
    location = st.text_input("Location (optional)", value="")

with col_b:
    job_type = st.selectbox("Work type", options=["any", "remote", "onsite", "hybrid"], index=0)

with col_c:
    salary_min = st.number_input("Min salary", min_value=0, value=0, step=5000)
    salary_max = st.number_input("Max salary (0 = no cap)", min_value=0, value=0, step=5000)

st.divider()
btn = st.button("Search jobs", type="primary")

if not btn:
    st.stop()

if not query.strip():
    st.warning("Enter a role or skill to search.")
    st.stop()

try:
    filters = JobFilters(
        query=query.strip(),
        job_type=None if job_type == "any" else job_type,
        location=location.strip() or None,
        salary_min=salary_min or None,
        salary_max=salary_max or None,
    )
except ValidationError as e:
    st.error(f"Invalid search: {e}")
    st.stop()

with st.spinner("Searching job boards..."):
    listings = search_job_listings(filters, settings=settings)

st.subheader(f"Jobs ({len(listings)})")

# Group by company
grouped = defaultdict(list)
for j in listings:
    grouped[j.company].append(j)

companies_sorted = sorted(grouped.items(), key=lambda kv: len(kv[1]), reverse=True)

for company, items in companies_sorted:
    with st.expander(f"{company} ({len(items)})", expanded=len(companies_sorted) <= 3):
        rows = [
            {
                "Title": j.title,
                "Location": j.location,
                "Salary": j.salary_range,
                "Source": j.keywords[2] if len(j.keywords) > 2 else "",
                "Apply": extract_apply_url(j) or "",
            }
            for j in items
        ]
        st.data_editor(
            rows,
            use_container_width=True,
            hide_index=True,
            disabled=True,
            column_config={
                "Apply": st.column_config.LinkColumn(
                    "Apply",
                    help="Open the application or search link",
                    validate="^https?://.*",
                )
            },
        )

st.caption("Search-link rows open a prefilled search on the job board when no postings came back.")
