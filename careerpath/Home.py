from __future__ import annotations

import sys
from pathlib import Path

# Ensure repo root is on sys.path so "import careerpath...." works in Streamlit
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import streamlit as st

from careerpath.core.config import ProviderSettings

st.set_page_config(
    page_title="CareerPath",
    layout="wide",
)

st.title("CareerPath")
st.caption("Job Search: JSearch · Arbeitnow · RemoteOK · Adzuna · Jooble")

st.divider()

settings = ProviderSettings.from_env()
st.write("Configured providers:")
st.write(
    {
        "JSearch (RapidAPI)": settings.has_jsearch,
        "Adzuna": settings.has_adzuna,
        "Jooble": settings.has_jooble,
        "Arbeitnow": True,
        "RemoteOK": True,
    }
)
st.caption("Providers without credentials fall back to manual search links or are skipped.")
