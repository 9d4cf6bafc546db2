"""
Shared fixtures for the job aggregation tests.

HTTP is never hit: connector tests patch requests.get / requests.post and hand
back Mock responses built by tests.helpers.make_response().
"""

import pytest

from careerpath.core.config import ProviderSettings


@pytest.fixture
def bare_settings() -> ProviderSettings:
    """Settings with no credentials at all."""
    return ProviderSettings()


@pytest.fixture
def full_settings() -> ProviderSettings:
    return ProviderSettings(
        jsearch_api_key="js-key",
        adzuna_app_id="az-id",
        adzuna_app_key="az-key",
        jooble_api_key="jb-key",
    )
