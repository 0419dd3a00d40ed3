"""Root conftest — shared test configuration.

Invariants:
    - No test sees the developer's DYNAMIC_SPACE_DATA / HF_TOKEN or a .env file
    - get_settings() cache is cleared around every test
"""

import pytest

from dynamic_space.config import Settings, get_settings

DATA_URL = "https://example.com/spaces.csv"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    for var in ("DYNAMIC_SPACE_DATA", "HF_TOKEN", "NO_IMAGE_CONTENT", "HUB_URL"):
        monkeypatch.delenv(var, raising=False)
    # .env is resolved relative to the working directory
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def standard_settings() -> Settings:
    return Settings(dynamic_space_data=None)


@pytest.fixture
def discover_settings() -> Settings:
    return Settings(dynamic_space_data=DATA_URL)
