from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from survey_flow.api.app import create_app
from survey_flow.config.settings import Settings, get_settings

_ENV_VARS = (
    "HOST",
    "PORT",
    "FLY_APP_NAME",
    "SURVEY_LOG_PATH",
    "SURVEY_LOG_REQUIRE_EXISTING",
    "MAX_CONCURRENT_REQUESTS",
    "PAGES_DIR",
    "STATIC_DIR",
    "ENVIRONMENT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()


@pytest.fixture()
def survey_log_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "data.csv"


@pytest.fixture()
def settings(survey_log_path: Path) -> Settings:
    return Settings(
        survey_log_path=survey_log_path,
        survey_log_require_existing=False,
    )


@pytest.fixture()
def client(settings: Settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
