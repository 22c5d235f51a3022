"""Testes para bootstrap da aplicação FastAPI."""

from __future__ import annotations

from pathlib import Path

import pytest

from survey_flow.api.app import create_app
from survey_flow.application.session_gateway import SessionGateway
from survey_flow.config.settings import Settings
from survey_flow.infra.session_registry import SessionRegistry


class TestAppBootstrap:
    """Validação de configuração e estado da app."""

    def test_create_app_wires_state(self, tmp_path: Path) -> None:
        settings = Settings(survey_log_path=tmp_path / "data.csv")
        app = create_app(settings)

        assert app.state.settings is settings
        assert isinstance(app.state.session_registry, SessionRegistry)
        assert isinstance(app.state.session_gateway, SessionGateway)
        assert app.state.session_gateway.registry is app.state.session_registry

    def test_invalid_config_fails_fast(self, tmp_path: Path) -> None:
        settings = Settings(
            survey_log_path=tmp_path / "data.json",
            max_concurrent_requests=0,
        )
        with pytest.raises(ValueError, match="Configuração inválida"):
            create_app(settings)

    def test_each_app_has_its_own_registry(self, tmp_path: Path) -> None:
        settings = Settings(survey_log_path=tmp_path / "data.csv")
        first = create_app(settings)
        second = create_app(settings)
        assert first.state.session_registry is not second.state.session_registry

    def test_production_without_volume_guard_fails_fast(self, tmp_path: Path) -> None:
        settings = Settings(
            environment="production",
            survey_log_path=tmp_path / "data.csv",
            survey_log_require_existing=False,
        )
        with pytest.raises(ValueError, match="SURVEY_LOG_REQUIRE_EXISTING"):
            create_app(settings)
