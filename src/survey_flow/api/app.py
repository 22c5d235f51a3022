"""Fábrica da aplicação FastAPI."""

from __future__ import annotations

from fastapi import FastAPI

from survey_flow.api.routes import router
from survey_flow.application.renderers.pages import PageRenderer
from survey_flow.application.session_gateway import SessionGateway
from survey_flow.config.settings import Settings, get_settings
from survey_flow.infra.session_registry import SessionRegistry
from survey_flow.infra.survey_log import SurveyLog
from survey_flow.observability.logging import configure_logging, get_logger
from survey_flow.observability.middleware import (
    ConcurrencyLimitMiddleware,
    CorrelationIdMiddleware,
)

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Cria a aplicação FastAPI."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.service_name)

    validation_errors: list[str] = []
    validation_errors.extend(settings.validate_survey_log_config())
    validation_errors.extend(settings.validate_admission_config())

    if validation_errors:
        error_msg = "; ".join(validation_errors)
        raise ValueError(f"Configuração inválida: {error_msg}")

    app = FastAPI(title=settings.service_name, version=settings.version)
    app.add_middleware(
        ConcurrencyLimitMiddleware, max_concurrent=settings.max_concurrent_requests
    )
    app.add_middleware(CorrelationIdMiddleware)
    app.include_router(router)

    registry = SessionRegistry()
    survey_log = SurveyLog(
        settings.survey_log_path,
        require_existing=settings.survey_log_require_existing,
    )

    app.state.settings = settings
    app.state.session_registry = registry
    app.state.survey_log = survey_log
    app.state.session_gateway = SessionGateway(registry, survey_log=survey_log)
    app.state.page_renderer = PageRenderer(settings.pages_dir)

    if not survey_log.is_available():
        logger.warning(
            "survey_log_not_attached",
            extra={"path": str(settings.survey_log_path)},
        )

    return app


app = create_app()
