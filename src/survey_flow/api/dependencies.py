"""Dependências injetadas nas rotas."""

from __future__ import annotations

from fastapi import Request

from survey_flow.application.renderers.pages import PageRenderer
from survey_flow.application.session_gateway import SessionGateway
from survey_flow.config.settings import Settings
from survey_flow.infra.session_registry import SessionRegistry
from survey_flow.infra.survey_log import SurveyLog


def get_settings(request: Request) -> Settings:
    """Retorna settings da aplicação."""

    return request.app.state.settings


def get_session_registry(request: Request) -> SessionRegistry:
    """Retorna o registry de sessões ativo."""

    return request.app.state.session_registry


def get_session_gateway(request: Request) -> SessionGateway:
    """Retorna o gateway de sessão."""

    return request.app.state.session_gateway


def get_survey_log(request: Request) -> SurveyLog:
    """Retorna o sink CSV de sessões finalizadas."""
    return request.app.state.survey_log


def get_page_renderer(request: Request) -> PageRenderer:
    """Retorna o renderizador de páginas."""
    return request.app.state.page_renderer
