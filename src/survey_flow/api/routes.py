"""Rotas HTTP do questionário."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse

from survey_flow.api.dependencies import (
    get_page_renderer,
    get_session_gateway,
    get_session_registry,
    get_settings,
    get_survey_log,
)
from survey_flow.application.renderers.data_table import (
    LOG_CLEAR_FAILED_HTML,
    LOG_CLEARED_HTML,
    LOG_NOT_FOUND_HTML,
    render_csv_table,
)
from survey_flow.application.renderers.pages import PageRenderer
from survey_flow.application.renderers.static_assets import content_type_for, resolve_asset
from survey_flow.application.session_gateway import SessionGateway
from survey_flow.config.settings import Settings
from survey_flow.infra.session_registry import SessionRegistry
from survey_flow.infra.survey_log import SurveyLog, SurveyLogError
from survey_flow.observability.logging import get_logger, mask_session_id
from survey_flow.observability.timing import timed

logger = get_logger(__name__)

router = APIRouter()

BUTTON_PARAMS = ("button", "action")
RESTART_MARKER = "restart=true"


def extract_button(request: Request) -> str | None:
    """Primeiro `button=` ou `action=` da query string, na ordem recebida."""
    for key, value in request.query_params.multi_items():
        if key in BUTTON_PARAMS:
            return value
    return None


def _render_flow(
    request: Request,
    settings: Settings,
    gateway: SessionGateway,
    renderer: PageRenderer,
) -> Response:
    credential = request.cookies.get(settings.session_cookie_name) or None
    token = extract_button(request)
    restart = RESTART_MARKER in request.url.query

    with timed("session_gateway"):
        outcome = gateway.handle_request(credential, token=token, restart=restart)

    logger.debug(
        "flow_page_served",
        extra={
            "session_id": mask_session_id(outcome.session_id),
            "page": outcome.page_to_render,
            "new_session": outcome.is_new_session,
            "finalized": outcome.is_finalized,
        },
    )

    response = HTMLResponse(renderer.render(outcome.page_to_render))
    if outcome.is_new_session:
        response.set_cookie(settings.session_cookie_name, outcome.session_id, path="/")
    return response


@router.get("/health")
def health(
    settings: Settings = Depends(get_settings),
    registry: SessionRegistry = Depends(get_session_registry),
) -> dict[str, str | int]:
    """Healthcheck simples."""
    return {
        "status": "ok",
        "service": settings.service_name,
        "version": settings.version,
        "active_sessions": len(registry),
    }


@router.get("/view-data", response_class=HTMLResponse)
def view_data(survey_log: SurveyLog = Depends(get_survey_log)) -> HTMLResponse:
    """Log CSV como tabela HTML."""
    try:
        csv_text = survey_log.read_text()
    except SurveyLogError:
        return HTMLResponse(LOG_NOT_FOUND_HTML)
    return HTMLResponse(render_csv_table(csv_text))


@router.get("/clear-data", response_class=HTMLResponse)
def clear_data(survey_log: SurveyLog = Depends(get_survey_log)) -> HTMLResponse:
    """Trunca o log CSV mantendo o cabeçalho."""
    try:
        survey_log.clear()
    except SurveyLogError as e:
        logger.warning("survey_log_clear_failed", extra={"error": str(e)})
        return HTMLResponse(LOG_CLEAR_FAILED_HTML)
    return HTMLResponse(LOG_CLEARED_HTML)


@router.get("/lib/{asset_path:path}")
def static_asset(
    asset_path: str,
    settings: Settings = Depends(get_settings),
) -> Response:
    """Assets estáticos (imagens, css, js)."""
    path = resolve_asset(settings.static_dir / "lib", asset_path)
    if path is None:
        return PlainTextResponse("", status_code=status.HTTP_404_NOT_FOUND)
    return FileResponse(path, media_type=content_type_for(path))


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    settings: Settings = Depends(get_settings),
    gateway: SessionGateway = Depends(get_session_gateway),
    renderer: PageRenderer = Depends(get_page_renderer),
) -> Response:
    """Página atual da sessão."""
    return _render_flow(request, settings, gateway, renderer)


@router.get("/{path:path}", response_class=HTMLResponse)
def page_or_not_found(
    path: str,
    request: Request,
    settings: Settings = Depends(get_settings),
    gateway: SessionGateway = Depends(get_session_gateway),
    renderer: PageRenderer = Depends(get_page_renderer),
) -> Response:
    """`/pageN` renderiza a página da sessão (N é ignorado); demais caminhos → 404."""
    if not path.startswith("page"):
        return HTMLResponse(renderer.not_found(), status_code=status.HTTP_404_NOT_FOUND)
    return _render_flow(request, settings, gateway, renderer)
