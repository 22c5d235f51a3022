"""SessionGateway — orquestração de sessão por request.

Fluxo de um request:
1. Resolve session_id (cookie ou novo)
2. Sob o lock do registry: restart opcional → get_or_create → aplica token
   → se terminal, remove e deriva o resumo (finalização acontece uma vez).
   Logs do passo são emitidos só depois de liberar o lock
3. Fora do lock: grava o resumo no log CSV (falha não aborta o request)
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass

from survey_flow.domain.flow.errors import (
    FlowValidationError,
    InvalidButton,
    InvalidPage,
    NoTransitionDefined,
)
from survey_flow.domain.flow.pages import TERMINAL_PAGE
from survey_flow.domain.summary import SummaryRecord, derive_summary
from survey_flow.infra.session_registry import SessionRegistry
from survey_flow.infra.survey_log import SurveyLog, SurveyLogError
from survey_flow.observability.logging import get_logger, mask_session_id

SESSION_ID_PREFIX = "session_"

# (nível, mensagem, extra) emitido depois de liberar o lock do registry
_PendingLog = tuple[int, str, dict[str, object]]


def generate_session_id() -> str:
    """Gera identificador único de sessão (uuid4, sem colisão por relógio)."""
    return f"{SESSION_ID_PREFIX}{uuid.uuid4().hex}"


@dataclass(slots=True)
class FlowOutcome:
    """Resultado de um evento aplicado à sessão.

    - page_to_render: página que o chamador deve renderizar
    - finalized_summary: presente apenas quando a sessão chegou ao terminal
    - rejected: erro de validação quando o token foi ignorado
    - log_written: None quando não havia nada a gravar
    """

    page_to_render: int
    session_id: str
    is_new_session: bool = False
    finalized_summary: SummaryRecord | None = None
    history: tuple[str, ...] = ()
    rejected: FlowValidationError | None = None
    log_written: bool | None = None

    @property
    def is_finalized(self) -> bool:
        return self.finalized_summary is not None


class SessionGateway:
    """Aplica eventos de botão às sessões do registry."""

    def __init__(
        self,
        registry: SessionRegistry,
        survey_log: SurveyLog | None = None,
        id_factory: Callable[[], str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._registry = registry
        self._survey_log = survey_log
        self._id_factory = id_factory or generate_session_id
        self._logger = logger or get_logger(__name__)

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    def resolve_session_id(self, credential: str | None) -> tuple[str, bool]:
        """Reaproveita a credencial recebida ou gera um novo id.

        Returns:
            (session_id, is_new)
        """
        if credential:
            return credential, False
        session_id = self._id_factory()
        self._logger.debug(
            "session_id_generated",
            extra={"session_id": mask_session_id(session_id)},
        )
        return session_id, True

    def handle_event(
        self,
        session_id: str,
        token: str | None,
        *,
        is_new: bool = False,
        restart: bool = False,
    ) -> FlowOutcome:
        """Aplica `token` (se houver) à sessão, de forma atômica.

        Não faz I/O sob o lock: os registros de log são acumulados e emitidos
        depois da seção crítica. O resumo finalizado é devolvido para
        persistência.
        """
        pending: list[_PendingLog] = []
        with self._registry.exclusive() as registry:
            outcome = self._apply(registry, session_id, token, is_new, restart, pending)

        for level, message, extra in pending:
            self._logger.log(level, message, extra=extra)
        self._log_sessions_after_update()
        return outcome

    def handle_request(
        self,
        credential: str | None,
        token: str | None = None,
        restart: bool = False,
    ) -> FlowOutcome:
        """Request completo: resolve id, aplica evento e grava resumo."""
        session_id, is_new = self.resolve_session_id(credential)
        outcome = self.handle_event(session_id, token, is_new=is_new, restart=restart)
        if outcome.finalized_summary is not None:
            outcome.log_written = self._persist(outcome.finalized_summary)
        return outcome

    def _apply(
        self,
        registry: SessionRegistry,
        session_id: str,
        token: str | None,
        is_new: bool,
        restart: bool,
        pending: list[_PendingLog],
    ) -> FlowOutcome:
        """Passo do fluxo. Chamado sob o lock; só acumula logs em `pending`."""
        masked = mask_session_id(session_id)
        if restart:
            existed = registry.reset_if_requested(session_id, True)
            pending.append(
                (logging.INFO, "session_reset", {"session_id": masked, "existed": existed})
            )

        if session_id not in registry:
            pending.append((logging.INFO, "session_created", {"session_id": masked}))
        machine = registry.get_or_create(session_id)

        if token is None:
            return FlowOutcome(
                page_to_render=int(machine.current_page),
                session_id=session_id,
                is_new_session=is_new,
                history=machine.history,
            )

        try:
            next_page = machine.process_input(token)
        except FlowValidationError as exc:
            pending.append(_rejection_log(session_id, int(machine.current_page), exc))
            return FlowOutcome(
                page_to_render=int(machine.current_page),
                session_id=session_id,
                is_new_session=is_new,
                history=machine.history,
                rejected=exc,
            )

        pending.append(
            (
                logging.INFO,
                "button_press_validated",
                {"session_id": masked, "button": token, "next_page": int(next_page)},
            )
        )

        if next_page != TERMINAL_PAGE:
            return FlowOutcome(
                page_to_render=int(next_page),
                session_id=session_id,
                is_new_session=is_new,
                history=machine.history,
            )

        summary = self._finalize(registry, session_id, pending)
        return FlowOutcome(
            page_to_render=int(TERMINAL_PAGE),
            session_id=session_id,
            is_new_session=is_new,
            finalized_summary=summary,
            history=machine.history,
        )

    def _finalize(
        self,
        registry: SessionRegistry,
        session_id: str,
        pending: list[_PendingLog],
    ) -> SummaryRecord:
        """Remove a sessão e deriva o resumo. Chamado sob o lock."""
        machine = registry.remove(session_id)
        if machine is None:  # pragma: no cover - inalcançável sob o lock
            raise RuntimeError(f"session vanished during finalization: {session_id[:8]}")
        summary = derive_summary(session_id, machine.answers)
        pending.append(
            (
                logging.INFO,
                "session_finalized",
                {
                    "session_id": mask_session_id(session_id),
                    "question_type": summary.question_type,
                    "steps": len(machine.history),
                },
            )
        )
        return summary

    def _persist(self, summary: SummaryRecord) -> bool:
        """Grava no log CSV; falhas são logadas e reportadas, nunca propagadas."""
        if self._survey_log is None:
            return False
        try:
            return self._survey_log.append(summary)
        except SurveyLogError as e:
            self._logger.error(
                "survey_log_write_failed",
                extra={"session_id": mask_session_id(summary.session_id), "error": str(e)},
            )
            return False

    def _log_sessions_after_update(self) -> None:
        """Estado de todas as sessões ativas, apenas em DEBUG."""
        if not self._logger.isEnabledFor(logging.DEBUG):
            return
        sessions = [
            {"session_id": mask_session_id(sid), "page": page, "history": list(history)}
            for sid, (page, history) in self._registry.snapshot().items()
        ]
        self._logger.debug(
            "sessions_after_update",
            extra={"active_sessions": len(sessions), "sessions": sessions},
        )


def _rejection_log(session_id: str, page: int, exc: FlowValidationError) -> _PendingLog:
    extra: dict[str, object] = {
        "session_id": mask_session_id(session_id),
        "current_page": page,
        "error_type": type(exc).__name__,
    }
    if isinstance(exc, InvalidButton):
        extra["button"] = exc.token
        extra["allowed_buttons"] = exc.allowed
    elif isinstance(exc, (InvalidPage, NoTransitionDefined)):
        extra["page"] = exc.page
    return logging.INFO, "button_press_rejected", extra
