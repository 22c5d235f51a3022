"""Registry de sessões em memória (session_id → FlowStateMachine).

Características:
- Um único lock reentrante para todo o registry
- get_or_create atômico (sem corrida de criação duplicada)
- Sem TTL: sessões vivem até finalização ou restart explícito

⚠️ Sessões abandonadas acumulam durante a vida do processo.
"""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Iterator

from survey_flow.domain.flow.machine import FlowStateMachine
from survey_flow.observability.logging import get_logger, mask_session_id

logger: logging.Logger = get_logger(__name__)


class SessionRegistry:
    """Mapa concorrente de session_id para FlowStateMachine.

    Mutação de uma máquina obtida aqui deve acontecer dentro de `exclusive()`.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, FlowStateMachine] = {}
        self._lock = threading.RLock()

    @contextlib.contextmanager
    def exclusive(self) -> Iterator[SessionRegistry]:
        """Seção crítica para operações compostas do gateway."""
        with self._lock:
            yield self

    def get_or_create(self, session_id: str) -> FlowStateMachine:
        """Retorna a máquina existente ou registra uma nova."""
        with self._lock:
            machine = self._sessions.get(session_id)
            if machine is None:
                machine = FlowStateMachine()
                self._sessions[session_id] = machine
                logger.debug(
                    "session_created",
                    extra={"session_id": mask_session_id(session_id)},
                )
            return machine

    def get(self, session_id: str) -> FlowStateMachine | None:
        with self._lock:
            return self._sessions.get(session_id)

    def remove(self, session_id: str) -> FlowStateMachine | None:
        """Remove e devolve a máquina; None se ausente."""
        with self._lock:
            machine = self._sessions.pop(session_id, None)
        if machine is not None:
            logger.debug(
                "session_removed",
                extra={"session_id": mask_session_id(session_id)},
            )
        return machine

    def reset_if_requested(self, session_id: str, requested: bool) -> bool:
        """Remove a sessão incondicionalmente quando `requested`.

        Returns:
            True se havia sessão e ela foi removida
        """
        if not requested:
            return False
        removed = self.remove(session_id) is not None
        logger.debug(
            "session_reset",
            extra={"session_id": mask_session_id(session_id), "existed": removed},
        )
        return removed

    def snapshot(self) -> dict[str, tuple[int, tuple[str, ...]]]:
        """Cópia (página, histórico) por sessão, usada no log de debug do gateway."""
        with self._lock:
            return {
                sid: (int(machine.current_page), machine.history)
                for sid, machine in self._sessions.items()
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions
