"""FlowStateMachine — estado de uma única sessão do questionário."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from survey_flow.domain.flow.pages import INITIAL_PAGE, TERMINAL_PAGE, FlowPage
from survey_flow.domain.flow.slots import FlowSlot
from survey_flow.domain.flow.transitions import allowed_tokens_for, resolve_transition
from survey_flow.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class FlowStateMachine:
    """Página atual + histórico ordenado de tokens aceitos.

    Invariantes:
    - len(history) == número de transições bem-sucedidas
    - current_page == página obtida ao reaplicar history a partir da página 1
    - na página terminal nenhum token é aceito
    """

    def __init__(self) -> None:
        self._current_page: FlowPage = INITIAL_PAGE
        self._history: list[str] = []
        self._answers: dict[FlowSlot, str] = {}

    @classmethod
    def replay(cls, tokens: Iterable[str]) -> FlowStateMachine:
        """Cria uma máquina aplicando `tokens` em ordem.

        Propaga o primeiro FlowValidationError encontrado.
        """
        machine = cls()
        for token in tokens:
            machine.process_input(token)
        return machine

    @property
    def current_page(self) -> FlowPage:
        return self._current_page

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    @property
    def answers(self) -> Mapping[FlowSlot, str]:
        """Tokens aceitos indexados pelo slot que preenchem."""
        return MappingProxyType(dict(self._answers))

    @property
    def is_terminal(self) -> bool:
        return self._current_page == TERMINAL_PAGE

    def allowed_tokens(self) -> list[str]:
        """Tokens aceitos na página atual (vazio na terminal)."""
        return allowed_tokens_for(self._current_page)

    def process_input(self, token: str) -> FlowPage:
        """Aplica um token e retorna a próxima página.

        Em caso de erro lança FlowValidationError e o estado não é alterado.
        """
        next_page, slot = resolve_transition(self._current_page, self._history, token)

        self._history.append(token)
        self._answers[slot] = token
        previous = self._current_page
        self._current_page = next_page

        logger.debug(
            "flow_transition_applied",
            extra={"from_page": int(previous), "to_page": int(next_page), "slot": slot.value},
        )
        return next_page

    def __repr__(self) -> str:
        return f"FlowStateMachine(page={int(self._current_page)}, history={self._history!r})"
