"""Fluxo do questionário — páginas, slots, transições e máquina de estados.

Exporta:
- FlowPage: 9 páginas canônicas
- FlowSlot: slot semântico de cada token aceito
- FlowStateMachine: estado de uma sessão
- resolve_transition: resolvedor puro
- Erros: FlowValidationError, InvalidButton, InvalidPage, NoTransitionDefined
"""

from survey_flow.domain.flow.errors import (
    FlowValidationError,
    InvalidButton,
    InvalidPage,
    NoTransitionDefined,
)
from survey_flow.domain.flow.machine import FlowStateMachine
from survey_flow.domain.flow.pages import INITIAL_PAGE, TERMINAL_PAGE, FlowPage
from survey_flow.domain.flow.slots import FlowSlot
from survey_flow.domain.flow.transitions import (
    TRANSITIONS,
    allowed_tokens_for,
    resolve_transition,
)

__all__ = [
    "FlowPage",
    "FlowSlot",
    "FlowStateMachine",
    "FlowValidationError",
    "InvalidButton",
    "InvalidPage",
    "NoTransitionDefined",
    "INITIAL_PAGE",
    "TERMINAL_PAGE",
    "TRANSITIONS",
    "allowed_tokens_for",
    "resolve_transition",
]
