"""Tabela de transições do fluxo.

- TRANSITIONS[page] = PageRule (tokens aceitos → próxima página)
- Páginas 4/6 exigem "mc" no histórico; 5/7 exigem "tf"
- Página terminal não aceita nenhum token
- Resolução pura: sem side effects
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from survey_flow.domain.flow.errors import InvalidButton, InvalidPage, NoTransitionDefined
from survey_flow.domain.flow.pages import FlowPage
from survey_flow.domain.flow.slots import FlowSlot

BRANCH_MULTIPLE_CHOICE = "mc"
BRANCH_TRUE_FALSE = "tf"


@dataclass(frozen=True, slots=True)
class PageRule:
    """Regra de uma página: tokens aceitos, slot preenchido e ramo exigido."""

    routes: Mapping[str, FlowPage] = field(default_factory=dict)
    slot: FlowSlot | None = None
    required_branch: str | None = None

    @property
    def allowed_tokens(self) -> list[str]:
        """Tokens aceitos, na ordem da tabela."""
        return list(self.routes)


def _rule(
    tokens: Sequence[str] | Mapping[str, FlowPage],
    slot: FlowSlot | None,
    next_page: FlowPage | None = None,
    required_branch: str | None = None,
) -> PageRule:
    if isinstance(tokens, Mapping):
        routes = dict(tokens)
    else:
        routes = {token: next_page for token in tokens}
    return PageRule(
        routes=MappingProxyType(routes),
        slot=slot,
        required_branch=required_branch,
    )


TRANSITIONS: Mapping[int, PageRule] = MappingProxyType({
    FlowPage.START: _rule(["start"], FlowSlot.ENTRY, FlowPage.ROLE),
    FlowPage.ROLE: _rule(
        ["pm", "ux", "engi", "dm"], FlowSlot.ROLE, FlowPage.QUESTION_TYPE
    ),
    FlowPage.QUESTION_TYPE: _rule(
        {
            BRANCH_MULTIPLE_CHOICE: FlowPage.MC_TEAM_SIZE,
            BRANCH_TRUE_FALSE: FlowPage.TF_HPOM_LIVE,
        },
        FlowSlot.QUESTION_TYPE,
    ),
    FlowPage.MC_TEAM_SIZE: _rule(
        ["4a", "4b", "4c", "4d"],
        FlowSlot.FIRST_ANSWER,
        FlowPage.MC_ROLE_PREFERENCE,
        required_branch=BRANCH_MULTIPLE_CHOICE,
    ),
    FlowPage.TF_HPOM_LIVE: _rule(
        ["5t", "5f"],
        FlowSlot.FIRST_ANSWER,
        FlowPage.TF_RICHARD_CAI,
        required_branch=BRANCH_TRUE_FALSE,
    ),
    FlowPage.MC_ROLE_PREFERENCE: _rule(
        ["6a", "6b", "6c", "6d"],
        FlowSlot.SECOND_ANSWER,
        FlowPage.TROPHY,
        required_branch=BRANCH_MULTIPLE_CHOICE,
    ),
    FlowPage.TF_RICHARD_CAI: _rule(
        ["7t", "7f"],
        FlowSlot.SECOND_ANSWER,
        FlowPage.TROPHY,
        required_branch=BRANCH_TRUE_FALSE,
    ),
    FlowPage.TROPHY: _rule(["trophy"], FlowSlot.TROPHY, FlowPage.DONE),
    # Terminal: nenhum token aceito
    FlowPage.DONE: _rule({}, None),
})


def allowed_tokens_for(page: int) -> list[str]:
    """Tokens aceitos na página (vazio para terminal ou página desconhecida)."""
    rule = TRANSITIONS.get(page)
    return rule.allowed_tokens if rule else []


def resolve_transition(
    page: int, history: Sequence[str], token: str
) -> tuple[FlowPage, FlowSlot]:
    """Resolve a próxima página para `token` a partir de `page`.

    A checagem de ramo acontece antes da checagem do token.

    Returns:
        (próxima página, slot preenchido pelo token)

    Raises:
        NoTransitionDefined: página fora da tabela
        InvalidPage: ramo exigido ausente do histórico
        InvalidButton: token fora do conjunto aceito
    """
    rule = TRANSITIONS.get(page)
    if rule is None:
        raise NoTransitionDefined(page)

    if rule.required_branch is not None and rule.required_branch not in history:
        raise InvalidPage(page)

    next_page = rule.routes.get(token)
    if next_page is None or rule.slot is None:
        raise InvalidButton(token, rule.allowed_tokens)

    return next_page, rule.slot
