"""Páginas do fluxo do questionário.

- Página 1 é a inicial, página 9 é terminal (sem transições de saída)
- Ramo "mc" percorre 4 → 6; ramo "tf" percorre 5 → 7; ambos convergem em 8
"""

from __future__ import annotations

from enum import IntEnum


class FlowPage(IntEnum):
    """9 páginas canônicas do fluxo."""

    START = 1
    """Boas-vindas; aguarda `start`."""

    ROLE = 2
    """Seleção de papel do visitante."""

    QUESTION_TYPE = 3
    """Escolha entre múltipla escolha e verdadeiro/falso."""

    MC_TEAM_SIZE = 4
    """Múltipla escolha: tamanho de time preferido."""

    TF_HPOM_LIVE = 5
    """Verdadeiro/falso: primeira afirmação."""

    MC_ROLE_PREFERENCE = 6
    """Múltipla escolha: papel que quer ver mais."""

    TF_RICHARD_CAI = 7
    """Verdadeiro/falso: segunda afirmação."""

    TROPHY = 8
    """Convergência dos ramos; aguarda `trophy`."""

    DONE = 9
    """Terminal."""


INITIAL_PAGE: FlowPage = FlowPage.START
TERMINAL_PAGE: FlowPage = FlowPage.DONE
