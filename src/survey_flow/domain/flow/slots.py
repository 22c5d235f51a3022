"""Slots semânticos preenchidos pelos tokens aceitos.

Cada token aceito é registrado junto do slot que preenche, de modo que o
resumo não depende da posição do token no histórico.
"""

from __future__ import annotations

from enum import StrEnum


class FlowSlot(StrEnum):
    """Papel de um token aceito dentro do fluxo."""

    ENTRY = "entry"
    ROLE = "role"
    QUESTION_TYPE = "question_type"
    FIRST_ANSWER = "first_answer"
    SECOND_ANSWER = "second_answer"
    TROPHY = "trophy"
