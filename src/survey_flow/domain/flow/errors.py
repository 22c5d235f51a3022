"""Erros de validação do fluxo.

Nenhum deles é fatal: a sessão permanece inalterada e a página atual é
renderizada novamente.
"""

from __future__ import annotations

from collections.abc import Sequence


class FlowValidationError(Exception):
    """Base para erros de transição do fluxo."""


class InvalidButton(FlowValidationError):
    """Token não aceito na página atual."""

    def __init__(self, token: str, allowed: Sequence[str]) -> None:
        self.token = token
        self.allowed = list(allowed)
        super().__init__(f"Button {token!r} not allowed; allowed: {self.allowed}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidButton):
            return NotImplemented
        return (self.token, self.allowed) == (other.token, other.allowed)

    def __hash__(self) -> int:
        return hash((self.token, tuple(self.allowed)))


class InvalidPage(FlowValidationError):
    """Página alcançada sem o ramo exigido no histórico."""

    def __init__(self, page: int) -> None:
        self.page = page
        super().__init__(f"Invalid page transition from page {page}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidPage):
            return NotImplemented
        return self.page == other.page

    def __hash__(self) -> int:
        return hash(("invalid_page", self.page))


class NoTransitionDefined(FlowValidationError):
    """Página sem entrada na tabela de transições."""

    def __init__(self, page: int) -> None:
        self.page = page
        super().__init__(f"No transitions defined for page {page}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NoTransitionDefined):
            return NotImplemented
        return self.page == other.page

    def __hash__(self) -> int:
        return hash(("no_transition", self.page))
