"""Renderização das páginas do questionário (page1.html .. page9.html)."""

from __future__ import annotations

from pathlib import Path

from survey_flow.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_NOT_FOUND_HTML = "<html><body><h1>404 Not Found</h1></body></html>"


class PageRenderer:
    """Carrega HTML das páginas a partir de `pages_dir`."""

    def __init__(self, pages_dir: Path | str) -> None:
        self._pages_dir = Path(pages_dir)

    def render(self, page: int) -> str:
        """HTML da página; fallback simples se o arquivo não existir."""
        path = self._pages_dir / f"page{page}.html"
        try:
            return path.read_text(encoding="utf-8")
        except OSError:
            logger.warning("page_template_missing", extra={"page": page})
            return f"<html><body><h1>Page {page} not found</h1></body></html>"

    def not_found(self) -> str:
        """HTML de 404 (404.html se existir)."""
        try:
            return (self._pages_dir / "404.html").read_text(encoding="utf-8")
        except OSError:
            return DEFAULT_NOT_FOUND_HTML
