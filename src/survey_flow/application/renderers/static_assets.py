"""Resolução de assets estáticos servidos em /lib/*."""

from __future__ import annotations

from pathlib import Path

CONTENT_TYPES: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".css": "text/css",
    ".js": "application/javascript",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(path: str | Path) -> str:
    """Content-Type pela extensão do arquivo."""
    return CONTENT_TYPES.get(Path(path).suffix.lower(), DEFAULT_CONTENT_TYPE)


def resolve_asset(lib_dir: Path | str, relative_path: str) -> Path | None:
    """Caminho do asset dentro de `lib_dir`, ou None.

    Caminhos que escapam de `lib_dir` (ex.: `../`) são recusados.
    """
    base = Path(lib_dir).resolve()
    candidate = (base / relative_path).resolve()
    if not candidate.is_relative_to(base) or not candidate.is_file():
        return None
    return candidate
