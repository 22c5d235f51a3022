"""Renderização do log CSV como tabela HTML (/view-data)."""

from __future__ import annotations

import csv
import io
from html import escape

_HEAD = (
    "<html><head><title>Survey Data</title>"
    "<style>table{border-collapse:collapse;}"
    "th,td{border:1px solid #ccc;padding:6px;}"
    "th{background:#f0f0f0;}</style></head>"
    "<body><h2>Survey Data</h2><table>"
)
_TAIL = "</table></body></html>"

LOG_NOT_FOUND_HTML = (
    "<html><body><h2>CSV file not found or volume not attached.</h2></body></html>"
)
LOG_CLEARED_HTML = "<html><body><h2>CSV data cleared.</h2></body></html>"
LOG_CLEAR_FAILED_HTML = (
    "<html><body><h2>Failed to clear CSV data "
    "(file not found or volume not attached).</h2></body></html>"
)


def render_csv_table(csv_text: str) -> str:
    """Converte o conteúdo CSV em tabela HTML; primeira linha é o cabeçalho."""
    rows = list(csv.reader(io.StringIO(csv_text)))
    parts = [_HEAD]
    if rows:
        header, *body = rows
        parts.append("<tr>")
        parts.extend(f"<th>{escape(col)}</th>" for col in header)
        parts.append("</tr>")
        for row in body:
            parts.append("<tr>")
            parts.extend(f"<td>{escape(cell)}</td>" for cell in row)
            parts.append("</tr>")
    parts.append(_TAIL)
    return "".join(parts)
