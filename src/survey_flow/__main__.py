"""Entrada `python -m survey_flow`: sobe o servidor no endereço configurado."""

from __future__ import annotations

import uvicorn

from survey_flow.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "survey_flow.api.app:app",
        host=settings.bind_host,
        port=settings.bind_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
