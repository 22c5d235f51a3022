"""Log CSV append-only de sessões finalizadas.

Conforme comportamento do deploy em volume:
- Se o arquivo não existe e require_existing=True, a escrita é ignorada (warning)
- Cabeçalho é escrito quando o arquivo está vazio
- Falhas de I/O viram SurveyLogError (o chamador decide como degradar)
"""

from __future__ import annotations

import csv
import logging
import threading
from pathlib import Path

from survey_flow.domain.summary import CSV_COLUMNS, SummaryRecord
from survey_flow.observability.logging import get_logger, mask_session_id

logger: logging.Logger = get_logger(__name__)


class SurveyLogError(Exception):
    """Erro ao ler ou gravar o log CSV."""

    pass


class SurveyLog:
    """Sink CSV das sessões finalizadas."""

    def __init__(self, path: Path | str, require_existing: bool = True) -> None:
        self._path = Path(path)
        self._require_existing = require_existing
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def is_available(self) -> bool:
        """True se o arquivo pode receber escrita."""
        if self._path.exists():
            return True
        return not self._require_existing

    def append(self, record: SummaryRecord) -> bool:
        """Acrescenta uma linha ao log.

        Returns:
            True se a linha foi gravada, False se o sink está indisponível

        Raises:
            SurveyLogError: falha de I/O
        """
        if not self.is_available():
            logger.warning(
                "survey_log_unavailable",
                extra={"path": str(self._path), "session_id": mask_session_id(record.session_id)},
            )
            return False

        try:
            with self._lock:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                add_header = not self._path.exists() or self._path.stat().st_size == 0
                with open(self._path, "a", newline="", encoding="utf-8") as f:
                    if add_header:
                        csv.writer(f, lineterminator="\n").writerow(CSV_COLUMNS)
                    writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
                    writer.writerow(record.to_csv_row())
        except OSError as e:
            logger.error(
                "survey_log_append_failed",
                extra={"path": str(self._path), "error": str(e)},
            )
            raise SurveyLogError(f"CSV append failed: {e}") from e

        logger.info(
            "survey_log_row_written",
            extra={"session_id": mask_session_id(record.session_id), "header_written": add_header},
        )
        return True

    def read_text(self) -> str:
        """Conteúdo bruto do log.

        Raises:
            SurveyLogError: arquivo ausente ou ilegível
        """
        try:
            return self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise SurveyLogError(f"CSV read failed: {e}") from e

    def clear(self) -> None:
        """Trunca o log mantendo apenas o cabeçalho.

        Só opera sobre arquivo existente (mesma regra do volume montado).

        Raises:
            SurveyLogError: arquivo ausente ou falha de escrita
        """
        if not self._path.exists():
            raise SurveyLogError(f"CSV file not found: {self._path}")
        try:
            with self._lock, open(self._path, "w", newline="", encoding="utf-8") as f:
                csv.writer(f, lineterminator="\n").writerow(CSV_COLUMNS)
        except OSError as e:
            raise SurveyLogError(f"CSV clear failed: {e}") from e
        logger.info("survey_log_cleared", extra={"path": str(self._path)})
