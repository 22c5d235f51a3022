"""Testes para o log CSV de sessões finalizadas."""

from __future__ import annotations

import csv
from pathlib import Path

import pytest

from survey_flow.domain.flow import FlowStateMachine
from survey_flow.domain.summary import CSV_COLUMNS, derive_summary
from survey_flow.infra.survey_log import SurveyLog, SurveyLogError

HEADER_LINE = ",".join(CSV_COLUMNS)


def _summary(session_id: str = "session_1"):
    machine = FlowStateMachine.replay(["start", "pm", "mc", "4b", "6a", "trophy"])
    return derive_summary(session_id, machine.answers)


class TestSurveyLogAppend:
    """Escrita de linhas."""

    def test_append_writes_header_and_row(self, tmp_path: Path) -> None:
        path = tmp_path / "data.csv"
        log = SurveyLog(path, require_existing=False)

        assert log.append(_summary()) is True

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == HEADER_LINE
        rows = list(csv.reader(lines))
        assert rows[1][:5] == [
            "session_1",
            "Product Manager",
            "Multiple Choice",
            "6-8 people",
            "Product Manager",
        ]
        assert rows[1][7].startswith("User Response Summary:\\n")

    def test_header_written_once(self, tmp_path: Path) -> None:
        path = tmp_path / "data.csv"
        log = SurveyLog(path, require_existing=False)

        log.append(_summary("a"))
        log.append(_summary("b"))

        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 3
        assert lines.count(HEADER_LINE) == 1

    def test_empty_existing_file_gets_header(self, tmp_path: Path) -> None:
        path = tmp_path / "data.csv"
        path.touch()
        log = SurveyLog(path, require_existing=True)

        assert log.append(_summary()) is True
        assert path.read_text(encoding="utf-8").startswith(HEADER_LINE + "\n")

    def test_missing_file_is_skipped_when_required(self, tmp_path: Path) -> None:
        path = tmp_path / "data.csv"
        log = SurveyLog(path, require_existing=True)

        assert log.is_available() is False
        assert log.append(_summary()) is False
        assert not path.exists()

    def test_io_failure_raises_survey_log_error(self, tmp_path: Path) -> None:
        # Diretório no lugar do arquivo força falha de open()
        path = tmp_path / "data.csv"
        path.mkdir()
        log = SurveyLog(path, require_existing=True)

        with pytest.raises(SurveyLogError):
            log.append(_summary())


class TestSurveyLogReadAndClear:
    """Leitura bruta e truncamento."""

    def test_read_missing_file_raises(self, tmp_path: Path) -> None:
        log = SurveyLog(tmp_path / "missing.csv")
        with pytest.raises(SurveyLogError):
            log.read_text()

    def test_clear_keeps_only_header(self, tmp_path: Path) -> None:
        path = tmp_path / "data.csv"
        log = SurveyLog(path, require_existing=False)
        log.append(_summary())

        log.clear()

        assert path.read_text(encoding="utf-8") == HEADER_LINE + "\n"

    def test_clear_missing_file_raises(self, tmp_path: Path) -> None:
        log = SurveyLog(tmp_path / "missing.csv", require_existing=False)
        with pytest.raises(SurveyLogError):
            log.clear()
