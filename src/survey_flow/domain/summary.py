"""Derivação do resumo de uma sessão finalizada.

Decodifica os tokens por slot (não por posição) e produz:
- campos planos na ordem das colunas do log CSV
- narrativa legível ("User Response Summary: ...")

Puro: sem I/O. Persistência é responsabilidade de infra/survey_log.py.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from survey_flow.domain.flow.slots import FlowSlot

UNKNOWN = "(unknown)"

MULTIPLE_CHOICE = "Multiple Choice"
TRUE_FALSE = "True/False"

ROLE_LABELS: Mapping[str, str] = {
    "pm": "Product Manager",
    "ux": "UX Designer",
    "engi": "Engineer",
    "dm": "Developer Manager",
}

QUESTION_TYPE_LABELS: Mapping[str, str] = {
    "mc": MULTIPLE_CHOICE,
    "tf": TRUE_FALSE,
}

TEAM_SIZE_LABELS: Mapping[str, str] = {
    "4a": "3-5 people",
    "4b": "6-8 people",
    "4c": "9-12 people",
    "4d": "13-15 people",
}

ROLE_PREFERENCE_LABELS: Mapping[str, str] = {
    "6a": "Product Manager",
    "6b": "Developer Manager",
    "6c": "Engineer",
    "6d": "UX Designer",
}

HPOM_LIVE_LABELS: Mapping[str, str] = {"5t": "True", "5f": "False"}
RICHARD_CAI_LABELS: Mapping[str, str] = {"7t": "True", "7f": "False"}

# Ordem das colunas do log CSV
CSV_COLUMNS: tuple[str, ...] = (
    "session_id",
    "role",
    "question_type",
    "team_size",
    "role_pref",
    "hpom_live",
    "richard_cai",
    "doc_string",
)


@dataclass(frozen=True, slots=True)
class SummaryRecord:
    """Registro plano de uma sessão finalizada.

    Campos do ramo não percorrido ficam vazios ("").
    """

    session_id: str
    role: str
    question_type: str
    team_size: str = ""
    role_preference: str = ""
    bool_answer_1: str = ""
    bool_answer_2: str = ""
    narrative: str = ""

    @property
    def escaped_narrative(self) -> str:
        """Narrativa em uma única célula CSV (\\n literal, aspas simples)."""
        return self.narrative.replace("\n", "\\n").replace('"', "'")

    def to_csv_row(self) -> list[str]:
        """Valores na ordem de CSV_COLUMNS."""
        return [
            self.session_id,
            self.role,
            self.question_type,
            self.team_size,
            self.role_preference,
            self.bool_answer_1,
            self.bool_answer_2,
            self.escaped_narrative,
        ]


def _decode(token: str | None, labels: Mapping[str, str], default: str | None) -> str:
    """Traduz token; `default=None` devolve o próprio token."""
    if token is None:
        return ""
    return labels.get(token, token if default is None else default)


def build_narrative(
    role: str,
    question_type: str,
    branch_lines: list[str],
) -> str:
    """Monta a narrativa multi-linha do resumo."""
    lines = ["User Response Summary:"]
    if role:
        lines.append(f"- Role: {role}")
    if question_type:
        lines.append(f"- Question type: {question_type}")
    lines.extend(f"- {line}" for line in branch_lines)
    return "\n".join(lines) + "\n"


def derive_summary(session_id: str, answers: Mapping[FlowSlot, str]) -> SummaryRecord:
    """Deriva o SummaryRecord a partir dos tokens indexados por slot."""
    role = _decode(answers.get(FlowSlot.ROLE), ROLE_LABELS, None)
    question_type = _decode(answers.get(FlowSlot.QUESTION_TYPE), QUESTION_TYPE_LABELS, None)
    first = answers.get(FlowSlot.FIRST_ANSWER)
    second = answers.get(FlowSlot.SECOND_ANSWER)

    team_size = role_preference = bool_answer_1 = bool_answer_2 = ""
    branch_lines: list[str] = []

    if question_type == MULTIPLE_CHOICE:
        team_size = _decode(first, TEAM_SIZE_LABELS, UNKNOWN)
        role_preference = _decode(second, ROLE_PREFERENCE_LABELS, UNKNOWN)
        if first is not None:
            branch_lines.append(f"Preferred team size: {team_size}")
        if second is not None:
            branch_lines.append(f"Wants to see more: {role_preference}")
    elif question_type == TRUE_FALSE:
        bool_answer_1 = _decode(first, HPOM_LIVE_LABELS, UNKNOWN)
        bool_answer_2 = _decode(second, RICHARD_CAI_LABELS, UNKNOWN)
        if first is not None:
            branch_lines.append(f"Believes HPOM has been live for two years: {bool_answer_1}")
        if second is not None:
            branch_lines.append(f"Not intimidated by Richard Cai: {bool_answer_2}")

    return SummaryRecord(
        session_id=session_id,
        role=role,
        question_type=question_type,
        team_size=team_size,
        role_preference=role_preference,
        bool_answer_1=bool_answer_1,
        bool_answer_2=bool_answer_2,
        narrative=build_narrative(role, question_type, branch_lines),
    )
