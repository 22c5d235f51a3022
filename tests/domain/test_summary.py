"""Testes para derivação do resumo de sessão."""

from __future__ import annotations

from survey_flow.domain.flow import FlowSlot, FlowStateMachine
from survey_flow.domain.summary import CSV_COLUMNS, UNKNOWN, derive_summary


class TestDeriveSummary:
    """Cenários completos dos dois ramos."""

    def test_multiple_choice_scenario(self) -> None:
        machine = FlowStateMachine.replay(["start", "pm", "mc", "4b", "6a", "trophy"])
        summary = derive_summary("session_1", machine.answers)

        assert summary.role == "Product Manager"
        assert summary.question_type == "Multiple Choice"
        assert summary.team_size == "6-8 people"
        assert summary.role_preference == "Product Manager"
        assert summary.bool_answer_1 == ""
        assert summary.bool_answer_2 == ""

    def test_true_false_scenario(self) -> None:
        machine = FlowStateMachine.replay(["start", "ux", "tf", "5f", "7t", "trophy"])
        summary = derive_summary("session_2", machine.answers)

        assert summary.role == "UX Designer"
        assert summary.question_type == "True/False"
        assert summary.bool_answer_1 == "False"
        assert summary.bool_answer_2 == "True"
        assert summary.team_size == ""
        assert summary.role_preference == ""

    def test_narrative_lists_branch_answers(self) -> None:
        machine = FlowStateMachine.replay(["start", "dm", "mc", "4d", "6c", "trophy"])
        summary = derive_summary("s", machine.answers)

        assert summary.narrative == (
            "User Response Summary:\n"
            "- Role: Developer Manager\n"
            "- Question type: Multiple Choice\n"
            "- Preferred team size: 13-15 people\n"
            "- Wants to see more: Engineer\n"
        )

    def test_true_false_narrative(self) -> None:
        machine = FlowStateMachine.replay(["start", "engi", "tf", "5t", "7f", "trophy"])
        narrative = derive_summary("s", machine.answers).narrative

        assert "- Believes HPOM has been live for two years: True\n" in narrative
        assert "- Not intimidated by Richard Cai: False\n" in narrative
        assert "Preferred team size" not in narrative


class TestDecodingDefaults:
    """Tokens desconhecidos caem no default de cada tabela."""

    def test_unknown_role_keeps_raw_token(self) -> None:
        summary = derive_summary(
            "s", {FlowSlot.ROLE: "cto", FlowSlot.QUESTION_TYPE: "mc"}
        )
        assert summary.role == "cto"

    def test_unknown_answers_become_unknown(self) -> None:
        summary = derive_summary(
            "s",
            {
                FlowSlot.ROLE: "pm",
                FlowSlot.QUESTION_TYPE: "tf",
                FlowSlot.FIRST_ANSWER: "zz",
                FlowSlot.SECOND_ANSWER: "yy",
            },
        )
        assert summary.bool_answer_1 == UNKNOWN
        assert summary.bool_answer_2 == UNKNOWN


class TestCsvRow:
    """Linha CSV e escape da narrativa."""

    def test_escaped_narrative_has_no_newlines_or_double_quotes(self) -> None:
        summary = derive_summary(
            "s", {FlowSlot.ROLE: 'a"b', FlowSlot.QUESTION_TYPE: "mc"}
        )
        escaped = summary.escaped_narrative
        assert "\n" not in escaped
        assert '"' not in escaped
        assert "\\n" in escaped
        assert "- Role: a'b" in escaped

    def test_row_follows_column_order(self) -> None:
        machine = FlowStateMachine.replay(["start", "ux", "tf", "5f", "7t", "trophy"])
        row = derive_summary("session_x", machine.answers).to_csv_row()

        assert len(row) == len(CSV_COLUMNS)
        assert row[:7] == ["session_x", "UX Designer", "True/False", "", "", "False", "True"]
        assert row[7].startswith("User Response Summary:\\n- Role: UX Designer")
