"""Tests for the ADK tool wrappers, run against a temporary state dir."""
from pathlib import Path

import pytest

from concurseiro.agents import tools
from concurseiro.models.suggestions import DisciplineSuggestion


@pytest.fixture(autouse=True)
def state_dir(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setenv("CONCURSEIRO_STATE_DIR", str(tmp_path))
    return tmp_path


def test_create_and_list_plans() -> None:
    result = tools.create_plan("Auditor Fiscal", exam="receita federal - auditor fiscal")
    assert result["status"] == "success"

    listed = tools.list_plans()
    assert listed["plans"][0]["plan_id"] == result["plan_id"]
    assert listed["plans"][0]["label"] == "Receita Federal - Auditor Fiscal"
    assert listed["plans"][0]["progress"] == 0


def test_create_plan_errors() -> None:
    assert tools.create_plan("  ")["status"] == "error"
    assert tools.create_plan("Plano", category="outro")["status"] == "error"
    assert tools.list_plans()["plans"] == []


def test_discipline_log_and_progress_flow() -> None:
    tools.create_plan("Auditor Fiscal")
    added = tools.add_discipline("auditor fiscal", "Português", topics=["Crase", "Regência"])
    assert added["status"] == "success"
    assert added["topics"] == 2

    recorded = tools.record_study_session(
        "Auditor Fiscal",
        discipline="português",
        topic="regência",
        category="Exercícios",
        duration="00:40:00",
        correct=8,
        wrong=2,
    )
    assert recorded["status"] == "success"

    progress = tools.get_plan_progress("Auditor Fiscal")
    assert progress["progress"] == 50
    discipline = progress["disciplines"][0]
    assert (discipline["completed_topics"], discipline["total_topics"]) == (1, 2)
    assert discipline["questions_resolved"] == 10
    assert progress["recent_logs"][0]["topic"] == "Regência"


def test_record_session_rejects_bad_input() -> None:
    tools.create_plan("Plano")
    tools.add_discipline("Plano", "Português", topics=["Crase"])

    assert tools.record_study_session("Plano", duration="40min")["status"] == "error"
    assert tools.record_study_session("Plano", topic="Inexistente")["status"] == "error"
    assert tools.record_study_session("Outro")["status"] == "error"
    assert tools.get_plan_progress("Plano")["recent_logs"] == []


def test_toggle_topic() -> None:
    tools.create_plan("Plano")
    tools.add_discipline("Plano", "Português", topics=["Crase"])

    first = tools.toggle_topic("Plano", "Português", "Crase")
    second = tools.toggle_topic("Plano", "Português", "Crase")

    assert first["is_completed"] is True
    assert second["is_completed"] is False
    assert tools.toggle_topic("Plano", "Português", "Nada")["status"] == "error"


def test_delete_plan_requires_confirmation() -> None:
    tools.create_plan("Plano")

    refused = tools.delete_plan("Plano")
    assert refused["status"] == "error"
    assert len(tools.list_plans()["plans"]) == 1

    assert tools.delete_plan("Plano", confirmed=True)["status"] == "success"
    assert tools.list_plans()["plans"] == []


def test_suggest_plan_disciplines_skips_existing(monkeypatch) -> None:
    tools.create_plan("Plano")
    tools.add_discipline("Plano", "Português")
    monkeypatch.setattr(tools, "suggest_disciplines", lambda name, cargos=None: [
        DisciplineSuggestion(name="português", color="#3B82F6"),
        DisciplineSuggestion(name="Matemática", color="#F59E0B"),
    ])

    result = tools.suggest_plan_disciplines("Plano")

    assert result["added"] == ["Matemática"]


def test_suggest_plan_disciplines_empty(monkeypatch) -> None:
    tools.create_plan("Plano")
    monkeypatch.setattr(tools, "suggest_disciplines", lambda name, cargos=None: [])
    assert tools.suggest_plan_disciplines("Plano")["status"] == "error"
