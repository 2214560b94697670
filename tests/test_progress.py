"""Tests for concurseiro.tools.progress."""
import pytest

from concurseiro.models.plan import Discipline, QuestionRecord, StudyLog, StudyPlan, Topic
from concurseiro.tools.progress import (
    calculate_progress,
    completed_topic_count,
    discipline_progress,
    percentage,
    plan_summary,
    recent_logs,
)


def test_progress_is_zero_without_topics() -> None:
    assert calculate_progress(StudyPlan(name="Vazio")) == 0
    plan = StudyPlan(name="Só disciplinas", disciplines=[Discipline(name="Direito"), Discipline(name="Inglês")])
    assert calculate_progress(plan) == 0


def test_auditor_fiscal_scenario(auditor_plan: StudyPlan) -> None:
    assert calculate_progress(auditor_plan) == 50
    assert completed_topic_count(auditor_plan) == 2


@pytest.mark.parametrize("completed,total,expected", [
    (0, 3, 0),
    (1, 3, 33),
    (2, 3, 67),
    (1, 8, 13),
    (3, 8, 38),
    (7, 7, 100),
])
def test_percentage_rounds_half_up(completed: int, total: int, expected: int) -> None:
    assert percentage(completed, total) == expected


def test_progress_spans_all_disciplines() -> None:
    plan = StudyPlan(name="Plano", disciplines=[
        Discipline(name="A", topics=[Topic(name="a1", is_completed=True), Topic(name="a2")]),
        Discipline(name="B", topics=[Topic(name="b1"), Topic(name="b2"), Topic(name="b3", is_completed=True)]),
    ])
    assert calculate_progress(plan) == 40


def test_discipline_progress_counts_questions_per_discipline() -> None:
    portugues = Discipline(name="Português", topics=[Topic(name="Crase", is_completed=True), Topic(name="Regência")])
    direito = Discipline(name="Direito", topics=[Topic(name="Princípios")])
    plan = StudyPlan(
        name="Plano",
        disciplines=[portugues, direito],
        logs=[
            StudyLog(discipline_id=portugues.id, questions=QuestionRecord(correct=8, wrong=2)),
            StudyLog(discipline_id=portugues.id, questions=QuestionRecord(correct=3, wrong=1)),
            StudyLog(discipline_id=direito.id, questions=QuestionRecord(correct=5)),
            StudyLog(discipline_id="deleted-discipline", questions=QuestionRecord(correct=9, wrong=9)),
        ],
    )

    stats = discipline_progress(plan)

    assert [s.name for s in stats] == ["Português", "Direito"]
    assert (stats[0].completed_topics, stats[0].total_topics, stats[0].questions_resolved) == (1, 2, 14)
    assert stats[0].percentage == 50
    assert (stats[1].completed_topics, stats[1].total_topics, stats[1].questions_resolved) == (0, 1, 5)


def test_recent_logs_resolve_names_and_tolerate_dangling_refs() -> None:
    crase = Topic(name="Crase")
    portugues = Discipline(name="Português", topics=[crase])
    plan = StudyPlan(
        name="Plano",
        disciplines=[portugues],
        logs=[
            StudyLog(discipline_id=portugues.id, topic_id=crase.id),
            StudyLog(discipline_id=portugues.id, topic_id="gone"),
            StudyLog(discipline_id="gone", topic_id=crase.id),
        ],
    )

    entries = recent_logs(plan)

    assert [(e.discipline_name, e.topic_name) for e in entries] == [
        ("Português", "Crase"),
        ("Português", None),
        (None, None),
    ]


def test_recent_logs_limit() -> None:
    plan = StudyPlan(name="Plano", logs=[StudyLog() for _ in range(10)])
    assert len(recent_logs(plan)) == 6
    assert len(recent_logs(plan, limit=2)) == 2


def test_plan_summary(auditor_plan: StudyPlan) -> None:
    summary = plan_summary(auditor_plan)
    assert summary.progress == 50
    assert summary.discipline_count == 1
    assert summary.completed_topics == 2
    assert summary.label == "Receita Federal - Auditor Fiscal"
    assert plan_summary(StudyPlan(name="Geral", is_general=True)).label == "Geral"
