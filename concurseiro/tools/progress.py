"""Read-time progress aggregation over a plan tree. Nothing is cached."""
from dataclasses import dataclass
from typing import Optional

from concurseiro.models.plan import Discipline, StudyLog, StudyPlan


def percentage(completed: int, total: int) -> int:
    """round(100 * completed / total), halves rounded up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


def total_topic_count(plan: StudyPlan) -> int:
    return len(plan.all_topics())


def completed_topic_count(plan: StudyPlan) -> int:
    return sum(1 for t in plan.all_topics() if t.is_completed)


def calculate_progress(plan: StudyPlan) -> int:
    """Completion percentage of the whole plan."""
    return percentage(completed_topic_count(plan), total_topic_count(plan))


@dataclass(frozen=True)
class DisciplineProgress:
    discipline_id: str
    name: str
    color: str
    completed_topics: int
    total_topics: int
    questions_resolved: int

    @property
    def percentage(self) -> int:
        return percentage(self.completed_topics, self.total_topics)


@dataclass(frozen=True)
class PlanSummary:
    """Data shown on a dashboard card."""
    plan_id: str
    name: str
    progress: int
    discipline_count: int
    completed_topics: int
    label: str


@dataclass(frozen=True)
class LogEntryView:
    """A study log with its references resolved (None when dangling)."""
    log: StudyLog
    discipline_name: Optional[str]
    topic_name: Optional[str]


def questions_resolved(plan: StudyPlan, discipline_id: str) -> int:
    """Correct plus wrong answers over all logs that reference the discipline."""
    return sum(log.questions.total for log in plan.logs if log.discipline_id == discipline_id)


def _discipline_progress(plan: StudyPlan, discipline: Discipline) -> DisciplineProgress:
    return DisciplineProgress(
        discipline_id=discipline.id,
        name=discipline.name,
        color=discipline.color,
        completed_topics=sum(1 for t in discipline.topics if t.is_completed),
        total_topics=len(discipline.topics),
        questions_resolved=questions_resolved(plan, discipline.id),
    )


def discipline_progress(plan: StudyPlan) -> list[DisciplineProgress]:
    return [_discipline_progress(plan, d) for d in plan.disciplines]


def plan_summary(plan: StudyPlan) -> PlanSummary:
    return PlanSummary(
        plan_id=plan.id,
        name=plan.name,
        progress=calculate_progress(plan),
        discipline_count=len(plan.disciplines),
        completed_topics=completed_topic_count(plan),
        label=plan.editais or plan.cargos or ("Geral" if plan.is_general else ""),
    )


def recent_logs(plan: StudyPlan, limit: int = 6) -> list[LogEntryView]:
    """Newest logs first, with discipline and topic names looked up now."""
    entries = []
    for log in plan.logs[:limit]:
        discipline = plan.find_discipline(log.discipline_id)
        topic = discipline.find_topic(log.topic_id) if discipline else None
        entries.append(LogEntryView(
            log=log,
            discipline_name=discipline.name if discipline else None,
            topic_name=topic.name if topic else None,
        ))
    return entries
