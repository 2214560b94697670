"""ADK tool wrappers for the study organizer.

Each tool opens the plan store, performs one operation and returns a dict
with a "status" of "success" or "error" plus a human-readable "message".
"""
from datetime import date
import logging
from typing import Optional

from concurseiro.errors import DisciplineNotFoundError, DraftError, PlanNotFoundError, TopicNotFoundError
from concurseiro.models.plan import QuestionRecord
from concurseiro.tools.ai_suggest import suggest_disciplines
from concurseiro.tools.discipline_editor import DisciplineDraft
from concurseiro.tools.local_storage import default_storage
from concurseiro.tools.plan_form import PlanDraft, find_option
from concurseiro.tools.plan_store import PlanStore, resolve_discipline, resolve_topic
from concurseiro.tools.progress import discipline_progress, plan_summary, recent_logs
from concurseiro.tools.session import AppSession

logger = logging.getLogger(__name__)

LOOKUP_ERRORS = (DraftError, PlanNotFoundError, DisciplineNotFoundError, TopicNotFoundError, ValueError)


def _open_store() -> PlanStore:
    return PlanStore(default_storage())


# ============================================================================
# PLAN TOOLS
# ============================================================================

def list_plans() -> dict:
    """
    List all study plans with their progress.

    Returns:
        dict with:
        - status: "success"
        - plans: list of {plan_id, name, label, progress, disciplines, completed_topics}
        - message: summary message
    """
    store = _open_store()
    plans = []
    for plan in store.plans:
        summary = plan_summary(plan)
        plans.append({
            "plan_id": plan.id,
            "name": summary.name,
            "label": summary.label,
            "progress": summary.progress,
            "disciplines": summary.discipline_count,
            "completed_topics": summary.completed_topics,
        })
    return {
        "status": "success",
        "plans": plans,
        "message": f"Found {len(plans)} plan(s)"
    }


def get_plan_progress(plan: str) -> dict:
    """
    Show progress for one plan: overall percentage, per-discipline counts
    and the most recent study sessions.

    Args:
        plan: Plan id, id prefix or name

    Returns:
        dict with status, progress, disciplines, recent_logs, message
    """
    try:
        found = _open_store().resolve(plan)
    except PlanNotFoundError as e:
        return {"status": "error", "message": str(e)}

    summary = plan_summary(found)
    disciplines = [
        {
            "discipline_id": d.discipline_id,
            "name": d.name,
            "completed_topics": d.completed_topics,
            "total_topics": d.total_topics,
            "questions_resolved": d.questions_resolved,
            "progress": d.percentage,
        }
        for d in discipline_progress(found)
    ]
    logs = [
        {
            "date": date.fromtimestamp(entry.log.date / 1000).isoformat(),
            "category": entry.log.category,
            "discipline": entry.discipline_name,
            "topic": entry.topic_name,
            "duration": entry.log.duration,
        }
        for entry in recent_logs(found)
    ]
    return {
        "status": "success",
        "plan_id": found.id,
        "progress": summary.progress,
        "disciplines": disciplines,
        "recent_logs": logs,
        "message": f"{found.name} is {summary.progress}% complete"
    }


def create_plan(
    name: str,
    observation: str = "",
    category: str = "concurso",
    exam: str = "",
    is_general: bool = False
) -> dict:
    """
    Create a new study plan.

    Args:
        name: Plan name (required)
        observation: Optional notes
        category: "concurso" (public exam) or "personalizado" (custom study)
        exam: Exam or study type, e.g. "Receita Federal - Auditor Fiscal"
        is_general: True when the plan is not tied to a specific exam

    Returns:
        dict with status, plan_id, message
    """
    if category not in ("concurso", "personalizado"):
        return {"status": "error", "message": f"Unknown category: {category}"}

    draft = PlanDraft(name=name, observation=observation)
    draft.change_category(category)
    if exam:
        draft.selected_value = find_option(exam, draft.options())
    draft.set_general(is_general)

    try:
        plans = _open_store().create_plan(draft)
    except DraftError as e:
        return {"status": "error", "message": str(e)}

    logger.info("✅ Created plan %s", plans[0].name)
    return {
        "status": "success",
        "plan_id": plans[0].id,
        "message": f"Created plan {plans[0].name}"
    }


def delete_plan(plan: str, confirmed: bool = False) -> dict:
    """
    Delete a study plan. Only call with confirmed=True after the user
    explicitly agreed to the deletion.

    Args:
        plan: Plan id, id prefix or name
        confirmed: Explicit user confirmation

    Returns:
        dict with status and message
    """
    store = _open_store()
    try:
        found = store.resolve(plan)
    except PlanNotFoundError as e:
        return {"status": "error", "message": str(e)}

    session = AppSession(store, confirm=lambda prompt: confirmed)
    if not session.request_delete_plan(found.id):
        return {
            "status": "error",
            "message": "Deletion not confirmed. Ask the user to confirm first."
        }
    return {"status": "success", "message": f"Deleted plan {found.name}"}


def suggest_plan_disciplines(plan: str) -> dict:
    """
    Ask Gemini for the main disciplines of a plan and add the new ones.

    Args:
        plan: Plan id, id prefix or name

    Returns:
        dict with status, added (discipline names), message
    """
    store = _open_store()
    try:
        found = store.resolve(plan)
    except PlanNotFoundError as e:
        return {"status": "error", "message": str(e)}

    suggestions = suggest_disciplines(found.name, found.cargos or None)
    if not suggestions:
        return {"status": "error", "added": [], "message": "No suggestions returned"}

    before = {d.id for d in found.disciplines}
    store.add_suggested_disciplines(found.id, suggestions)
    added = [d.name for d in store.get_plan(found.id).disciplines if d.id not in before]
    return {
        "status": "success",
        "added": added,
        "message": f"Added {len(added)} discipline(s)"
    }


# ============================================================================
# DISCIPLINE TOOLS
# ============================================================================

def add_discipline(
    plan: str,
    name: str,
    topics: Optional[list[str]] = None,
    suggest_topics: bool = False
) -> dict:
    """
    Add a discipline to a plan, optionally with topics.

    Args:
        plan: Plan id, id prefix or name
        name: Discipline name
        topics: Topic names to add
        suggest_topics: Also append AI-suggested topics

    Returns:
        dict with status, discipline_id, topics (count), message
    """
    store = _open_store()
    try:
        found = store.resolve(plan)
        draft = DisciplineDraft(name=name)
        draft.append_suggestions(topics or [])
        if suggest_topics:
            draft.suggest_topics(found.name)
        plans = store.save_discipline(found.id, draft)
    except LOOKUP_ERRORS as e:
        return {"status": "error", "message": str(e)}

    created = next(p for p in plans if p.id == found.id).disciplines[-1]
    return {
        "status": "success",
        "discipline_id": created.id,
        "topics": len(created.topics),
        "message": f"Added {created.name} with {len(created.topics)} topic(s)"
    }


def toggle_topic(plan: str, discipline: str, topic: str) -> dict:
    """
    Flip a topic between completed and pending.

    Args:
        plan: Plan id, id prefix or name
        discipline: Discipline id, id prefix or name
        topic: Topic id prefix or name

    Returns:
        dict with status, is_completed, message
    """
    store = _open_store()
    try:
        found = store.resolve(plan)
        disc = resolve_discipline(found, discipline)
    except LOOKUP_ERRORS as e:
        return {"status": "error", "message": str(e)}

    target = resolve_topic(disc, topic)
    if target is None:
        return {"status": "error", "message": f"Topic {topic} not found in {disc.name}"}

    store.toggle_topic(found.id, disc.id, target.id)
    return {
        "status": "success",
        "is_completed": not target.is_completed,
        "message": f"{target.name} is now {'completed' if not target.is_completed else 'pending'}"
    }


# ============================================================================
# STUDY LOG TOOLS
# ============================================================================

def record_study_session(
    plan: str,
    discipline: str = "",
    topic: str = "",
    category: str = "Teoria",
    duration: str = "00:00:00",
    material: str = "",
    correct: int = 0,
    wrong: int = 0,
    count_in_planning: bool = True,
    yesterday: bool = False,
    comments: str = ""
) -> dict:
    """
    Record a study session in a plan.

    Args:
        plan: Plan id, id prefix or name
        discipline: Discipline id prefix or name (defaults to the first)
        topic: Topic id prefix or name (defaults to the discipline's first)
        category: Teoria, Exercícios, Revisão, Simulado or Outros
        duration: HH:MM:SS
        material: Material label, e.g. "Aula 01"
        correct: Questions answered correctly
        wrong: Questions answered wrong
        count_in_planning: Mark the topic as completed
        yesterday: The session happened yesterday
        comments: Free text

    Returns:
        dict with status, log_id, message
    """
    store = _open_store()
    session = AppSession(store, confirm=lambda prompt: False)
    try:
        found = session.open_plan(store.resolve(plan).id)
        draft = session.start_study_log()
        if discipline:
            draft.select_discipline(found, resolve_discipline(found, discipline).id)
        if topic:
            match = resolve_topic(found.find_discipline(draft.discipline_id), topic)
            if match is None:
                raise DraftError(f"Topic {topic} not found")
            draft.topic_id = match.id
        draft.date_choice = "yesterday" if yesterday else "today"
        draft.category = category
        draft.duration = duration
        draft.material = material
        draft.count_in_planning = count_in_planning
        draft.comments = comments
        draft.questions = QuestionRecord(correct=correct, wrong=wrong)
        plans = session.submit_study_log()
    except LOOKUP_ERRORS as e:
        return {"status": "error", "message": str(e)}

    log = next(p for p in plans if p.id == found.id).logs[0]
    return {
        "status": "success",
        "log_id": log.id,
        "message": f"Recorded {log.category} session of {log.duration}"
    }


def get_current_date() -> dict:
    """
    Get the current date.

    Returns:
        dict with status, today (YYYY-MM-DD), message
    """
    today = date.today()
    return {
        "status": "success",
        "today": today.isoformat(),
        "message": f"Today is {today.strftime('%A, %B %d, %Y')}"
    }
