"""In-memory plan collection mirrored to local storage.

The store is the single owner of the collection. Every mutation builds a
new list, persists it, and returns it.
"""
import logging
from typing import Iterable, Optional

from concurseiro.errors import DisciplineNotFoundError, PlanNotFoundError, TopicNotFoundError
from concurseiro.models.plan import Discipline, StudyLog, StudyPlan, Topic, check_unique_ids
from concurseiro.models.suggestions import DisciplineSuggestion
from concurseiro.tools.discipline_editor import DisciplineDraft
from concurseiro.tools.local_storage import PLANS_KEY, LocalStorage, load_plans, save_plans
from concurseiro.tools.plan_form import PlanDraft

logger = logging.getLogger(__name__)


class PlanStore:
    """Plan repository plus discipline/topic/log mutations."""

    def __init__(self, storage: LocalStorage, key: str = PLANS_KEY):
        self.storage = storage
        self.key = key
        self._plans: list[StudyPlan] = load_plans(storage, key)
        logger.info("Loaded %d plan(s) from %s", len(self._plans), storage.root)

    @property
    def plans(self) -> tuple[StudyPlan, ...]:
        return tuple(self._plans)

    def _commit(self, plans: list[StudyPlan]) -> list[StudyPlan]:
        """Persist, then swap in. A failed write leaves memory untouched."""
        check_unique_ids(plans, "plan")
        save_plans(plans, self.storage, self.key)
        self._plans = plans
        return list(plans)

    def get_plan(self, plan_id: str) -> StudyPlan:
        for plan in self._plans:
            if plan.id == plan_id:
                return plan
        raise PlanNotFoundError(plan_id)

    def find_plan(self, plan_id: Optional[str]) -> Optional[StudyPlan]:
        return next((p for p in self._plans if p.id == plan_id), None)

    def resolve(self, ref: str) -> StudyPlan:
        """Find a plan by id, unique id prefix, or name (case-insensitive)."""
        plan = _resolve(self._plans, ref)
        if plan is None:
            raise PlanNotFoundError(ref)
        return plan

    def _replace_plan(self, plan_id: str, plan: StudyPlan) -> list[StudyPlan]:
        return self._commit([plan if p.id == plan_id else p for p in self._plans])

    # ------------------------------------------------------------------
    # Plans
    # ------------------------------------------------------------------

    def create_plan(self, draft: PlanDraft) -> list[StudyPlan]:
        """Add a new, empty plan at the front of the collection."""
        fields = draft.to_fields()
        plan = StudyPlan(**fields)
        logger.info("Created plan %s (%s)", plan.name, plan.id)
        return self._commit([plan, *self._plans])

    def update_plan(self, plan_id: str, **fields) -> list[StudyPlan]:
        """Merge partial fields into an existing plan."""
        current = self.get_plan(plan_id)
        fields.pop("id", None)
        updated = StudyPlan.model_validate({**current.model_dump(), **fields})
        return self._replace_plan(plan_id, updated)

    def delete_plan(self, plan_id: str) -> list[StudyPlan]:
        self.get_plan(plan_id)
        logger.info("Deleted plan %s", plan_id)
        return self._commit([p for p in self._plans if p.id != plan_id])

    # ------------------------------------------------------------------
    # Disciplines and topics
    # ------------------------------------------------------------------

    def save_discipline(
        self,
        plan_id: str,
        draft: DisciplineDraft,
        discipline_id: Optional[str] = None
    ) -> list[StudyPlan]:
        """Create (append) or update (merge by id) a discipline of a plan."""
        plan = self.get_plan(plan_id)
        fields = draft.to_fields()

        if discipline_id is None:
            disciplines = [*plan.disciplines, Discipline(**fields)]
        else:
            if plan.find_discipline(discipline_id) is None:
                raise DisciplineNotFoundError(discipline_id)
            disciplines = [
                Discipline.model_validate({**d.model_dump(), **fields}) if d.id == discipline_id else d
                for d in plan.disciplines
            ]

        return self._replace_plan(plan_id, plan.model_copy(update={"disciplines": disciplines}))

    def delete_discipline(self, plan_id: str, discipline_id: str) -> list[StudyPlan]:
        """Remove a discipline. Logs that reference it keep the stale id."""
        plan = self.get_plan(plan_id)
        if plan.find_discipline(discipline_id) is None:
            raise DisciplineNotFoundError(discipline_id)
        disciplines = [d for d in plan.disciplines if d.id != discipline_id]
        return self._replace_plan(plan_id, plan.model_copy(update={"disciplines": disciplines}))

    def toggle_topic(self, plan_id: str, discipline_id: str, topic_id: str) -> list[StudyPlan]:
        plan = self.get_plan(plan_id)
        discipline = plan.find_discipline(discipline_id)
        if discipline is None:
            raise DisciplineNotFoundError(discipline_id)
        if discipline.find_topic(topic_id) is None:
            raise TopicNotFoundError(topic_id)
        disciplines = [
            _map_topic(d, topic_id, lambda t: not t.is_completed) if d.id == discipline_id else d
            for d in plan.disciplines
        ]
        return self._replace_plan(plan_id, plan.model_copy(update={"disciplines": disciplines}))

    def add_suggested_disciplines(
        self,
        plan_id: str,
        suggestions: Iterable[DisciplineSuggestion]
    ) -> list[StudyPlan]:
        """Merge AI discipline suggestions, skipping names the plan already has."""
        plan = self.get_plan(plan_id)
        existing = {d.name.strip().lower() for d in plan.disciplines}
        added = []
        for suggestion in suggestions:
            key = suggestion.name.lower()
            if key in existing:
                continue
            existing.add(key)
            added.append(Discipline(name=suggestion.name, color=suggestion.color))
        logger.info("Added %d suggested discipline(s) to %s", len(added), plan.name)
        disciplines = [*plan.disciplines, *added]
        return self._replace_plan(plan_id, plan.model_copy(update={"disciplines": disciplines}))

    # ------------------------------------------------------------------
    # Study logs
    # ------------------------------------------------------------------

    def record_log(self, plan_id: str, log: StudyLog) -> list[StudyPlan]:
        """Prepend a study log; complete its topic when it counts in planning."""
        plan = self.get_plan(plan_id)
        if any(existing.id == log.id for existing in plan.logs):
            raise ValueError(f"duplicate log id: {log.id}")

        disciplines = plan.disciplines
        if log.count_in_planning:
            disciplines = [
                _map_topic(d, log.topic_id, lambda t: True) if d.id == log.discipline_id else d
                for d in plan.disciplines
            ]

        updated = plan.model_copy(update={
            "disciplines": disciplines,
            "logs": [log, *plan.logs],
        })
        return self._replace_plan(plan_id, updated)


def resolve_discipline(plan: StudyPlan, ref: str) -> Discipline:
    """Find a discipline of a plan by id, unique id prefix, or name."""
    discipline = _resolve(plan.disciplines, ref)
    if discipline is None:
        raise DisciplineNotFoundError(ref)
    return discipline


def resolve_topic(discipline: Optional[Discipline | DisciplineDraft], ref: str) -> Optional[Topic]:
    """Find a topic by id, unique id prefix, or name. None when absent."""
    if discipline is None:
        return None
    return _resolve(discipline.topics, ref)


def _resolve(items: list, ref: str):
    ref = ref.strip()
    for item in items:
        if item.id == ref:
            return item
    prefixed = [item for item in items if item.id.startswith(ref)] if ref else []
    if len(prefixed) == 1:
        return prefixed[0]
    named = [item for item in items if item.name.lower() == ref.lower()]
    if len(named) == 1:
        return named[0]
    return None


def _map_topic(discipline: Discipline, topic_id: str, completed) -> Discipline:
    topics = [
        t.model_copy(update={"is_completed": completed(t)}) if t.id == topic_id else t
        for t in discipline.topics
    ]
    return discipline.model_copy(update={"topics": topics})
