"""UI session: active view, selected plan and form states over a PlanStore."""
import logging
from typing import Callable, Optional

from concurseiro.errors import DisciplineNotFoundError
from concurseiro.models.plan import StudyPlan
from concurseiro.models.view_state import FormState, View
from concurseiro.tools.discipline_editor import DisciplineDraft
from concurseiro.tools.plan_form import PlanDraft
from concurseiro.tools.plan_store import PlanStore
from concurseiro.tools.study_log import StudyLogDraft

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]

CONFIRM_DELETE_PLAN = "Deseja realmente excluir este plano de estudos?"
CONFIRM_DELETE_DISCIPLINE = "Excluir esta disciplina?"


class AppSession:
    """Drives the store from discrete user actions.

    Destructive actions go through ``confirm``, which receives the prompt
    and must return True for the mutation to happen.
    """

    def __init__(self, store: PlanStore, confirm: Confirm):
        self.store = store
        self.confirm = confirm
        self.view = View.DASHBOARD
        self.selected_plan_id: Optional[str] = None

        self.plan_form = FormState.CLOSED
        self.discipline_form = FormState.CLOSED
        self.log_form = FormState.CLOSED

        self.plan_draft: Optional[PlanDraft] = None
        self.editing_plan_id: Optional[str] = None
        self.discipline_draft: Optional[DisciplineDraft] = None
        self.editing_discipline_id: Optional[str] = None
        self.log_draft: Optional[StudyLogDraft] = None

    @property
    def active_plan(self) -> Optional[StudyPlan]:
        return self.store.find_plan(self.selected_plan_id)

    def _require_active_plan(self) -> StudyPlan:
        plan = self.active_plan
        if plan is None:
            raise RuntimeError("No plan selected")
        return plan

    # Navigation

    def open_plan(self, plan_id: str) -> StudyPlan:
        plan = self.store.get_plan(plan_id)
        self.selected_plan_id = plan_id
        self.view = View.PLAN_DETAILS
        return plan

    def back_to_dashboard(self) -> None:
        """Leave the plan: selection cleared, plan-scoped forms closed."""
        self.view = View.DASHBOARD
        self.selected_plan_id = None
        self.discipline_form = self.log_form = FormState.CLOSED
        self.discipline_draft = self.log_draft = None
        self.editing_discipline_id = None

    def close_forms(self) -> None:
        self.plan_form = self.discipline_form = self.log_form = FormState.CLOSED
        self.plan_draft = self.discipline_draft = self.log_draft = None
        self.editing_plan_id = self.editing_discipline_id = None

    # Plans

    def start_new_plan(self) -> PlanDraft:
        self.plan_draft = PlanDraft()
        self.editing_plan_id = None
        self.plan_form = FormState.CREATING
        return self.plan_draft

    def start_edit_plan(self, plan_id: str) -> PlanDraft:
        self.plan_draft = PlanDraft.from_plan(self.store.get_plan(plan_id))
        self.editing_plan_id = plan_id
        self.plan_form = FormState.EDITING
        return self.plan_draft

    def submit_plan(self) -> list[StudyPlan]:
        """Save the plan form; validation errors leave the form open."""
        if self.plan_form is FormState.CLOSED or self.plan_draft is None:
            raise RuntimeError("Plan form is not open")
        if self.plan_form is FormState.EDITING:
            plans = self.store.update_plan(self.editing_plan_id, **self.plan_draft.to_fields())
        else:
            plans = self.store.create_plan(self.plan_draft)
        self.plan_form = FormState.CLOSED
        self.plan_draft = None
        self.editing_plan_id = None
        return plans

    def request_delete_plan(self, plan_id: str) -> bool:
        """Delete after confirmation; returns whether the plan was deleted."""
        if not self.confirm(CONFIRM_DELETE_PLAN):
            return False
        self.store.delete_plan(plan_id)
        if self.selected_plan_id == plan_id:
            self.back_to_dashboard()
        return True

    # Disciplines

    def start_new_discipline(self) -> DisciplineDraft:
        self._require_active_plan()
        self.discipline_draft = DisciplineDraft()
        self.editing_discipline_id = None
        self.discipline_form = FormState.CREATING
        return self.discipline_draft

    def start_edit_discipline(self, discipline_id: str) -> DisciplineDraft:
        discipline = self._require_active_plan().find_discipline(discipline_id)
        if discipline is None:
            raise DisciplineNotFoundError(discipline_id)
        self.discipline_draft = DisciplineDraft.from_discipline(discipline)
        self.editing_discipline_id = discipline_id
        self.discipline_form = FormState.EDITING
        return self.discipline_draft

    def submit_discipline(self) -> list[StudyPlan]:
        if self.discipline_form is FormState.CLOSED or self.discipline_draft is None:
            raise RuntimeError("Discipline form is not open")
        plan = self._require_active_plan()
        plans = self.store.save_discipline(plan.id, self.discipline_draft, self.editing_discipline_id)
        self.discipline_form = FormState.CLOSED
        self.discipline_draft = None
        self.editing_discipline_id = None
        return plans

    def request_delete_discipline(self, discipline_id: str) -> bool:
        plan = self._require_active_plan()
        if not self.confirm(CONFIRM_DELETE_DISCIPLINE):
            return False
        self.store.delete_discipline(plan.id, discipline_id)
        return True

    def toggle_topic(self, discipline_id: str, topic_id: str) -> list[StudyPlan]:
        return self.store.toggle_topic(self._require_active_plan().id, discipline_id, topic_id)

    # Study logs

    def start_study_log(self) -> StudyLogDraft:
        self.log_draft = StudyLogDraft.for_plan(self._require_active_plan())
        self.log_form = FormState.CREATING
        return self.log_draft

    def submit_study_log(self) -> list[StudyPlan]:
        """Record the session. With ``create_another`` the form stays open."""
        if self.log_form is FormState.CLOSED or self.log_draft is None:
            raise RuntimeError("Study log form is not open")
        plan = self._require_active_plan()
        plans = self.store.record_log(plan.id, self.log_draft.build())
        if self.log_draft.create_another:
            self.log_draft.reset_transient()
        else:
            self.log_form = FormState.CLOSED
            self.log_draft = None
        return plans
