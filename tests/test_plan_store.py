"""Tests for concurseiro.tools.plan_store."""
import pytest

from concurseiro.errors import DisciplineNotFoundError, DraftError, PlanNotFoundError, TopicNotFoundError
from concurseiro.models.plan import StudyLog
from concurseiro.models.suggestions import DisciplineSuggestion
from concurseiro.tools.discipline_editor import DisciplineDraft
from concurseiro.tools.local_storage import LocalStorage
from concurseiro.tools.plan_form import PlanDraft
from concurseiro.tools.plan_store import PlanStore, resolve_discipline, resolve_topic


def _plan_with_discipline(store: PlanStore, topics=("Crase", "Regência")):
    plan = store.create_plan(PlanDraft(name="Auditor Fiscal"))[0]
    draft = DisciplineDraft(name="Português")
    for name in topics:
        draft.add_topic(name)
    plan = next(p for p in store.save_discipline(plan.id, draft) if p.id == plan.id)
    return plan, plan.disciplines[0]


def test_create_plan_prepends_empty_plan(store: PlanStore) -> None:
    store.create_plan(PlanDraft(name="Primeiro"))
    plans = store.create_plan(PlanDraft(name="Segundo", observation="obs"))

    assert [p.name for p in plans] == ["Segundo", "Primeiro"]
    assert plans[0].disciplines == []
    assert plans[0].logs == []
    assert plans[0].observation == "obs"
    assert plans[0].id != plans[1].id


def test_create_plan_requires_name(store: PlanStore, storage: LocalStorage) -> None:
    with pytest.raises(DraftError):
        store.create_plan(PlanDraft(name="   "))
    assert store.plans == ()
    assert storage.get_item("concurseiro_plans") is None


def test_create_then_delete_restores_collection(store: PlanStore) -> None:
    store.create_plan(PlanDraft(name="Existente"))
    before = list(store.plans)

    created = store.create_plan(PlanDraft(name="Temporário"))[0]
    after = store.delete_plan(created.id)

    assert after == before


def test_update_plan_merges_fields(store: PlanStore) -> None:
    plan, _ = _plan_with_discipline(store)

    plans = store.update_plan(plan.id, name="Auditor Fiscal RFB", observation="Prova em março")

    updated = plans[0]
    assert updated.id == plan.id
    assert updated.name == "Auditor Fiscal RFB"
    assert updated.observation == "Prova em março"
    assert updated.disciplines == plan.disciplines
    assert updated.created_at == plan.created_at


def test_update_unknown_plan_raises(store: PlanStore) -> None:
    with pytest.raises(PlanNotFoundError):
        store.update_plan("missing", name="x")


def test_mutations_are_persisted(store: PlanStore, storage: LocalStorage) -> None:
    plan, discipline = _plan_with_discipline(store)
    store.toggle_topic(plan.id, discipline.id, discipline.topics[0].id)

    reloaded = PlanStore(storage)

    assert reloaded.plans == store.plans
    assert reloaded.plans[0].disciplines[0].topics[0].is_completed is True


def test_save_discipline_creates_and_updates(store: PlanStore) -> None:
    plan, discipline = _plan_with_discipline(store)

    draft = DisciplineDraft.from_discipline(discipline)
    draft.name = "Língua Portuguesa"
    draft.set_color("#3b82f6")
    draft.remove_topic(discipline.topics[0].id)
    plans = store.save_discipline(plan.id, draft, discipline.id)

    updated = plans[0].disciplines[0]
    assert updated.id == discipline.id
    assert updated.name == "Língua Portuguesa"
    assert updated.color == "#3B82F6"
    assert [t.name for t in updated.topics] == ["Regência"]


def test_save_discipline_appends_new_discipline(store: PlanStore) -> None:
    plan, _ = _plan_with_discipline(store)
    plans = store.save_discipline(plan.id, DisciplineDraft(name="Direito Tributário"))
    assert [d.name for d in plans[0].disciplines] == ["Português", "Direito Tributário"]


def test_save_discipline_unknown_id(store: PlanStore) -> None:
    plan, _ = _plan_with_discipline(store)
    with pytest.raises(DisciplineNotFoundError):
        store.save_discipline(plan.id, DisciplineDraft(name="X"), "missing")


def test_delete_discipline_keeps_logs(store: PlanStore) -> None:
    plan, discipline = _plan_with_discipline(store)
    log = StudyLog(discipline_id=discipline.id, topic_id=discipline.topics[0].id)
    store.record_log(plan.id, log)

    plans = store.delete_discipline(plan.id, discipline.id)

    assert plans[0].disciplines == []
    assert plans[0].logs == [log]


def test_record_log_counting_in_planning_completes_topic(store: PlanStore) -> None:
    plan, discipline = _plan_with_discipline(store)
    topic = discipline.topics[1]

    plans = store.record_log(plan.id, StudyLog(discipline_id=discipline.id, topic_id=topic.id, count_in_planning=True))

    topics = plans[0].disciplines[0].topics
    assert [t.is_completed for t in topics] == [False, True]


def test_record_log_not_counting_leaves_topic(store: PlanStore) -> None:
    plan, discipline = _plan_with_discipline(store)
    topic = discipline.topics[0]

    plans = store.record_log(plan.id, StudyLog(discipline_id=discipline.id, topic_id=topic.id, count_in_planning=False))

    assert all(not t.is_completed for t in plans[0].disciplines[0].topics)
    assert len(plans[0].logs) == 1


def test_record_log_prepends_newest_first(store: PlanStore) -> None:
    plan, _ = _plan_with_discipline(store)
    first = StudyLog(material="Aula 01")
    second = StudyLog(material="Aula 02")
    store.record_log(plan.id, first)
    plans = store.record_log(plan.id, second)
    assert [log.material for log in plans[0].logs] == ["Aula 02", "Aula 01"]


def test_record_log_rejects_duplicate_id(store: PlanStore) -> None:
    plan, _ = _plan_with_discipline(store)
    log = StudyLog()
    store.record_log(plan.id, log)
    with pytest.raises(ValueError):
        store.record_log(plan.id, log)


def test_record_log_with_dangling_topic(store: PlanStore) -> None:
    plan, discipline = _plan_with_discipline(store)
    plans = store.record_log(plan.id, StudyLog(discipline_id=discipline.id, topic_id="deleted"))
    assert all(not t.is_completed for t in plans[0].disciplines[0].topics)
    assert plans[0].logs[0].topic_id == "deleted"


def test_toggle_topic_flips_back_and_forth(store: PlanStore) -> None:
    plan, discipline = _plan_with_discipline(store)
    topic_id = discipline.topics[0].id

    store.toggle_topic(plan.id, discipline.id, topic_id)
    assert store.get_plan(plan.id).disciplines[0].topics[0].is_completed is True
    store.toggle_topic(plan.id, discipline.id, topic_id)
    assert store.get_plan(plan.id).disciplines[0].topics[0].is_completed is False


def test_add_suggested_disciplines_skips_existing_names(store: PlanStore) -> None:
    plan, _ = _plan_with_discipline(store)
    suggestions = [
        DisciplineSuggestion(name="português", color="#26C6A9"),
        DisciplineSuggestion(name="Direito Constitucional", color="#3B82F6"),
        DisciplineSuggestion(name="Contabilidade", color="#F59E0B"),
        DisciplineSuggestion(name="Contabilidade", color="#F59E0B"),
    ]

    plans = store.add_suggested_disciplines(plan.id, suggestions)

    assert [d.name for d in plans[0].disciplines] == ["Português", "Direito Constitucional", "Contabilidade"]
    assert plans[0].disciplines[1].topics == []


def test_resolve_by_id_prefix_and_name(store: PlanStore) -> None:
    plan, discipline = _plan_with_discipline(store)

    assert store.resolve(plan.id) == plan
    assert store.resolve(plan.id[:8]) == plan
    assert store.resolve("auditor fiscal") == plan
    with pytest.raises(PlanNotFoundError):
        store.resolve("Polícia Federal")

    assert resolve_discipline(plan, "PORTUGUÊS") == discipline
    assert resolve_topic(discipline, "regência") == discipline.topics[1]
    assert resolve_topic(discipline, "Pontuação") is None
    assert resolve_topic(None, "Crase") is None


def test_failed_write_leaves_store_unchanged(store: PlanStore, storage: LocalStorage, monkeypatch) -> None:
    store.create_plan(PlanDraft(name="Existente"))
    before = store.plans

    def fail(key: str, value: str) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(storage, "set_item", fail)
    with pytest.raises(OSError):
        store.create_plan(PlanDraft(name="Novo"))

    assert store.plans == before
    monkeypatch.undo()
    assert [p.name for p in store.create_plan(PlanDraft(name="Outro"))] == ["Outro", "Existente"]


def test_toggle_topic_unknown_ids_raise(store: PlanStore) -> None:
    plan, discipline = _plan_with_discipline(store)
    before = store.plans

    with pytest.raises(DisciplineNotFoundError):
        store.toggle_topic(plan.id, "missing", discipline.topics[0].id)
    with pytest.raises(TopicNotFoundError):
        store.toggle_topic(plan.id, discipline.id, "missing")

    assert store.plans == before
