"""Shared fixtures: a store on a temporary storage directory."""
from pathlib import Path

import pytest

from concurseiro.models.plan import Discipline, StudyPlan, Topic
from concurseiro.tools.local_storage import LocalStorage
from concurseiro.tools.plan_store import PlanStore


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "state")


@pytest.fixture
def store(storage: LocalStorage) -> PlanStore:
    return PlanStore(storage)


@pytest.fixture
def auditor_plan() -> StudyPlan:
    """'Auditor Fiscal' with 'Português' holding 4 topics, 2 completed."""
    portugues = Discipline(
        name="Português",
        topics=[
            Topic(name="Crase", is_completed=True),
            Topic(name="Concordância", is_completed=True),
            Topic(name="Regência"),
            Topic(name="Pontuação"),
        ],
    )
    return StudyPlan(name="Auditor Fiscal", editais="Receita Federal - Auditor Fiscal", disciplines=[portugues])
