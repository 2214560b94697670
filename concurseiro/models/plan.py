"""Study plan tree: plans, disciplines, topics and study logs."""
import re
import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_COLOR = "#26C6A9"
DURATION_PATTERN = re.compile(r"^\d{1,3}:[0-5]\d:[0-5]\d$")

StudyCategory = Literal["Teoria", "Exercícios", "Revisão", "Simulado", "Outros"]


def new_id() -> str:
    """Generate an entity id (UUID4)."""
    return str(uuid.uuid4())


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def check_unique_ids(items: list, label: str) -> None:
    seen = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"duplicate {label} id: {item.id}")
        seen.add(item.id)


class Topic(BaseModel):
    """Atomic study item."""
    id: str = Field(default_factory=new_id)
    name: str
    is_completed: bool = False


class Discipline(BaseModel):
    """Subject area within a plan, colored for grouping."""
    id: str = Field(default_factory=new_id)
    name: str
    color: str = DEFAULT_COLOR
    topics: list[Topic] = Field(default_factory=list)

    @model_validator(mode="after")
    def unique_topic_ids(self) -> "Discipline":
        check_unique_ids(self.topics, "topic")
        return self

    def find_topic(self, topic_id: str) -> Topic | None:
        return next((t for t in self.topics if t.id == topic_id), None)


class QuestionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    correct: int = Field(default=0, ge=0)
    wrong: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.correct + self.wrong


class PageRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: int = Field(default=0, ge=0)
    end: int = Field(default=0, ge=0)

    @property
    def count(self) -> int:
        return max(0, self.end - self.start)


class VideoRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    start: str = "00:00:00"
    end: str = "00:00:00"


class StudyLog(BaseModel):
    """One recorded study session. Immutable once built.

    ``discipline_id`` and ``topic_id`` are lookup-only references: the
    referenced entities may be deleted later and the log keeps the stale id.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    date: int = Field(default_factory=now_ms)  # epoch ms
    category: StudyCategory = "Teoria"
    discipline_id: str = ""
    topic_id: str = ""
    duration: str = "00:00:00"
    material: str = ""
    is_theory_finished: bool = False
    count_in_planning: bool = True
    schedule_revision: bool = False
    questions: QuestionRecord = Field(default_factory=QuestionRecord)
    pages: PageRange = Field(default_factory=PageRange)
    video: VideoRecord = Field(default_factory=VideoRecord)
    comments: str = ""

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: str) -> str:
        """Ensure duration looks like HH:MM:SS."""
        if not DURATION_PATTERN.match(v):
            raise ValueError("duration must be formatted as HH:MM:SS")
        return v


class StudyPlan(BaseModel):
    """Top-level study objective: an exam or a custom goal."""
    id: str = Field(default_factory=new_id)
    name: str
    observation: str = ""
    image_url: str = ""
    editais: str = ""  # selected exam notice
    cargos: str = ""  # custom study type / role
    is_general: bool = False
    disciplines: list[Discipline] = Field(default_factory=list)
    logs: list[StudyLog] = Field(default_factory=list)  # newest first
    created_at: int = Field(default_factory=now_ms)

    @model_validator(mode="after")
    def unique_child_ids(self) -> "StudyPlan":
        check_unique_ids(self.disciplines, "discipline")
        check_unique_ids(self.logs, "log")
        return self

    def find_discipline(self, discipline_id: str) -> Discipline | None:
        return next((d for d in self.disciplines if d.id == discipline_id), None)

    def all_topics(self) -> list[Topic]:
        return [t for d in self.disciplines for t in d.topics]
