"""Study session form buffer."""
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Literal, Optional, get_args

from concurseiro.errors import DraftError
from concurseiro.models.plan import (
    PageRange,
    QuestionRecord,
    StudyCategory,
    StudyLog,
    StudyPlan,
    VideoRecord,
)


CATEGORIES: list[str] = list(get_args(StudyCategory))

DateChoice = Literal["today", "yesterday", "other"]


@dataclass
class StudyLogDraft:
    """Everything the study-log form captures before a StudyLog is built."""
    date_choice: DateChoice = "today"
    other_date: Optional[date] = None
    category: str = CATEGORIES[0]
    discipline_id: str = ""
    topic_id: str = ""
    duration: str = "00:00:00"
    material: str = ""
    is_theory_finished: bool = False
    count_in_planning: bool = True
    schedule_revision: bool = False
    questions: QuestionRecord = field(default_factory=QuestionRecord)
    pages: PageRange = field(default_factory=PageRange)
    video: VideoRecord = field(default_factory=VideoRecord)
    comments: str = ""
    create_another: bool = False

    @classmethod
    def for_plan(cls, plan: StudyPlan) -> "StudyLogDraft":
        """Preselect the plan's first discipline and its first topic."""
        draft = cls()
        if plan.disciplines:
            first = plan.disciplines[0]
            draft.discipline_id = first.id
            if first.topics:
                draft.topic_id = first.topics[0].id
        return draft

    def select_discipline(self, plan: StudyPlan, discipline_id: str) -> None:
        """Switch discipline; the topic falls back to its first topic."""
        discipline = plan.find_discipline(discipline_id)
        self.discipline_id = discipline_id
        self.topic_id = discipline.topics[0].id if discipline and discipline.topics else ""

    def resolve_timestamp(self, now: datetime) -> int:
        """Epoch ms for the chosen date."""
        if self.date_choice == "yesterday":
            when = now - timedelta(days=1)
        elif self.date_choice == "other":
            if self.other_date is None:
                raise DraftError("Pick a date for 'other'")
            when = datetime.combine(self.other_date, now.timetz())
        else:
            when = now
        return int(when.timestamp() * 1000)

    def build(self, now: Optional[datetime] = None) -> StudyLog:
        if self.category not in CATEGORIES:
            raise DraftError(f"Category must be one of: {', '.join(CATEGORIES)}")
        now = now or datetime.now().astimezone()
        try:
            return StudyLog(
                date=self.resolve_timestamp(now),
                category=self.category,
                discipline_id=self.discipline_id,
                topic_id=self.topic_id,
                duration=self.duration,
                material=self.material,
                is_theory_finished=self.is_theory_finished,
                count_in_planning=self.count_in_planning,
                schedule_revision=self.schedule_revision,
                questions=self.questions,
                pages=self.pages,
                video=self.video,
                comments=self.comments,
            )
        except ValueError as e:
            raise DraftError(str(e)) from e

    def reset_transient(self) -> None:
        """Clear per-session fields after 'save and create another'.

        Date choice, category, discipline/topic and flags are kept.
        """
        self.duration = "00:00:00"
        self.material = ""
        self.questions = QuestionRecord()
        self.pages = PageRange()
        self.video = VideoRecord()
        self.comments = ""
