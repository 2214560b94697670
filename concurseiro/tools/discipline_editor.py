"""Discipline editing buffer: name, palette color and topic list."""
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from concurseiro.errors import DraftError
from concurseiro.models.plan import Discipline, Topic
from concurseiro.tools.ai_suggest import generate_topics_for_discipline

logger = logging.getLogger(__name__)

COLORS = [
    "#26C6A9", "#3B82F6", "#8B5CF6", "#EC4899",
    "#F59E0B", "#EF4444", "#10B981", "#6366F1",
]

TopicGenerator = Callable[[str, str], list[str]]


@dataclass
class DisciplineDraft:
    """Topics are added and removed here; nothing reaches the plan until save."""
    name: str = ""
    color: str = COLORS[0]
    topics: list[Topic] = field(default_factory=list)

    @classmethod
    def from_discipline(cls, discipline: Discipline) -> "DisciplineDraft":
        return cls(
            name=discipline.name,
            color=discipline.color,
            topics=[t.model_copy() for t in discipline.topics],
        )

    def set_color(self, color: str) -> None:
        normalized = color.strip().upper()
        if normalized not in COLORS:
            raise DraftError(f"Color must be one of: {', '.join(COLORS)}")
        self.color = normalized

    def add_topic(self, name: str) -> Optional[Topic]:
        """Append a new incomplete topic. Blank names are ignored."""
        name = name.strip()
        if not name:
            return None
        topic = Topic(name=name)
        self.topics.append(topic)
        return topic

    def remove_topic(self, topic_id: str) -> None:
        self.topics = [t for t in self.topics if t.id != topic_id]

    def append_suggestions(self, names: Iterable[str]) -> int:
        """Bulk-append suggested topic names; returns how many were added."""
        return sum(1 for name in names if self.add_topic(name) is not None)

    def suggest_topics(self, plan_name: str, generate: TopicGenerator = generate_topics_for_discipline) -> int:
        """Ask the AI for topics of this discipline and append them."""
        if not self.name.strip():
            raise DraftError("Por favor, dê um nome à disciplina antes de usar a IA.")
        suggested = generate(self.name.strip(), plan_name)
        added = self.append_suggestions(suggested)
        logger.info("Appended %d suggested topic(s) to %s", added, self.name)
        return added

    def validate(self) -> None:
        if not self.name.strip():
            raise DraftError("Discipline name is required")

    def to_fields(self) -> dict:
        self.validate()
        return {
            "name": self.name.strip(),
            "color": self.color,
            "topics": [t.model_copy() for t in self.topics],
        }
