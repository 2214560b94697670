"""Exceptions raised by the plan store and the editing drafts."""


class DraftError(ValueError):
    """A form buffer failed validation; nothing was saved."""


class PlanNotFoundError(LookupError):
    def __init__(self, plan_id: str):
        super().__init__(f"Plan {plan_id} not found")
        self.plan_id = plan_id


class DisciplineNotFoundError(LookupError):
    def __init__(self, discipline_id: str):
        super().__init__(f"Discipline {discipline_id} not found")
        self.discipline_id = discipline_id


class TopicNotFoundError(LookupError):
    def __init__(self, topic_id: str):
        super().__init__(f"Topic {topic_id} not found")
        self.topic_id = topic_id
