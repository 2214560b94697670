"""Structured AI suggestion payloads."""
from pydantic import BaseModel, field_validator


class DisciplineSuggestion(BaseModel):
    """Discipline proposed by the model for a plan."""
    name: str
    color: str

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Reject blank names."""
        v = v.strip()
        if not v:
            raise ValueError('name must not be blank')
        return v
