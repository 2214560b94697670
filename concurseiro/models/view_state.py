"""Explicit view state for the study organizer UI."""
from enum import Enum


class View(str, Enum):
    """Which screen is showing."""
    DASHBOARD = "dashboard"
    PLAN_DETAILS = "plan-details"


class FormState(str, Enum):
    """State of a single editing form."""
    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"
