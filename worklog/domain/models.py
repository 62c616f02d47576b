"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Records round-trip through the key-value store as JSON. Pydantic validates
them on the way back in, so a corrupt or hand-edited record is rejected
instead of silently breaking the timer.
"""

import uuid
from typing import Literal, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from worklog.domain.errors import ValidationError

SYSTEM_PROJECT_ID = "NO_PROJECT"
SYSTEM_PROJECT_LABEL = "No Project"
LABEL_MAX_LENGTH = 50
MIN_DURATION_THRESHOLD = 1  # minutes


def generate_id() -> str:
    """Generate an opaque, globally unique id"""
    return f"id_{uuid.uuid4().hex}"


def validate_label(label: str) -> str:
    """
    Trim a user supplied label and check its length.

    Returns:
        The trimmed label

    Raises:
        ValidationError: if the trimmed label is empty or too long
    """
    trimmed = (label or "").strip()
    if not trimmed:
        raise ValidationError("Name cannot be empty")
    if len(trimmed) > LABEL_MAX_LENGTH:
        raise ValidationError(f"Name must be {LABEL_MAX_LENGTH} characters or less")
    return trimmed


class Project(BaseModel):
    """
    A grouping of tasks.

    Exactly one system project ("No Project") exists and can never be deleted.
    """
    id: str = Field(default_factory=generate_id)
    label: str = Field(..., min_length=1, max_length=LABEL_MAX_LENGTH)
    is_system: bool = False

    @classmethod
    def system(cls) -> "Project":
        return cls(id=SYSTEM_PROJECT_ID, label=SYSTEM_PROJECT_LABEL, is_system=True)


class Task(BaseModel):
    """A trackable task, always attached to a project"""
    id: str = Field(default_factory=generate_id)
    label: str = Field(..., min_length=1, max_length=LABEL_MAX_LENGTH)
    project_id: str = SYSTEM_PROJECT_ID


class TimeEntry(BaseModel):
    """
    A completed tracking session.

    Entries are immutable. The project id is captured from the timer when it
    was started; project deletion replaces the entry with a reassigned copy.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    task_id: str
    project_id: str
    duration_minutes: int = Field(..., ge=MIN_DURATION_THRESHOLD)
    workday_key: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    created_at_ms: int


class ActiveTimerContext(BaseModel):
    """
    The single running or paused timer.

    start_timestamp is set while running and None while paused.
    """
    task_id: str
    project_id: str
    start_timestamp: Optional[int] = None
    accumulated_minutes: int = Field(default=0, ge=0)
    is_paused: bool = False

    @model_validator(mode="after")
    def _check_running_state(self) -> "ActiveTimerContext":
        if self.is_paused != (self.start_timestamp is None):
            raise ValueError("start_timestamp must be set iff the timer is running")
        return self


class UserPreferences(BaseModel):
    """
    User configuration and preferences.

    This allows users to customize behavior without touching code.
    """
    language: str = Field(default="auto", description="UI language: 'en', 'de', or 'auto' (detect from system)")
    tick_interval_seconds: int = Field(default=60, ge=1, description="Refresh interval of the timer display")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Root logging level"
    )
    confirm_deletions: bool = Field(default=True, description="Ask before deleting projects and tasks")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value
