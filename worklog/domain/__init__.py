"""Domain layer - Pure business entities and logic"""

from .models import Project, Task, TimeEntry, ActiveTimerContext, UserPreferences
from .errors import (
    TrackerError, ValidationError, ProtectedEntityError,
    ActiveResourceError, PersistenceFailure
)

__all__ = [
    "Project", "Task", "TimeEntry", "ActiveTimerContext", "UserPreferences",
    "TrackerError", "ValidationError", "ProtectedEntityError",
    "ActiveResourceError", "PersistenceFailure",
]
