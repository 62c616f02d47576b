"""
Application context - the single owner of tracker state.

Architecture Decision: Explicit context object
Catalogs, the entry log and the active timer live on one object that is
built at startup and shared by the services. Rehydration happens in
explicit load/restore calls, never as an import side effect.
"""

from typing import List, Optional

from worklog.domain.models import Project, Task, TimeEntry, ActiveTimerContext
from worklog.infra.repository import (
    KeyValueStore, ProjectRepository, TaskRepository, TimeEntryRepository,
    ActiveTimerRepository, UserRepository
)


class TrackerContext:
    """
    In-memory state plus the repositories that persist it.
    """

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.store = store or KeyValueStore()

        # Repositories
        self.project_repo = ProjectRepository(self.store)
        self.task_repo = TaskRepository(self.store)
        self.entry_repo = TimeEntryRepository(self.store)
        self.timer_repo = ActiveTimerRepository(self.store)
        self.user_repo = UserRepository(self.store)

        self.projects: List[Project] = []
        self.tasks: List[Task] = []
        self.entries: List[TimeEntry] = []
        self.active_timer: Optional[ActiveTimerContext] = None
        self.last_selected_project: Optional[str] = None

    async def load(self):
        """Load catalogs, entry log and the last selected project"""
        self.projects = await self.project_repo.get_all()
        self.tasks = await self.task_repo.get_all()
        self.entries = await self.entry_repo.get_all()
        self.last_selected_project = await self.user_repo.get_last_selected_project()

    def find_project(self, project_id: Optional[str]) -> Optional[Project]:
        return next((p for p in self.projects if p.id == project_id), None)

    def find_task(self, task_id: Optional[str]) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)
