"""
Catalog Service - Projects, tasks and the entry log.

Architecture Decision: Observer Pattern (Qt Signals)
The service emits signals when collections change so the UI can re-render
without the service knowing about any widget.
"""

import logging
from typing import Optional
from PySide6.QtCore import QObject, Signal

from worklog.domain.errors import ProtectedEntityError, ActiveResourceError
from worklog.domain.models import (
    Project, Task, TimeEntry, SYSTEM_PROJECT_ID, validate_label
)
from worklog.services.context import TrackerContext

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "Unknown"


class CatalogService(QObject):
    """
    Create/delete operations on projects and tasks, with referential cleanup.
    Every operation validates first and mutates afterwards.
    """

    # Signals
    projects_changed = Signal()
    tasks_changed = Signal()
    summaries_changed = Signal()

    def __init__(self, context: TrackerContext):
        super().__init__()
        self.context = context

    async def load(self):
        """
        Load persisted data and make sure the system project exists.
        """
        await self.context.load()
        await self.ensure_system_project()

        self.projects_changed.emit()
        self.tasks_changed.emit()
        self.summaries_changed.emit()

    async def ensure_system_project(self):
        """Create the 'No Project' fallback once if it is missing"""
        if self.context.find_project(SYSTEM_PROJECT_ID) is None:
            self.context.projects.insert(0, Project.system())
            await self.context.project_repo.save_all(self.context.projects)
            logger.info("System project created")

    async def create_project(self, label: str) -> Project:
        """
        Create a new project.

        Raises:
            ValidationError: if the label is empty or too long
        """
        project = Project(label=validate_label(label))

        self.context.projects.append(project)
        await self.context.project_repo.save_all(self.context.projects)
        logger.info(f"Project created: {project.label} ({project.id})")

        self.projects_changed.emit()
        return project

    async def delete_project(self, project_id: str):
        """
        Delete a project and move its tasks and entries to the system project.

        Raises:
            ProtectedEntityError: if the project is the system project
        """
        project = self.context.find_project(project_id)
        if project_id == SYSTEM_PROJECT_ID or (project and project.is_system):
            raise ProtectedEntityError("The system project cannot be deleted")
        if project is None:
            logger.warning(f"Delete requested for unknown project {project_id}")
            return

        self.context.projects = [p for p in self.context.projects if p.id != project_id]

        for task in self.context.tasks:
            if task.project_id == project_id:
                task.project_id = SYSTEM_PROJECT_ID

        # Entries are frozen; reassignment swaps in an updated copy
        self.context.entries = [
            entry.model_copy(update={"project_id": SYSTEM_PROJECT_ID})
            if entry.project_id == project_id else entry
            for entry in self.context.entries
        ]

        await self.context.project_repo.save_all(self.context.projects)
        await self.context.task_repo.save_all(self.context.tasks)
        await self.context.entry_repo.save_all(self.context.entries)
        logger.info(f"Project deleted: {project.label} ({project_id})")

        self.projects_changed.emit()
        self.tasks_changed.emit()
        self.summaries_changed.emit()

    def determine_default_project(self) -> str:
        """
        Pick the project a new task should default to.

        Order: last selected project (if it still exists), the active timer's
        project, the project of the most recent entry, the system project.
        """
        last_selected = self.context.last_selected_project
        if last_selected and self.context.find_project(last_selected):
            return last_selected

        active = self.context.active_timer
        if active and active.project_id:
            return active.project_id

        if self.context.entries:
            return self.context.entries[-1].project_id

        return SYSTEM_PROJECT_ID

    async def create_task(self, label: str, project_id: Optional[str] = None) -> Task:
        """
        Create a new task.

        Args:
            label: Task name, 1-50 characters after trimming
            project_id: Owning project; None uses the default project and an
                unknown id falls back to the system project

        Raises:
            ValidationError: if the label is empty or too long
        """
        trimmed = validate_label(label)

        if project_id is None:
            project_id = self.determine_default_project()
        if self.context.find_project(project_id) is None:
            logger.warning(f"Unknown project {project_id}, using system project")
            project_id = SYSTEM_PROJECT_ID

        task = Task(label=trimmed, project_id=project_id)
        self.context.tasks.append(task)
        self.context.last_selected_project = project_id

        await self.context.task_repo.save_all(self.context.tasks)
        await self.context.user_repo.set_last_selected_project(project_id)
        logger.info(f"Task created: {task.label} ({task.id})")

        self.tasks_changed.emit()
        return task

    async def delete_task(self, task_id: str):
        """
        Delete a task. Its entries stay in the log as 'Deleted Task'.

        Raises:
            ActiveResourceError: if the task has the active timer
        """
        active = self.context.active_timer
        if active and active.task_id == task_id:
            raise ActiveResourceError(
                "Cannot delete a task with an active timer. Please stop the timer first."
            )
        task = self.context.find_task(task_id)
        if task is None:
            logger.warning(f"Delete requested for unknown task {task_id}")
            return

        self.context.tasks = [t for t in self.context.tasks if t.id != task_id]
        await self.context.task_repo.save_all(self.context.tasks)
        logger.info(f"Task deleted: {task.label} ({task_id})")

        self.tasks_changed.emit()
        self.summaries_changed.emit()

    async def record_entry(self, entry: TimeEntry):
        """Append a completed entry to the log"""
        self.context.entries.append(entry)
        await self.context.entry_repo.save_all(self.context.entries)

    def project_label_for(self, task: Task) -> str:
        project = self.context.find_project(task.project_id)
        return project.label if project else UNKNOWN_LABEL
