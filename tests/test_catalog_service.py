"""
Tests for project/task creation and deletion with referential cleanup.
"""

import pytest

from worklog.domain.errors import ValidationError, ProtectedEntityError, ActiveResourceError
from worklog.domain.models import SYSTEM_PROJECT_ID, TimeEntry


def make_entry(task_id: str, project_id: str, minutes: int = 10) -> TimeEntry:
    return TimeEntry(task_id=task_id, project_id=project_id, duration_minutes=minutes,
                     workday_key="2026-03-10", created_at_ms=0)


@pytest.mark.asyncio
async def test_system_project_is_created_once(tracker, restart):
    projects = tracker.context.projects
    assert [p.id for p in projects] == [SYSTEM_PROJECT_ID]
    assert projects[0].is_system

    again = await restart()
    assert [p.id for p in again.context.projects] == [SYSTEM_PROJECT_ID]


@pytest.mark.asyncio
async def test_create_project_trims_and_persists(tracker, restart):
    project = await tracker.catalog.create_project("  Work  ")
    assert project.label == "Work"
    assert not project.is_system

    again = await restart()
    assert again.context.find_project(project.id).label == "Work"


@pytest.mark.asyncio
@pytest.mark.parametrize("label", ["", "   ", "x" * 51])
async def test_invalid_labels_change_nothing(tracker, label):
    with pytest.raises(ValidationError):
        await tracker.catalog.create_project(label)
    with pytest.raises(ValidationError):
        await tracker.catalog.create_task(label, SYSTEM_PROJECT_ID)

    assert len(tracker.context.projects) == 1
    assert tracker.context.tasks == []


@pytest.mark.asyncio
async def test_signals_are_emitted(tracker):
    received = []
    tracker.catalog.projects_changed.connect(lambda: received.append("projects"))
    tracker.catalog.tasks_changed.connect(lambda: received.append("tasks"))

    project = await tracker.catalog.create_project("Work")
    await tracker.catalog.create_task("Email", project.id)

    assert received == ["projects", "tasks"]


@pytest.mark.asyncio
async def test_system_project_cannot_be_deleted(tracker):
    with pytest.raises(ProtectedEntityError):
        await tracker.catalog.delete_project(SYSTEM_PROJECT_ID)
    assert tracker.context.find_project(SYSTEM_PROJECT_ID) is not None


@pytest.mark.asyncio
async def test_delete_project_reassigns_tasks_and_entries(tracker, restart):
    work = await tracker.catalog.create_project("Work")
    home = await tracker.catalog.create_project("Home")
    email = await tracker.catalog.create_task("Email", work.id)
    dishes = await tracker.catalog.create_task("Dishes", home.id)
    await tracker.catalog.record_entry(make_entry(email.id, work.id))
    await tracker.catalog.record_entry(make_entry(dishes.id, home.id))

    await tracker.catalog.delete_project(work.id)

    assert tracker.context.find_project(work.id) is None
    assert all(t.project_id != work.id for t in tracker.context.tasks)
    assert all(e.project_id != work.id for e in tracker.context.entries)
    assert tracker.context.find_task(email.id).project_id == SYSTEM_PROJECT_ID
    assert tracker.context.entries[0].project_id == SYSTEM_PROJECT_ID
    # Unrelated records untouched
    assert tracker.context.find_task(dishes.id).project_id == home.id
    assert tracker.context.entries[1].project_id == home.id

    again = await restart()
    assert again.context.find_project(work.id) is None
    assert again.context.find_task(email.id).project_id == SYSTEM_PROJECT_ID
    assert again.context.entries[0].project_id == SYSTEM_PROJECT_ID


@pytest.mark.asyncio
async def test_create_task_with_unknown_project_falls_back(tracker):
    task = await tracker.catalog.create_task("Orphan", "no-such-project")
    assert task.project_id == SYSTEM_PROJECT_ID


@pytest.mark.asyncio
async def test_delete_task(tracker, restart):
    task = await tracker.catalog.create_task("Email", SYSTEM_PROJECT_ID)
    await tracker.catalog.delete_task(task.id)

    assert tracker.context.tasks == []
    again = await restart()
    assert again.context.tasks == []


@pytest.mark.asyncio
async def test_task_with_active_timer_cannot_be_deleted(tracker):
    task = await tracker.catalog.create_task("Email", SYSTEM_PROJECT_ID)
    await tracker.timer.start(task.id)

    with pytest.raises(ActiveResourceError):
        await tracker.catalog.delete_task(task.id)
    assert tracker.context.find_task(task.id) is not None

    # Paused still counts as active
    await tracker.timer.pause()
    with pytest.raises(ActiveResourceError):
        await tracker.catalog.delete_task(task.id)

    await tracker.timer.stop()
    await tracker.catalog.delete_task(task.id)
    assert tracker.context.find_task(task.id) is None


class TestDefaultProject:

    @pytest.mark.asyncio
    async def test_falls_back_to_system_project(self, tracker):
        assert tracker.catalog.determine_default_project() == SYSTEM_PROJECT_ID

    @pytest.mark.asyncio
    async def test_last_selected_project_wins(self, tracker, restart):
        work = await tracker.catalog.create_project("Work")
        await tracker.catalog.create_task("Email", work.id)
        assert tracker.catalog.determine_default_project() == work.id

        # Remembered across restarts
        again = await restart()
        assert again.catalog.determine_default_project() == work.id

    @pytest.mark.asyncio
    async def test_stale_last_selection_uses_active_timer_project(self, tracker):
        work = await tracker.catalog.create_project("Work")
        home = await tracker.catalog.create_project("Home")
        email = await tracker.catalog.create_task("Email", work.id)
        await tracker.catalog.create_task("Dishes", home.id)
        await tracker.timer.start(email.id)
        await tracker.catalog.delete_project(home.id)

        # Last selection (home) no longer exists
        assert tracker.context.last_selected_project == home.id
        assert tracker.catalog.determine_default_project() == work.id

    @pytest.mark.asyncio
    async def test_most_recent_entry_project(self, tracker):
        work = await tracker.catalog.create_project("Work")
        tracker.context.last_selected_project = None
        await tracker.catalog.record_entry(make_entry("t1", SYSTEM_PROJECT_ID))
        await tracker.catalog.record_entry(make_entry("t2", work.id))

        assert tracker.catalog.determine_default_project() == work.id

    @pytest.mark.asyncio
    async def test_none_project_uses_default(self, tracker):
        work = await tracker.catalog.create_project("Work")
        await tracker.catalog.create_task("Email", work.id)

        task = await tracker.catalog.create_task("Review")
        assert task.project_id == work.id
