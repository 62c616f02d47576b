"""
Tests for entry aggregation and the text report.
"""

import re

import pytest

from worklog.domain.models import Project, Task, TimeEntry
from worklog.services.summary_service import summarize, Summary


def entry(task_id: str, project_id: str, minutes: int) -> TimeEntry:
    return TimeEntry(task_id=task_id, project_id=project_id, duration_minutes=minutes,
                     workday_key="2026-03-10", created_at_ms=0)


@pytest.fixture
def catalog():
    projects = [
        Project(id="p1", label="Work"),
        Project(id="p2", label="Home"),
    ]
    tasks = [
        Task(id="t1", label="Email", project_id="p1"),
        Task(id="t2", label="Review", project_id="p1"),
        Task(id="t3", label="Email", project_id="p2"),
    ]
    return projects, tasks


def test_groups_by_project_task_and_combination(catalog):
    projects, tasks = catalog
    entries = [
        entry("t1", "p1", 30),
        entry("t2", "p1", 45),
        entry("t3", "p2", 20),
        entry("t1", "p1", 10),
    ]

    summary = summarize(entries, projects, tasks)

    assert summary.by_project == [("Work", 85), ("Home", 20)]
    # Same task label in different projects is merged by label
    assert summary.by_task == [("Email", 60), ("Review", 45)]
    assert summary.by_project_task == [
        ("Work > Review", 45),
        ("Work > Email", 40),
        ("Home > Email", 20),
    ]


def test_equal_totals_keep_first_seen_order(catalog):
    projects, tasks = catalog
    entries = [entry("t3", "p2", 15), entry("t1", "p1", 15)]

    summary = summarize(entries, projects, tasks)

    assert summary.by_project == [("Home", 15), ("Work", 15)]


def test_missing_references_use_deleted_labels(catalog):
    projects, tasks = catalog
    entries = [
        entry("gone", "p1", 5),
        entry("t1", "gone", 7),
        entry("gone", "gone", 3),
    ]

    summary = summarize(entries, projects, tasks)

    assert summary.by_project == [("Deleted Project", 10), ("Work", 5)]
    assert summary.by_task == [("Deleted Task", 8), ("Email", 7)]
    assert summary.by_project_task == [
        ("Deleted Project > Email", 7),
        ("Work > Deleted Task", 5),
        ("Deleted Project > Deleted Task", 3),
    ]


def test_empty_log():
    summary = summarize([], [], [])
    assert summary.is_empty
    assert summary == Summary()


@pytest.mark.asyncio
async def test_deleted_task_shows_in_summary(tracker, clock):
    project = await tracker.catalog.create_project("Work")
    task = await tracker.catalog.create_task("Email", project.id)
    await tracker.timer.start(task.id)
    clock.advance(minutes=30)
    await tracker.timer.stop()

    await tracker.catalog.delete_task(task.id)

    summary = tracker.summary.summarize()
    assert summary.by_task == [("Deleted Task", 30)]
    assert summary.by_project_task == [("Work > Deleted Task", 30)]


@pytest.mark.asyncio
async def test_render_report(tracker, clock, tmp_path):
    project = await tracker.catalog.create_project("Work")
    task = await tracker.catalog.create_task("Email", project.id)
    await tracker.timer.start(task.id)
    clock.advance(minutes=90)
    await tracker.timer.stop()

    output = tmp_path / "reports" / "summary.txt"
    report = tracker.summary.render_report(output_file=output)

    assert "Total: 01:30" in report
    assert "By Project" in report
    assert "Work > Email" in report
    assert "01:30" in report
    assert output.read_text(encoding="utf-8") == report


@pytest.mark.asyncio
async def test_render_empty_report(tracker):
    report = tracker.summary.render_report()

    assert report.count("No data available") == 3
    assert "Total: 00:00" in report


@pytest.mark.asyncio
async def test_report_header_carries_generation_time(tracker):
    report = tracker.summary.render_report()

    header = report.splitlines()[0]
    assert re.fullmatch(r"Worklog Summary - \d{4}-\d{2}-\d{2} \d{2}:\d{2}", header)


@pytest.mark.asyncio
async def test_unwritable_output_file_raises(tracker, tmp_path):
    # The export action reports OSError to the user
    with pytest.raises(OSError):
        tracker.summary.render_report(output_file=tmp_path)
