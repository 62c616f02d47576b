"""
Summary Service - Aggregates the entry log and renders text reports.

Architecture Decision: Full recomputation
Summaries are rebuilt from the whole entry log on every change. Personal
entry logs are small, so there is no incremental bookkeeping to get wrong.

Reports use Jinja2 templates, so the layout can change without touching code.
"""

import datetime
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from jinja2 import Environment, FileSystemLoader
from pydantic import BaseModel, Field

from worklog.domain.models import Project, Task, TimeEntry
from worklog.domain.time_math import format_duration
from worklog.services.context import TrackerContext
from worklog.utils import get_resource_path

logger = logging.getLogger(__name__)

DELETED_PROJECT_LABEL = "Deleted Project"
DELETED_TASK_LABEL = "Deleted Task"


class Summary(BaseModel):
    """Totals in minutes, each list ordered by descending duration"""
    by_project: List[Tuple[str, int]] = Field(default_factory=list)
    by_task: List[Tuple[str, int]] = Field(default_factory=list)
    by_project_task: List[Tuple[str, int]] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.by_project


def _ranked(totals: Dict[str, int]) -> List[Tuple[str, int]]:
    # sorted() is stable, so equal totals keep first-seen order
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def summarize(entries: List[TimeEntry], projects: List[Project], tasks: List[Task]) -> Summary:
    """
    Group entry durations by project, by task and by project + task.

    Entries pointing at a project or task that no longer exists are booked
    under "Deleted Project" / "Deleted Task".
    """
    project_labels = {p.id: p.label for p in projects}
    task_labels = {t.id: t.label for t in tasks}

    by_project: Dict[str, int] = {}
    by_task: Dict[str, int] = {}
    by_project_task: Dict[str, int] = {}

    for entry in entries:
        project_label = project_labels.get(entry.project_id, DELETED_PROJECT_LABEL)
        task_label = task_labels.get(entry.task_id, DELETED_TASK_LABEL)
        combined = f"{project_label} > {task_label}"

        by_project[project_label] = by_project.get(project_label, 0) + entry.duration_minutes
        by_task[task_label] = by_task.get(task_label, 0) + entry.duration_minutes
        by_project_task[combined] = by_project_task.get(combined, 0) + entry.duration_minutes

    return Summary(
        by_project=_ranked(by_project),
        by_task=_ranked(by_task),
        by_project_task=_ranked(by_project_task)
    )


class SummaryService:
    """
    Computes summaries from the live context and renders them as reports.
    """

    REPORT_TEMPLATE = "summary_report.txt"

    def __init__(self, context: TrackerContext, template_dir: Optional[Path] = None):
        """
        Args:
            context: Shared tracker state
            template_dir: Directory containing Jinja2 templates
        """
        self.context = context

        if template_dir is None:
            template_dir = get_resource_path("resources/templates")
        self.template_dir = template_dir

        # Setup Jinja2 environment
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True
        )
        self.env.filters['format_duration'] = format_duration

    def summarize(self) -> Summary:
        return summarize(self.context.entries, self.context.projects, self.context.tasks)

    def render_report(self, summary: Optional[Summary] = None,
                      template_name: str = REPORT_TEMPLATE,
                      output_file: Optional[Path] = None) -> str:
        """
        Render a summary as text.

        Args:
            summary: Summary to render; computed from the context if omitted
            template_name: Template file inside the template directory
            output_file: Optional file path to save the report

        Returns:
            The rendered report
        """
        if summary is None:
            summary = self.summarize()

        context = {
            'generated_at': datetime.datetime.now().strftime("%Y-%m-%d %H:%M"),
            'sections': [
                {'title': "By Project", 'rows': summary.by_project},
                {'title': "By Task", 'rows': summary.by_task},
                {'title': "By Task in Project", 'rows': summary.by_project_task},
            ],
            'total_minutes': sum(minutes for _, minutes in summary.by_project),
        }

        template = self.env.get_template(template_name)
        report_content = template.render(**context)

        if output_file:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(report_content)
            logger.info(f"Summary report written to {output_file}")

        return report_content
