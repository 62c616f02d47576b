"""
Main Window - Task table, project list, active timer and summaries.

Architecture Decision: Presentation Layer
Buttons call service commands; the window re-renders when the services
signal a change. No business rules live here.
"""

import asyncio
import datetime
import logging
from pathlib import Path
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QTableWidget, QTableWidgetItem, QHeaderView, QListWidget, QGroupBox,
    QMessageBox, QDialog, QFileDialog
)
from PySide6.QtGui import QFont

from worklog.domain.errors import TrackerError
from worklog.domain.time_math import format_duration
from worklog.services import CatalogService, TimerService, SummaryService
from worklog.i18n import tr
from .dialogs import ProjectDialog, TaskDialog

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Single window UI surface for the tracker.

    Features:
    - Active timer display refreshed by the timer ticker
    - Task table with Start / Pause / Resume / Stop / Delete per row
    - Project list (the system project has no Delete button)
    - Summaries by project, by task and by task in project
    - Export of the summaries as a text report
    """

    def __init__(self, catalog: CatalogService, timer_service: TimerService,
                 summary_service: SummaryService, loop: asyncio.AbstractEventLoop,
                 confirm_deletions: bool = True, parent=None):
        super().__init__(parent)
        self.catalog = catalog
        self.timer_service = timer_service
        self.summary_service = summary_service
        self.loop = loop
        self.confirm_deletions = confirm_deletions

        self.setWindowTitle(tr("main.title"))
        self.resize(900, 600)

        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)

        # Active timer
        self.timer_display = QLabel()
        timer_font = QFont()
        timer_font.setPointSize(14)
        timer_font.setBold(True)
        self.timer_display.setFont(timer_font)
        layout.addWidget(self.timer_display)

        # Toolbar
        btn_layout = QHBoxLayout()
        new_project_btn = QPushButton(tr("main.new_project"))
        new_project_btn.clicked.connect(self._on_new_project)
        new_task_btn = QPushButton(tr("main.new_task"))
        new_task_btn.clicked.connect(self._on_new_task)
        btn_layout.addWidget(new_project_btn)
        btn_layout.addWidget(new_task_btn)
        btn_layout.addStretch()
        export_btn = QPushButton(tr("main.export_summary"))
        export_btn.clicked.connect(self._on_export_summary)
        btn_layout.addWidget(export_btn)
        layout.addLayout(btn_layout)

        body = QHBoxLayout()

        # Tasks
        tasks_box = QGroupBox(tr("main.tasks"))
        tasks_layout = QVBoxLayout(tasks_box)
        self.task_table = QTableWidget()
        self.task_table.setColumnCount(3)
        self.task_table.setHorizontalHeaderLabels([
            tr("main.header_task"),
            tr("main.header_project"),
            tr("main.header_actions")
        ])
        self.task_table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        self.task_table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeToContents)
        self.task_table.horizontalHeader().setSectionResizeMode(2, QHeaderView.ResizeToContents)
        self.task_table.setEditTriggers(QTableWidget.NoEditTriggers)
        tasks_layout.addWidget(self.task_table)
        body.addWidget(tasks_box, 3)

        # Projects
        projects_box = QGroupBox(tr("main.projects"))
        projects_layout = QVBoxLayout(projects_box)
        self.project_table = QTableWidget()
        self.project_table.setColumnCount(2)
        self.project_table.horizontalHeader().setVisible(False)
        self.project_table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        self.project_table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeToContents)
        self.project_table.setEditTriggers(QTableWidget.NoEditTriggers)
        projects_layout.addWidget(self.project_table)
        body.addWidget(projects_box, 1)
        layout.addLayout(body, 2)

        # Summaries
        summary_box = QGroupBox(tr("main.summary"))
        summary_layout = QHBoxLayout(summary_box)
        self.summary_lists = {}
        for key in ("by_project", "by_task", "by_project_task"):
            column = QVBoxLayout()
            column.addWidget(QLabel(tr(f"main.summary_{key}")))
            summary_list = QListWidget()
            column.addWidget(summary_list)
            summary_layout.addLayout(column)
            self.summary_lists[key] = summary_list
        layout.addWidget(summary_box, 1)

    def _connect_signals(self):
        """Connect service signals to re-render handlers"""
        self.catalog.projects_changed.connect(self._render_projects)
        self.catalog.projects_changed.connect(self._render_tasks)
        self.catalog.tasks_changed.connect(self._render_tasks)
        self.catalog.summaries_changed.connect(self._render_summaries)

        self.timer_service.state_changed.connect(self._render_tasks)
        self.timer_service.summaries_changed.connect(self._render_summaries)
        self.timer_service.tick.connect(self._on_timer_tick)

    def render_all(self):
        self._render_projects()
        self._render_tasks()
        self._render_summaries()

    def _run(self, coro):
        """Run a service command; tracker errors are shown, not raised"""
        try:
            self.loop.run_until_complete(coro)
        except TrackerError as e:
            logger.warning(f"Operation refused: {e}")
            QMessageBox.warning(self, tr("error"), str(e))

    def _confirm(self, message: str) -> bool:
        if not self.confirm_deletions:
            return True
        reply = QMessageBox.question(
            self,
            tr("confirm.title"),
            message,
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No
        )
        return reply == QMessageBox.Yes

    # Rendering

    def _render_projects(self):
        projects = self.catalog.context.projects
        self.project_table.setRowCount(len(projects))

        for row, project in enumerate(projects):
            self.project_table.setItem(row, 0, QTableWidgetItem(project.label))
            if project.is_system:
                self.project_table.setCellWidget(row, 1, QWidget())
                continue
            delete_btn = QPushButton(tr("action.delete"))
            delete_btn.clicked.connect(lambda checked=False, pid=project.id: self._on_delete_project(pid))
            self.project_table.setCellWidget(row, 1, delete_btn)

    def _render_tasks(self):
        tasks = self.catalog.context.tasks
        self.task_table.setRowCount(len(tasks))

        for row, task in enumerate(tasks):
            self.task_table.setItem(row, 0, QTableWidgetItem(task.label))
            self.task_table.setItem(row, 1, QTableWidgetItem(self.catalog.project_label_for(task)))

            actions = QWidget()
            actions_layout = QHBoxLayout(actions)
            actions_layout.setContentsMargins(2, 2, 2, 2)

            if self.timer_service.is_active_task(task.id):
                if self.timer_service.is_paused():
                    resume_btn = QPushButton(tr("action.resume"))
                    resume_btn.clicked.connect(lambda: self._run(self.timer_service.resume()))
                    actions_layout.addWidget(resume_btn)
                else:
                    pause_btn = QPushButton(tr("action.pause"))
                    pause_btn.clicked.connect(lambda: self._run(self.timer_service.pause()))
                    actions_layout.addWidget(pause_btn)
                stop_btn = QPushButton(tr("action.stop"))
                stop_btn.clicked.connect(lambda: self._run(self.timer_service.stop()))
                actions_layout.addWidget(stop_btn)
            else:
                start_btn = QPushButton(tr("action.start"))
                start_btn.clicked.connect(
                    lambda checked=False, tid=task.id: self._run(self.timer_service.start(tid))
                )
                actions_layout.addWidget(start_btn)

            delete_btn = QPushButton(tr("action.delete"))
            delete_btn.clicked.connect(lambda checked=False, tid=task.id: self._on_delete_task(tid))
            actions_layout.addWidget(delete_btn)

            self.task_table.setCellWidget(row, 2, actions)

        self.timer_display.setText(self.timer_service.display_text())

    def _render_summaries(self):
        summary = self.summary_service.summarize()
        for key, summary_list in self.summary_lists.items():
            summary_list.clear()
            rows = getattr(summary, key)
            if not rows:
                summary_list.addItem(tr("main.no_data"))
                continue
            for label, minutes in rows:
                summary_list.addItem(f"{label}    {format_duration(minutes)}")

    def _on_timer_tick(self, display_text: str, total_minutes: int):
        self.timer_display.setText(display_text)

    # Commands

    def _on_new_project(self):
        dialog = ProjectDialog(self)
        if dialog.exec() == QDialog.Accepted:
            self._run(self.catalog.create_project(dialog.label()))

    def _on_new_task(self):
        dialog = TaskDialog(
            self.catalog.context.projects,
            self.catalog.determine_default_project(),
            self
        )
        if dialog.exec() == QDialog.Accepted:
            self._run(self.catalog.create_task(dialog.label(), dialog.project_id()))

    def _on_delete_project(self, project_id: str):
        if self._confirm(tr("confirm.delete_project")):
            self._run(self.catalog.delete_project(project_id))

    def _on_delete_task(self, task_id: str):
        # Refuse before asking, the timer has to be stopped first
        if self.timer_service.is_active_task(task_id):
            self._run(self.catalog.delete_task(task_id))
            return
        if self._confirm(tr("confirm.delete_task")):
            self._run(self.catalog.delete_task(task_id))

    def _on_export_summary(self):
        filename, _ = QFileDialog.getSaveFileName(
            self, tr("export.title"),
            f"worklog_{datetime.date.today().isoformat()}.txt",
            tr("export.filter")
        )
        if not filename:
            return

        path = Path(filename)
        try:
            self.summary_service.render_report(output_file=path)
        except OSError as e:
            logger.error(f"Summary export failed: {e}")
            QMessageBox.critical(self, tr("error"), tr("export.failed", error=e))
            return
        QMessageBox.information(self, tr("export.title"), tr("export.saved_to", path=path))
