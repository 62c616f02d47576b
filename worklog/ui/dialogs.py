"""
Dialogs for creating projects and tasks.

Validation happens in the catalog service; the dialogs only collect input.
"""

from typing import List, Optional
from PySide6.QtWidgets import (
    QDialog, QFormLayout, QLineEdit, QComboBox, QDialogButtonBox, QVBoxLayout
)

from worklog.domain.models import Project
from worklog.i18n import tr


class ProjectDialog(QDialog):
    """Asks for the name of a new project"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle(tr("project_dialog.title"))
        self.setModal(True)

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.name_input = QLineEdit()
        form.addRow(tr("project_dialog.name"), self.name_input)
        layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Save).setText(tr("action.save"))
        buttons.button(QDialogButtonBox.Cancel).setText(tr("action.cancel"))
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.setMinimumWidth(320)

    def label(self) -> str:
        return self.name_input.text()


class TaskDialog(QDialog):
    """
    Asks for a task name and its project.

    The project selector starts on the default project chosen by the
    catalog service.
    """

    def __init__(self, projects: List[Project], default_project_id: Optional[str], parent=None):
        super().__init__(parent)
        self.setWindowTitle(tr("task_dialog.title"))
        self.setModal(True)

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.name_input = QLineEdit()
        form.addRow(tr("task_dialog.name"), self.name_input)

        self.project_combo = QComboBox()
        for project in projects:
            self.project_combo.addItem(project.label, project.id)
        index = self.project_combo.findData(default_project_id)
        if index >= 0:
            self.project_combo.setCurrentIndex(index)
        form.addRow(tr("task_dialog.project"), self.project_combo)
        layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Save).setText(tr("action.save"))
        buttons.button(QDialogButtonBox.Cancel).setText(tr("action.cancel"))
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.setMinimumWidth(360)

    def label(self) -> str:
        return self.name_input.text()

    def project_id(self) -> Optional[str]:
        return self.project_combo.currentData()
