"""UI layer - PySide6 GUI components"""

from .app import TrackerApp, main
from .dialogs import ProjectDialog, TaskDialog
from .main_window import MainWindow

__all__ = ["TrackerApp", "main", "ProjectDialog", "TaskDialog", "MainWindow"]
