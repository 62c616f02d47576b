"""
Worklog Application - UI entry point and startup sequence.

Architecture Decision: Presentation Layer
This layer only handles UI logic. Business logic is delegated to Services.
Service coroutines are driven from Qt handlers with run_until_complete on a
dedicated asyncio loop.
"""

import sys
import asyncio
import logging
from PySide6.QtWidgets import QApplication, QMessageBox
from PySide6.QtCore import QTimer

from worklog.infra.config import get_settings
from worklog.infra.db import init_db, get_engine
from worklog.infra.repository import KeyValueStore
from worklog.services import TrackerContext, CatalogService, TimerService, SummaryService
from worklog.i18n import set_language, tr
from .main_window import MainWindow

logger = logging.getLogger(__name__)


class TrackerApp:
    """
    Owns the QApplication, the event loop and the services for the process
    lifetime.
    """

    def __init__(self):
        self.app = QApplication(sys.argv)

        # Settings
        self.settings = get_settings()
        prefs = self.settings.preferences
        set_language(prefs.language)

        # Event loop for async operations
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)

        # Services
        get_engine(self.settings.get_db_url())
        self.context = TrackerContext(KeyValueStore())
        self.catalog = CatalogService(self.context)
        self.timer = TimerService(
            self.context,
            self.catalog,
            tick_interval_ms=self.settings.tick_interval_ms
        )
        self.summary = SummaryService(self.context)

        self.main_window = MainWindow(
            self.catalog,
            self.timer,
            self.summary,
            self.loop,
            confirm_deletions=prefs.confirm_deletions
        )

        # Initialize on startup
        QTimer.singleShot(0, self._async_init)

    def _async_init(self):
        """Create tables, load catalogs, restore the timer and show the window"""
        try:
            self.loop.run_until_complete(init_db())
            self.loop.run_until_complete(self.catalog.load())
            self.loop.run_until_complete(self.timer.restore())
        except Exception as e:
            logger.exception("Startup failed")
            QMessageBox.critical(None, tr("init_error.title"), tr("init_error.message", error=e))
            self.app.quit()
            return

        self.main_window.render_all()
        self.main_window.show()
        logger.info(f"Worklog started with {len(self.context.tasks)} tasks")

    def run(self) -> int:
        try:
            return self.app.exec()
        finally:
            self.loop.run_until_complete(get_engine().engine.dispose())
            self.loop.close()


def main() -> int:
    """Main entry point"""
    settings = get_settings()
    logging.basicConfig(
        level=settings.preferences.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    app = TrackerApp()
    return app.run()
