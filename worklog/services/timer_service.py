"""
Timer Service - Core time tracking logic.

Architecture Decision: Observer Pattern (Qt Signals)
The service emits signals when state changes, keeping it decoupled from UI.

States: idle (no active timer), running, paused. Minutes are computed from
timestamps at pause/stop time; the display ticker only re-renders and never
changes stored minutes.
"""

import logging
from typing import Callable, Optional
from PySide6.QtCore import QObject, QTimer, Signal

from worklog.domain.models import ActiveTimerContext, TimeEntry, MIN_DURATION_THRESHOLD
from worklog.domain.time_math import now_ms, elapsed_minutes, workday_anchor, format_duration
from worklog.services.catalog_service import CatalogService, UNKNOWN_LABEL
from worklog.services.context import TrackerContext

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 60000
IDLE_DISPLAY = "No active timer"
PAUSED_SUFFIX = " [PAUSED]"


class TimerService(QObject):
    """
    The single active timer. Manages state but knows nothing about the UI.
    Emits signals when things change (Observer Pattern).
    """

    # Signals
    tick = Signal(str, int)  # (display_text, total_minutes)
    timer_started = Signal(str)  # task_id
    timer_paused = Signal(str)  # task_id
    timer_resumed = Signal(str)  # task_id
    timer_stopped = Signal(str, int)  # task_id, total_minutes
    entry_recorded = Signal(object)  # TimeEntry
    state_changed = Signal()
    summaries_changed = Signal()

    def __init__(self, context: TrackerContext, catalog: CatalogService,
                 clock: Callable[[], int] = now_ms,
                 tick_interval_ms: int = TICK_INTERVAL_MS):
        super().__init__()
        self.context = context
        self.catalog = catalog
        self.clock = clock

        # Display refresh only
        self.ticker = QTimer(self)
        self.ticker.setInterval(tick_interval_ms)
        self.ticker.timeout.connect(self._on_tick)

    @property
    def active(self) -> Optional[ActiveTimerContext]:
        return self.context.active_timer

    async def start(self, task_id: str):
        """
        Start tracking a task. A timer that is already active is stopped
        first, so its time is recorded rather than lost.
        """
        if self.context.active_timer is not None:
            await self.stop()

        task = self.context.find_task(task_id)
        if task is None:
            logger.warning(f"Cannot start timer, task {task_id} not found")
            return

        self.context.active_timer = ActiveTimerContext(
            task_id=task.id,
            project_id=task.project_id,
            start_timestamp=self.clock(),
            accumulated_minutes=0,
            is_paused=False
        )
        await self.context.timer_repo.save(self.context.active_timer)
        logger.info(f"Timer started: {task.label} ({task.id})")

        self._start_ticker()
        self.timer_started.emit(task.id)
        self.state_changed.emit()

    async def pause(self):
        """Flush elapsed minutes into the accumulator and pause"""
        timer = self.context.active_timer
        if timer is None or timer.is_paused:
            return

        timer.accumulated_minutes += self._running_minutes(timer, self.clock())
        timer.is_paused = True
        timer.start_timestamp = None

        await self.context.timer_repo.save(timer)
        logger.info(f"Timer paused at {timer.accumulated_minutes} min ({timer.task_id})")

        self._stop_ticker()
        self.timer_paused.emit(timer.task_id)
        self.state_changed.emit()

    async def resume(self):
        """Continue a paused timer from now"""
        timer = self.context.active_timer
        if timer is None or not timer.is_paused:
            return

        timer.start_timestamp = self.clock()
        timer.is_paused = False

        await self.context.timer_repo.save(timer)
        logger.info(f"Timer resumed ({timer.task_id})")

        self._start_ticker()
        self.timer_resumed.emit(timer.task_id)
        self.state_changed.emit()

    async def stop(self):
        """
        Stop the active timer and record an entry.

        Sessions shorter than MIN_DURATION_THRESHOLD minutes are discarded
        without an entry.
        """
        timer = self.context.active_timer
        if timer is None:
            return

        now = self.clock()
        total_minutes = self._total_minutes(timer, now)

        if total_minutes >= MIN_DURATION_THRESHOLD:
            entry = TimeEntry(
                task_id=timer.task_id,
                project_id=timer.project_id,
                duration_minutes=total_minutes,
                workday_key=workday_anchor(now),
                created_at_ms=now
            )
            await self.catalog.record_entry(entry)
            logger.info(f"Entry recorded: {total_minutes} min on {entry.workday_key} ({timer.task_id})")
            self.entry_recorded.emit(entry)
        else:
            logger.info(f"Timer stopped below {MIN_DURATION_THRESHOLD} min, nothing recorded ({timer.task_id})")

        self.context.active_timer = None
        await self.context.timer_repo.clear()

        self._stop_ticker()
        self.timer_stopped.emit(timer.task_id, total_minutes)
        self.state_changed.emit()
        self.summaries_changed.emit()

    async def restore(self):
        """
        Adopt the timer persisted by a previous session.

        The stored start timestamp is kept as is, so a running timer counts
        the downtime. A timer whose task no longer exists is discarded.
        """
        saved = await self.context.timer_repo.get()
        if saved is None:
            return

        if self.context.find_task(saved.task_id) is None:
            logger.warning(f"Discarding persisted timer for missing task {saved.task_id}")
            await self.context.timer_repo.clear()
            return

        self.context.active_timer = saved
        logger.info(f"Timer restored ({saved.task_id}, paused={saved.is_paused})")

        if not saved.is_paused:
            self._start_ticker()
        self.state_changed.emit()

    def current_minutes(self) -> int:
        """Total minutes of the active timer, including the running stretch"""
        timer = self.context.active_timer
        if timer is None:
            return 0
        return self._total_minutes(timer, self.clock())

    def display_text(self) -> str:
        """Human-readable state of the active timer"""
        timer = self.context.active_timer
        if timer is None:
            return IDLE_DISPLAY

        task = self.context.find_task(timer.task_id)
        project = self.context.find_project(timer.project_id)
        text = (
            f"{task.label if task else UNKNOWN_LABEL} "
            f"({project.label if project else UNKNOWN_LABEL}) - "
            f"{format_duration(self.current_minutes())}"
        )
        if timer.is_paused:
            text += PAUSED_SUFFIX
        return text

    def is_running(self) -> bool:
        return self.context.active_timer is not None and not self.context.active_timer.is_paused

    def is_paused(self) -> bool:
        return self.context.active_timer is not None and self.context.active_timer.is_paused

    def is_active_task(self, task_id: str) -> bool:
        return self.context.active_timer is not None and self.context.active_timer.task_id == task_id

    def is_ticking(self) -> bool:
        return self.ticker.isActive()

    def _running_minutes(self, timer: ActiveTimerContext, now: int) -> int:
        if timer.is_paused or timer.start_timestamp is None:
            return 0
        # A clock that jumped backwards must not shrink the accumulator
        return max(0, elapsed_minutes(timer.start_timestamp, now))

    def _total_minutes(self, timer: ActiveTimerContext, now: int) -> int:
        return timer.accumulated_minutes + self._running_minutes(timer, now)

    def _start_ticker(self):
        if self.ticker.isActive():
            return
        self.ticker.start()
        self._on_tick()

    def _stop_ticker(self):
        if self.ticker.isActive():
            self.ticker.stop()

    def _on_tick(self):
        """Called every interval to refresh the display"""
        self.tick.emit(self.display_text(), self.current_minutes())
