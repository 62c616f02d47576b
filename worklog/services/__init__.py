"""Services layer - Business logic"""

from .context import TrackerContext
from .catalog_service import CatalogService
from .timer_service import TimerService
from .summary_service import SummaryService, Summary, summarize

__all__ = ["TrackerContext", "CatalogService", "TimerService", "SummaryService", "Summary", "summarize"]
