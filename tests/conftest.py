"""
Pytest configuration and fixtures.
"""

import sys
import datetime
from pathlib import Path
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from PySide6.QtCore import QCoreApplication

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.infra.db import Base
from worklog.infra.repository import KeyValueStore
from worklog.services import TrackerContext, CatalogService, TimerService, SummaryService


class FakeClock:
    """Controllable epoch-millisecond clock"""

    def __init__(self, start: datetime.datetime):
        self.now = int(start.timestamp() * 1000)

    def __call__(self) -> int:
        return self.now

    def advance(self, minutes: int = 0, seconds: int = 0):
        self.now += (minutes * 60 + seconds) * 1000


class Tracker:
    """All services wired to one context, as the app does at startup"""

    def __init__(self, store: KeyValueStore, clock: FakeClock):
        self.context = TrackerContext(store)
        self.catalog = CatalogService(self.context)
        self.timer = TimerService(self.context, self.catalog, clock=clock)
        self.summary = SummaryService(self.context)

    async def boot(self):
        await self.catalog.load()
        await self.timer.restore()
        return self


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """QTimer and signals need a Qt application object (no display required)"""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Create a file-backed SQLite database for testing"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'worklog-test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create a new session for a test"""
    async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def store(db_session):
    return KeyValueStore(session=db_session)


@pytest.fixture
def clock():
    # Mid-morning, well away from the 04:00 workday boundary
    return FakeClock(datetime.datetime(2026, 3, 10, 10, 0))


@pytest_asyncio.fixture
async def tracker(store, clock):
    tracker = Tracker(store, clock)
    yield await tracker.boot()
    tracker.timer.ticker.stop()


@pytest_asyncio.fixture
async def broken_tracker(tmp_path, clock):
    """A tracker whose database has no tables, so every storage call fails"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'no-tables.db'}")
    session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)()
    tracker = Tracker(KeyValueStore(session=session), clock)
    yield await tracker.boot()
    tracker.timer.ticker.stop()
    await engine.dispose()


@pytest_asyncio.fixture
async def make_tracker(store):
    """Build a tracker whose clock starts at a chosen local time"""
    built = []

    async def _make(start: datetime.datetime):
        clock = FakeClock(start)
        tracker = await Tracker(store, clock).boot()
        built.append(tracker)
        return tracker, clock

    yield _make

    for tracker in built:
        tracker.timer.ticker.stop()


@pytest.fixture
def restart(store, clock):
    """Simulate a process restart against the same storage"""
    async def _restart():
        return await Tracker(store, clock).boot()
    return _restart
