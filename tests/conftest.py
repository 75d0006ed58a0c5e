"""
Shared test fixtures

- in-memory SQLite session (isolated per test)
- medicine / settings factories
- fake email and push dispatchers
- fixed clock
"""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.application.services.channel_dispatchers import EmailDispatcher, PushDispatcher
from app.application.services.notification_log_writer import NotificationLogWriter
from app.application.services.notification_service import NotificationService
from app.domain.models.medicine import Medicine
from app.domain.models.notification_log import NotificationLog
from app.domain.models.notification_settings import NotificationSettings
from app.infrastructure.database import Base
from app.infrastructure.repositories.medicine_repository import SQLAlchemyMedicineRepository
from app.infrastructure.repositories.notification_repository import (
    SQLAlchemyNotificationLogRepository,
    SQLAlchemyNotificationSettingsRepository,
)

# Sunday, so only the daily cadence is eligible by default
SUNDAY_9AM = datetime(2026, 6, 7, 9, 0, 0)


class FixedClock:
    """Callable clock the tests can move."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FixedClock(SUNDAY_9AM)


@pytest.fixture
def medicine_repo(db):
    return SQLAlchemyMedicineRepository(db)


@pytest.fixture
def settings_repo(db):
    return SQLAlchemyNotificationSettingsRepository(db)


@pytest.fixture
def log_writer(db):
    return NotificationLogWriter(SQLAlchemyNotificationLogRepository(db), db=db)


@pytest.fixture
def make_medicine(db):
    def _make(name, expiry_date, notified=False, quantity=10, batch_number=None):
        medicine = Medicine(
            name=name,
            expiry_date=expiry_date,
            quantity=quantity,
            batch_number=batch_number,
            notified=notified,
        )
        db.add(medicine)
        db.commit()
        db.refresh(medicine)
        return medicine

    return _make


@pytest.fixture
def make_settings(db):
    def _make(**overrides):
        values = {
            "email": "a@x.com",
            "enable_email_notifications": True,
            "enable_push_notifications": False,
            "enable_daily_notifications": True,
            "enable_weekly_notifications": False,
            "enable_monthly_notifications": False,
            "notification_time": "09:00",
            "updated_at": datetime(2026, 6, 1, 8, 0, 0),
        }
        values.update(overrides)
        row = NotificationSettings(**values)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row

    return _make


@pytest.fixture
def email_dispatcher():
    dispatcher = AsyncMock(spec=EmailDispatcher)
    dispatcher.send.return_value = "a@x.com"
    return dispatcher


@pytest.fixture
def push_dispatcher():
    return AsyncMock(spec=PushDispatcher)


@pytest.fixture
def service(medicine_repo, settings_repo, log_writer, email_dispatcher, push_dispatcher, clock):
    return NotificationService(
        medicine_repo=medicine_repo,
        settings_repo=settings_repo,
        log_writer=log_writer,
        email_dispatcher=email_dispatcher,
        push_dispatcher=push_dispatcher,
        clock=clock,
        window_minutes=1,
    )


@pytest.fixture
def log_entries(db):
    def _entries():
        db.expire_all()
        return db.query(NotificationLog).order_by(NotificationLog.id).all()

    return _entries
