"""Shared test fixtures for Debt Communication Assistant tests."""
import pytest
from sqlalchemy.pool import StaticPool

from src.api.models.requests import (
    Channel,
    CustomerProfile,
    CustomerSegment,
    SaveTemplateRequest,
)
from src.config.settings import settings
from src.db.database import configure_database


@pytest.fixture
def sample_profile() -> CustomerProfile:
    """Plain new customer, 20 days overdue, email."""
    return CustomerProfile(
        name="Jane Wanjiku",
        debt_amount=45000.0,
        days_past_due=20,
        customer_segment=CustomerSegment.NEW,
        preferred_channel=Channel.EMAIL,
    )


@pytest.fixture
def hardship_profile() -> CustomerProfile:
    """Chronic defaulter who reported a job loss, via SMS."""
    return CustomerProfile(
        name="Peter Otieno",
        debt_amount=1500.5,
        days_past_due=120,
        customer_segment=CustomerSegment.CHRONIC_DEFAULTER,
        hardship_reason="Lost job last month",
        preferred_channel=Channel.SMS,
    )


@pytest.fixture
def sample_template_request() -> SaveTemplateRequest:
    return SaveTemplateRequest(
        name="Jane Wanjiku - new",
        description="Auto-saved from email message",
        customer_segment=CustomerSegment.NEW,
        channel=Channel.EMAIL,
        tone="professional and helpful",
        subject="Your outstanding balance",
        content="Dear Jane, please contact us to discuss a repayment plan.",
    )


@pytest.fixture
def database(monkeypatch):
    """In-memory SQLite template store, disconnected after the test."""
    monkeypatch.setattr(settings, "database_url", None)
    session_factory = configure_database(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield session_factory
    configure_database(None)


@pytest.fixture
def no_database(monkeypatch):
    """Template store explicitly unavailable."""
    monkeypatch.setattr(settings, "database_url", None)
    configure_database(None)
    yield
    configure_database(None)
