"""Pytest configuration and shared fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from roster_import.domain.models import Base
from roster_import.domain.registry import StaffRegistry
from roster_import.domain.roster import TextFragment
from roster_import.services.recognizers import FieldRecognizers


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def registry():
    """Staff registry with one base/(R) pair and two single identities."""
    return StaffRegistry(["NARAYYA", "NARAYYA(R)", "SHARMA", "MATHEW"])


@pytest.fixture
def recognizers(registry):
    return FieldRecognizers(registry=registry)


@pytest.fixture
def row():
    """Factory laying out texts left to right on one line."""

    def _row(y, *texts, x0=20.0, step=80.0):
        return [TextFragment(text=t, x=x0 + i * step, y=y) for i, t in enumerate(texts)]

    return _row
