"""Shared fixtures for unit tests."""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.profile import Profile


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.settings = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> str:
    return "uid-owner"


@pytest.fixture
def stranger_id() -> str:
    """A user who owns nothing (distinct from user_id)."""
    return "uid-stranger"


def make_profile(user_id: str = "uid-owner", **overrides: Any) -> Profile:
    """Build a profile entity with sensible defaults."""
    fields: dict[str, Any] = {
        "user_id": user_id,
        "first_name": "Sara",
        "last_name": "Cohen",
        "role": "Electrician",
        "business_name": "Cohen Electric",
        "work_area": "Tel Aviv",
        "skills": ["Wiring"],
        "created_at": datetime(2020, 1, 1, 12, 0, 0),
        "updated_at": datetime(2020, 1, 1, 12, 0, 0),
    }
    fields.update(overrides)
    return Profile(**fields)


@pytest.fixture
def profile(user_id: str) -> Profile:
    return make_profile(user_id)


@pytest.fixture
def profile_factory() -> Any:
    """Expose ``make_profile`` to tests."""
    return make_profile
