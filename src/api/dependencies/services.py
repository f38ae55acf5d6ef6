"""Dependency injection factories for the API.

Process-wide objects are built once, in this order:

1. ``core.config.settings``
2. the database engine and session factory (``infrastructure.database.session``)
3. the auth provider (``api.dependencies.auth.get_auth_provider``)
4. the language model client and profile generator
5. domain services

Tests replace any of these through ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Callable

from domain.services.profile_service import ProfileService
from domain.services.settings_service import SettingsService
from infrastructure.ai.openai_generator import OpenAIProfileGenerator, create_openai_client
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_profile_generator() -> OpenAIProfileGenerator:
    """Get the shared profile text generator."""
    return OpenAIProfileGenerator(create_openai_client())


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(
        get_uow_factory(),
        generator=get_profile_generator(),
        settings_service=get_settings_service(),
    )


@lru_cache
def get_settings_service() -> SettingsService:
    """Get Settings service instance."""
    return SettingsService(get_uow_factory())
