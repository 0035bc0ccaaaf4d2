"""
Shared fixtures for adversarial tests.

Provides common infrastructure for concurrency and token tampering tests.
"""

import pytest

from postboard.adapters.repository.memory import InMemoryPostRepository, InMemoryUserRepository

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def post_repository() -> InMemoryPostRepository:
    return InMemoryPostRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()
