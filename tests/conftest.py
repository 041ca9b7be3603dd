# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests (services against an in-memory SQLite database)
- Integration tests (the FastAPI app through TestClient)
"""

from collections.abc import AsyncGenerator, Callable, Generator
from itertools import count
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.infrastructure.database.connection import (
    create_engine,
    create_sessionmaker,
    create_tables,
)

IN_MEMORY_URL = "sqlite+aiosqlite://"


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (runs the FastAPI app)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# CPF Helpers
# =============================================================================


def _digit(base: str) -> int:
    weight = len(base) + 1
    remainder = sum(int(d) * (weight - i) for i, d in enumerate(base)) % 11
    return 0 if remainder < 2 else 11 - remainder


def build_cpf(base: str) -> str:
    """Append both check digits to a 9-digit base."""
    first = _digit(base)
    return f"{base}{first}{_digit(base + str(first))}"


@pytest.fixture
def cpf_factory() -> Callable[[], str]:
    """Provide a generator of distinct valid CPFs."""
    seq = count(1)

    def _next() -> str:
        return build_cpf(f"{123456000 + next(seq) * 7:09d}")

    return _next


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine with the full schema."""
    engine = create_engine(IN_MEMORY_URL)
    await create_tables(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session bound to the in-memory engine."""
    async_session = create_sessionmaker(db_engine)

    async with async_session() as session:
        yield session


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def sample_turma_data() -> dict[str, Any]:
    """Provide sample turma data for testing."""
    return {
        "numero": 101,
        "idioma": "Inglês",
        "anoLetivo": "2025/1",
    }


@pytest.fixture
def sample_aluno_data() -> dict[str, Any]:
    """Provide sample aluno data for testing."""
    return {
        "nome": "Maria Silva",
        "email": "maria@example.com",
        "cpf": "529.982.247-25",
        "idade": 21,
        "turmas": [{"idioma": "Inglês", "numero": 101}],
    }


@pytest.fixture
def no_rate_limit() -> Generator[None, None, None]:
    """Disable rate limiting for the duration of a test."""
    from src.api.middleware.rate_limit import limiter

    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous
