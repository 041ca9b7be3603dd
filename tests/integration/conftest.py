# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest fixtures for API integration tests.

The application runs with its real lifespan against a fresh in-memory
SQLite database per test.
"""

from collections.abc import Callable, Generator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.core.config import clear_settings_cache


@pytest.fixture
def app(monkeypatch: pytest.MonkeyPatch, no_rate_limit: None) -> Generator[FastAPI, None, None]:
    """Create test FastAPI app configured for an in-memory database."""
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite://")
    monkeypatch.setenv("DATABASE_CREATE_TABLES", "true")
    monkeypatch.setenv("ENVIRONMENT", "development")
    clear_settings_cache()

    yield create_app()

    clear_settings_cache()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create test client; entering it runs the application lifespan."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_turma(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Create a turma through the API and return its body."""

    def _create(idioma: str = "Inglês", numero: int = 101, ano_letivo: str = "2025/1") -> dict[str, Any]:
        response = client.post(
            "/api/v1/turmas",
            json={"idioma": idioma, "numero": numero, "anoLetivo": ano_letivo},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_aluno(
    client: TestClient,
    cpf_factory: Callable[[], str],
) -> Callable[..., dict[str, Any]]:
    """Create an aluno through the API and return its body."""
    seq = iter(range(1, 1000))

    def _create(*refs: tuple[str, int], nome: str | None = None) -> dict[str, Any]:
        n = next(seq)
        response = client.post(
            "/api/v1/alunos",
            json={
                "nome": nome or f"Aluno {n:03d}",
                "email": f"aluno{n}@example.com",
                "cpf": cpf_factory(),
                "idade": 20,
                "turmas": [{"idioma": i, "numero": num} for i, num in refs],
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
