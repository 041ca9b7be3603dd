# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for health endpoints and request context."""

import logging
from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.utils.logging import LOG_HANDLER_NAME

pytestmark = pytest.mark.integration


@pytest.fixture
def captured_app(app: FastAPI, capsys: pytest.CaptureFixture[str]) -> Generator[FastAPI, None, None]:
    """App whose lifespan installs the log handler on the captured stdout."""
    yield app

    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == LOG_HANDLER_NAME]:
        root.removeHandler(handler)


class TestHealthEndpoints:
    """Tests for /health and /ready."""

    def test_health_reports_database(self, client: TestClient) -> None:
        """Test health includes the database component."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "development"
        assert data["components"]["database"]["status"] == "healthy"

    def test_ready(self, client: TestClient) -> None:
        """Test readiness with a reachable database."""
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["ready"] is True
        assert response.json()["checks"]["database"]["status"] == "healthy"


class TestRequestContext:
    """Tests for the request id header and log context."""

    def test_request_id_generated(self, client: TestClient) -> None:
        """Test a request id is generated when absent."""
        response = client.get("/health")

        assert response.headers["X-Request-ID"]

    def test_request_id_echoed(self, client: TestClient) -> None:
        """Test a client supplied request id is echoed back."""
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_in_service_log(
        self,
        captured_app: FastAPI,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test the log line of a mutation carries the request id."""
        with TestClient(captured_app) as client:
            response = client.post(
                "/api/v1/turmas",
                json={"idioma": "Inglês", "numero": 101, "anoLetivo": "2025/1"},
                headers={"X-Request-ID": "req-log-1"},
            )
        assert response.status_code == 201

        lines = [line for line in capsys.readouterr().out.splitlines() if "Created turma" in line]

        assert len(lines) == 1
        assert "req-log-1" in lines[0]
