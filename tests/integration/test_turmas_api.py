# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for Turmas API endpoints."""

from collections.abc import Callable
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


class TestTurmasAPIRouting:
    """Tests for turmas API routing."""

    def test_routes_registered(self, app: FastAPI) -> None:
        """Test that turma routes are registered."""
        routes = [route.path for route in app.routes]

        assert "/api/v1/turmas" in routes
        assert "/api/v1/turmas/{turma_id}" in routes
        assert "/api/v1/turmas/idioma/{idioma}" in routes
        assert "/api/v1/turmas/{idioma}/{numero}" in routes
        assert "/api/v1/turmas/{idioma}/{numero}/alunos" in routes


class TestTurmasAPIEndpoints:
    """Tests for turmas API endpoints."""

    def test_create_turma(self, client: TestClient) -> None:
        """Test creating a turma returns camelCase fields."""
        response = client.post(
            "/api/v1/turmas",
            json={"idioma": "Inglês", "numero": 101, "anoLetivo": "2025/1"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["idioma"] == "Inglês"
        assert data["anoLetivo"] == "2025/1"
        assert data["vagasRestantes"] == 5

    def test_create_duplicate_turma(
        self,
        client: TestClient,
        create_turma: Callable[..., dict[str, Any]],
    ) -> None:
        """Test creating the same (idioma, numero) twice."""
        create_turma("Inglês", 101)

        response = client.post(
            "/api/v1/turmas",
            json={"idioma": "INGLÊS", "numero": 101, "anoLetivo": "2025/2"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Já existe uma turma INGLÊS 101."

    def test_create_turma_invalid_ano_letivo(self, client: TestClient) -> None:
        """Test request validation failure."""
        response = client.post(
            "/api/v1/turmas",
            json={"idioma": "Inglês", "numero": 101, "anoLetivo": "2025/3"},
        )

        assert response.status_code == 422

    def test_get_turma_not_found(self, client: TestClient) -> None:
        """Test getting a missing turma."""
        response = client.get("/api/v1/turmas/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Turma não encontrada."

    def test_update_turma_to_taken_identity(
        self,
        client: TestClient,
        create_turma: Callable[..., dict[str, Any]],
    ) -> None:
        """Test updating to another turma's identity fails."""
        create_turma("Inglês", 101)
        other = create_turma("Inglês", 102)

        response = client.put(
            f"/api/v1/turmas/{other['id']}",
            json={"idioma": "Inglês", "numero": 101, "anoLetivo": "2025/1"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Já existe a turma Inglês 101."

    def test_update_turma_same_identity(
        self,
        client: TestClient,
        create_turma: Callable[..., dict[str, Any]],
    ) -> None:
        """Test updating a turma while keeping its identity."""
        created = create_turma("Inglês", 101)

        response = client.put(
            f"/api/v1/turmas/{created['id']}",
            json={"idioma": "Inglês", "numero": 101, "anoLetivo": "2026/1"},
        )

        assert response.status_code == 200
        assert response.json()["anoLetivo"] == "2026/1"

    def test_delete_turma(
        self,
        client: TestClient,
        create_turma: Callable[..., dict[str, Any]],
    ) -> None:
        """Test deleting an empty turma."""
        created = create_turma("Francês", 1)

        response = client.delete(f"/api/v1/turmas/{created['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/v1/turmas/{created['id']}").status_code == 404

    def test_delete_turma_with_alunos(
        self,
        client: TestClient,
        create_turma: Callable[..., dict[str, Any]],
        create_aluno: Callable[..., dict[str, Any]],
    ) -> None:
        """Test deleting a turma with alunos fails."""
        created = create_turma("Francês", 1)
        create_aluno(("Francês", 1))

        response = client.delete(f"/api/v1/turmas/{created['id']}")

        assert response.status_code == 400
        assert response.json()["detail"] == "Turma não pode ser excluída pois possui alunos."

    def test_list_turmas_by_idioma(
        self,
        client: TestClient,
        create_turma: Callable[..., dict[str, Any]],
    ) -> None:
        """Test listing turmas of an idioma."""
        create_turma("Inglês", 202)
        create_turma("Inglês", 101)
        create_turma("Espanhol", 1)

        response = client.get("/api/v1/turmas/idioma/INGLÊS")

        assert response.status_code == 200
        assert [t["numero"] for t in response.json()] == [101, 202]

    def test_list_alunos_da_turma(
        self,
        client: TestClient,
        create_turma: Callable[..., dict[str, Any]],
        create_aluno: Callable[..., dict[str, Any]],
    ) -> None:
        """Test listing alunos of a turma by identity."""
        create_turma("Inglês", 101)
        create_aluno(("Inglês", 101), nome="Zeca")
        create_aluno(("Inglês", 101), nome="Ana")

        response = client.get("/api/v1/turmas/Inglês/101/alunos")

        assert response.status_code == 200
        data = response.json()
        assert [a["nome"] for a in data] == ["Ana", "Zeca"]
        assert "alunoId" in data[0]

    def test_list_alunos_da_turma_not_found(self, client: TestClient) -> None:
        """Test listing alunos of a missing turma."""
        response = client.get("/api/v1/turmas/Inglês/999/alunos")

        assert response.status_code == 404
        assert response.json()["detail"] == "Turma Inglês 999 não encontrada."


class TestCapacityRoundTrip:
    """Tests for the capacity lifecycle of a turma."""

    def test_fill_turma_to_capacity(
        self,
        client: TestClient,
        create_turma: Callable[..., dict[str, Any]],
        create_aluno: Callable[..., dict[str, Any]],
    ) -> None:
        """Test seats go from 5 to 0 and a 6th enrollment fails."""
        create_turma("Inglês", 101)
        create_turma("Espanhol", 1)
        create_turma("Espanhol", 2)

        response = client.get("/api/v1/turmas/Inglês/101")
        assert response.status_code == 200
        assert response.json()["vagasRestantes"] == 5

        alunos = [create_aluno(("Espanhol", 1)) for _ in range(5)]
        alunos.append(create_aluno(("Espanhol", 2)))
        for aluno in alunos[:5]:
            response = client.post(
                f"/api/v1/alunos/{aluno['id']}/matriculas",
                json={"idioma": "Inglês", "numero": 101},
            )
            assert response.status_code == 200

        assert client.get("/api/v1/turmas/INGLÊS/101").json()["vagasRestantes"] == 0

        response = client.post(
            f"/api/v1/alunos/{alunos[5]['id']}/matriculas",
            json={"idioma": "Inglês", "numero": 101},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Turma Inglês 101 está lotada (máx. 5)."
