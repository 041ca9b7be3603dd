# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Turma service."""

from collections.abc import Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.aluno.service import AlunoService
from src.domains.enrollment.exceptions import (
    InvalidOperationError,
    NotFoundError,
    TurmaAlreadyExistsError,
    TurmaHasAlunosError,
    TurmaNotFoundError,
)
from src.domains.turma.service import TurmaService
from src.models.aluno import AlunoCreateRequest
from src.models.turma import TurmaCreateRequest, TurmaRef, TurmaUpdateRequest


@pytest.fixture
def turma_service(db_session: AsyncSession) -> TurmaService:
    """Create turma service bound to the test session."""
    return TurmaService(db=db_session)


@pytest.fixture
def aluno_service(db_session: AsyncSession) -> AlunoService:
    """Create aluno service bound to the test session."""
    return AlunoService(db=db_session)


def _turma(idioma: str, numero: int, ano_letivo: str = "2025/1") -> TurmaCreateRequest:
    return TurmaCreateRequest(idioma=idioma, numero=numero, ano_letivo=ano_letivo)


def _aluno(nome: str, cpf: str, *refs: tuple[str, int]) -> AlunoCreateRequest:
    return AlunoCreateRequest(
        nome=nome,
        email=f"{nome.lower().replace(' ', '.')}@example.com",
        cpf=cpf,
        idade=20,
        turmas=[TurmaRef(idioma=i, numero=n) for i, n in refs],
    )


class TestCreateTurma:
    """Tests for create_turma."""

    @pytest.mark.asyncio
    async def test_create_turma_success(self, turma_service: TurmaService) -> None:
        """Test creating a turma trims input and starts with 5 seats."""
        result = await turma_service.create_turma(_turma("  Inglês ", 101, " 2025/1 "))

        assert result.id is not None
        assert result.idioma == "Inglês"
        assert result.numero == 101
        assert result.ano_letivo == "2025/1"
        assert result.vagas_restantes == 5

    @pytest.mark.asyncio
    async def test_create_duplicate_identity_ignores_case(self, turma_service: TurmaService) -> None:
        """Test that (idioma, numero) is unique regardless of case."""
        await turma_service.create_turma(_turma("Inglês", 101))

        with pytest.raises(TurmaAlreadyExistsError, match="Já existe uma turma inglês 101."):
            await turma_service.create_turma(_turma("inglês", 101))

    @pytest.mark.asyncio
    async def test_create_duplicate_identity_ignores_accented_case(
        self, turma_service: TurmaService
    ) -> None:
        """Test that upper-case accented letters match their lower-case form."""
        await turma_service.create_turma(_turma("Inglês", 101))

        with pytest.raises(TurmaAlreadyExistsError, match="Já existe uma turma INGLÊS 101."):
            await turma_service.create_turma(_turma("INGLÊS", 101))

    @pytest.mark.asyncio
    async def test_same_idioma_other_numero(self, turma_service: TurmaService) -> None:
        """Test that a different numero of the same idioma is allowed."""
        await turma_service.create_turma(_turma("Inglês", 101))
        result = await turma_service.create_turma(_turma("Inglês", 102))

        assert result.numero == 102


class TestUpdateTurma:
    """Tests for update_turma."""

    @pytest.mark.asyncio
    async def test_update_keeping_own_identity(self, turma_service: TurmaService) -> None:
        """Test updating a turma without changing (idioma, numero)."""
        created = await turma_service.create_turma(_turma("Inglês", 101))

        result = await turma_service.update_turma(
            created.id,
            TurmaUpdateRequest(idioma="inglês", numero=101, ano_letivo="2025/2"),
        )

        assert result.ano_letivo == "2025/2"
        assert result.idioma == "inglês"

    @pytest.mark.asyncio
    async def test_update_to_identity_of_other_turma(self, turma_service: TurmaService) -> None:
        """Test that taking another turma's identity fails."""
        await turma_service.create_turma(_turma("Inglês", 101))
        other = await turma_service.create_turma(_turma("Inglês", 102))

        with pytest.raises(TurmaAlreadyExistsError, match="Já existe a turma INGLÊS 101."):
            await turma_service.update_turma(
                other.id,
                TurmaUpdateRequest(idioma="INGLÊS", numero=101, ano_letivo="2025/1"),
            )

    @pytest.mark.asyncio
    async def test_update_not_found(self, turma_service: TurmaService) -> None:
        """Test updating a missing turma."""
        with pytest.raises(TurmaNotFoundError, match="Turma não encontrada."):
            await turma_service.update_turma(
                999,
                TurmaUpdateRequest(idioma="Inglês", numero=1, ano_letivo="2025/1"),
            )


class TestDeleteTurma:
    """Tests for delete_turma."""

    @pytest.mark.asyncio
    async def test_delete_empty_turma(self, turma_service: TurmaService) -> None:
        """Test deleting a turma without alunos."""
        created = await turma_service.create_turma(_turma("Francês", 1))

        await turma_service.delete_turma(created.id)

        with pytest.raises(NotFoundError):
            await turma_service.get_turma(created.id)

    @pytest.mark.asyncio
    async def test_delete_turma_with_alunos(
        self,
        turma_service: TurmaService,
        aluno_service: AlunoService,
        cpf_factory: Callable[[], str],
    ) -> None:
        """Test that a turma with alunos cannot be deleted."""
        created = await turma_service.create_turma(_turma("Francês", 1))
        await aluno_service.create_aluno(_aluno("Ana", cpf_factory(), ("Francês", 1)))

        with pytest.raises(TurmaHasAlunosError) as exc_info:
            await turma_service.delete_turma(created.id)

        assert isinstance(exc_info.value, InvalidOperationError)
        assert (await turma_service.get_turma(created.id)).vagas_restantes == 4


class TestTurmaQueries:
    """Tests for turma read operations."""

    @pytest.mark.asyncio
    async def test_list_turmas_ordered_with_seats(
        self,
        turma_service: TurmaService,
        aluno_service: AlunoService,
        cpf_factory: Callable[[], str],
    ) -> None:
        """Test turmas are ordered by (idioma, numero) with remaining seats."""
        await turma_service.create_turma(_turma("Inglês", 102))
        await turma_service.create_turma(_turma("Espanhol", 5))
        await turma_service.create_turma(_turma("Inglês", 101))
        await aluno_service.create_aluno(_aluno("Ana", cpf_factory(), ("Inglês", 101)))
        await aluno_service.create_aluno(_aluno("Bia", cpf_factory(), ("Inglês", 101)))

        result = await turma_service.list_turmas()

        assert [(t.idioma, t.numero) for t in result] == [
            ("Espanhol", 5),
            ("Inglês", 101),
            ("Inglês", 102),
        ]
        assert [t.vagas_restantes for t in result] == [5, 3, 5]

    @pytest.mark.asyncio
    async def test_list_turmas_by_idioma(self, turma_service: TurmaService) -> None:
        """Test filtering by idioma ignores case and orders by numero."""
        await turma_service.create_turma(_turma("Inglês", 202))
        await turma_service.create_turma(_turma("Inglês", 101))
        await turma_service.create_turma(_turma("Alemão", 1))

        result = await turma_service.list_turmas_by_idioma("inglês")

        assert [t.numero for t in result] == [101, 202]

    @pytest.mark.asyncio
    async def test_get_turma_by_identity(self, turma_service: TurmaService) -> None:
        """Test lookup by (idioma, numero) ignoring case and surrounding spaces."""
        created = await turma_service.create_turma(_turma("Inglês", 101))

        result = await turma_service.get_turma_by_identity(" inglês ", 101)

        assert result.id == created.id
        assert result.vagas_restantes == 5

    @pytest.mark.asyncio
    async def test_lookups_fold_accented_case(self, turma_service: TurmaService) -> None:
        """Test identity and idioma lookups with upper-case accented input."""
        created = await turma_service.create_turma(_turma("Inglês", 101))

        by_identity = await turma_service.get_turma_by_identity("INGLÊS", 101)
        by_idioma = await turma_service.list_turmas_by_idioma("INGLÊS")

        assert by_identity.id == created.id
        assert [t.id for t in by_idioma] == [created.id]

    @pytest.mark.asyncio
    async def test_get_turma_by_identity_not_found(self, turma_service: TurmaService) -> None:
        """Test lookup of a missing identity."""
        with pytest.raises(TurmaNotFoundError, match="Turma Inglês 999 não encontrada."):
            await turma_service.get_turma_by_identity("Inglês", 999)

    @pytest.mark.asyncio
    async def test_list_alunos_da_turma(
        self,
        turma_service: TurmaService,
        aluno_service: AlunoService,
        cpf_factory: Callable[[], str],
    ) -> None:
        """Test alunos of a turma are sorted by nome."""
        await turma_service.create_turma(_turma("Inglês", 101))
        await turma_service.create_turma(_turma("Inglês", 102))
        await aluno_service.create_aluno(_aluno("Carlos", cpf_factory(), ("Inglês", 101)))
        await aluno_service.create_aluno(_aluno("Ana", cpf_factory(), ("Inglês", 101)))
        await aluno_service.create_aluno(_aluno("Bruno", cpf_factory(), ("Inglês", 102)))

        result = await turma_service.list_alunos_da_turma("Inglês", 101)

        assert [a.nome for a in result] == ["Ana", "Carlos"]
        assert all(a.aluno_id is not None for a in result)
