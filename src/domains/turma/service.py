# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Turma service for managing language classes.

This module provides the TurmaService class for:
- Turma CRUD
- Lookup by identity (idioma, numero) and by idioma
- Listing the alunos of a turma
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.enrollment.exceptions import (
    TurmaAlreadyExistsError,
    TurmaHasAlunosError,
    TurmaNotFoundError,
)
from src.domains.enrollment.rules import (
    commit,
    count_matriculas,
    find_turma,
    resolve_turma,
    vagas_restantes,
)
from src.infrastructure.database.models import Aluno, Matricula, Turma, normalize_idioma
from src.models.aluno import AlunoTurmaItem
from src.models.turma import TurmaCreateRequest, TurmaResponse, TurmaUpdateRequest

logger = logging.getLogger(__name__)


class TurmaService:
    """Service for managing turmas.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize turma service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def create_turma(self, request: TurmaCreateRequest) -> TurmaResponse:
        """Create a new turma.

        Args:
            request: Turma creation data.

        Returns:
            Created turma with all seats available.

        Raises:
            TurmaAlreadyExistsError: If (idioma, numero) is taken.
        """
        idioma = request.idioma.strip()

        if await find_turma(self.db, idioma, request.numero) is not None:
            raise TurmaAlreadyExistsError(f"Já existe uma turma {idioma} {request.numero}.")

        turma = Turma(
            numero=request.numero,
            idioma=idioma,
            ano_letivo=request.ano_letivo.strip(),
        )
        self.db.add(turma)
        await commit(self.db)

        logger.info(
            "Created turma: id=%s, idioma=%s, numero=%s",
            turma.id,
            turma.idioma,
            turma.numero,
        )

        return self._to_response(turma, 0)

    async def update_turma(self, turma_id: int, request: TurmaUpdateRequest) -> TurmaResponse:
        """Update a turma.

        Keeping the turma's own (idioma, numero) is allowed.

        Args:
            turma_id: Turma identifier.
            request: New turma data.

        Returns:
            Updated turma.

        Raises:
            TurmaNotFoundError: If turma not found.
            TurmaAlreadyExistsError: If another turma has the new identity.
        """
        turma = await self._get_turma(turma_id)
        idioma = request.idioma.strip()

        other = await find_turma(self.db, idioma, request.numero)
        if other is not None and other.id != turma.id:
            raise TurmaAlreadyExistsError(f"Já existe a turma {idioma} {request.numero}.")

        turma.numero = request.numero
        turma.idioma = idioma
        turma.ano_letivo = request.ano_letivo.strip()

        await commit(self.db)

        logger.info("Updated turma: id=%s", turma.id)

        return self._to_response(turma, await count_matriculas(self.db, turma.id))

    async def delete_turma(self, turma_id: int) -> None:
        """Delete a turma with no matriculas.

        Args:
            turma_id: Turma identifier.

        Raises:
            TurmaNotFoundError: If turma not found.
            TurmaHasAlunosError: If the turma has alunos.
        """
        turma = await self._get_turma(turma_id)

        if await count_matriculas(self.db, turma.id) > 0:
            raise TurmaHasAlunosError("Turma não pode ser excluída pois possui alunos.")

        await self.db.delete(turma)
        await commit(self.db)

        logger.info("Deleted turma: id=%s", turma_id)

    async def list_turmas(self) -> list[TurmaResponse]:
        """List turmas ordered by (idioma, numero) with remaining seats."""
        stmt = self._with_counts().order_by(Turma.idioma, Turma.numero)
        result = await self.db.execute(stmt)
        return [self._to_response(t, total) for t, total in result.all()]

    async def list_turmas_by_idioma(self, idioma: str) -> list[TurmaResponse]:
        """List turmas of an idioma (case-insensitive) ordered by numero."""
        stmt = (
            self._with_counts()
            .where(Turma.idioma_key == normalize_idioma(idioma))
            .order_by(Turma.numero)
        )
        result = await self.db.execute(stmt)
        return [self._to_response(t, total) for t, total in result.all()]

    async def get_turma(self, turma_id: int) -> TurmaResponse:
        """Get turma by id.

        Raises:
            TurmaNotFoundError: If turma not found.
        """
        turma = await self._get_turma(turma_id)
        return self._to_response(turma, await count_matriculas(self.db, turma.id))

    async def get_turma_by_identity(self, idioma: str, numero: int) -> TurmaResponse:
        """Get turma by (idioma, numero).

        Raises:
            TurmaNotFoundError: If turma not found.
        """
        turma = await resolve_turma(self.db, idioma, numero)
        return self._to_response(turma, await count_matriculas(self.db, turma.id))

    async def list_alunos_da_turma(self, idioma: str, numero: int) -> list[AlunoTurmaItem]:
        """List alunos enrolled in a turma, ordered by nome.

        Args:
            idioma: Turma language (case-insensitive).
            numero: Turma number.

        Returns:
            Enrolled alunos.

        Raises:
            TurmaNotFoundError: If turma not found.
        """
        turma = await resolve_turma(self.db, idioma, numero)

        stmt = (
            select(Aluno)
            .join(Matricula, Matricula.aluno_id == Aluno.id)
            .where(Matricula.turma_id == turma.id)
            .order_by(Aluno.nome, Aluno.id)
        )
        result = await self.db.execute(stmt)

        return [
            AlunoTurmaItem(
                aluno_id=a.id,
                nome=a.nome,
                email=a.email,
                cpf=a.cpf,
                idade=a.idade,
            )
            for a in result.scalars()
        ]

    # =========================================================================
    # Private helpers
    # =========================================================================

    async def _get_turma(self, turma_id: int) -> Turma:
        """Get turma by id or raise TurmaNotFoundError."""
        turma = await self.db.get(Turma, turma_id)
        if turma is None:
            raise TurmaNotFoundError("Turma não encontrada.")
        return turma

    @staticmethod
    def _with_counts():
        return (
            select(Turma, func.count(Matricula.aluno_id))
            .outerjoin(Matricula, Matricula.turma_id == Turma.id)
            .group_by(Turma.id)
        )

    def _to_response(self, turma: Turma, total_matriculas: int) -> TurmaResponse:
        """Convert turma to response model."""
        return TurmaResponse(
            id=turma.id,
            numero=turma.numero,
            idioma=turma.idioma,
            ano_letivo=turma.ano_letivo,
            vagas_restantes=vagas_restantes(total_matriculas),
        )
