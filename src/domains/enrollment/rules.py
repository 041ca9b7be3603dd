# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment rules shared by the aluno and turma services.

Turma lookup by (idioma, numero), capacity checks and commit handling
live here so both services apply them the same way.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.enrollment.exceptions import (
    InvalidOperationError,
    TurmaFullError,
    TurmaNotFoundError,
)
from src.infrastructure.database.models import Matricula, Turma, normalize_idioma

logger = logging.getLogger(__name__)

CAPACIDADE_MAXIMA = 5


async def find_turma(db: AsyncSession, idioma: str, numero: int) -> Turma | None:
    """Find a turma by identity.

    idioma is matched on its normalized key (trimmed, Unicode case-folded);
    numero is exact.

    Args:
        db: Async database session.
        idioma: Language name.
        numero: Class number.

    Returns:
        Turma or None.
    """
    stmt = select(Turma).where(
        Turma.idioma_key == normalize_idioma(idioma),
        Turma.numero == numero,
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def resolve_turma(db: AsyncSession, idioma: str, numero: int) -> Turma:
    """Find a turma by identity or fail.

    Raises:
        TurmaNotFoundError: If no turma matches.
    """
    turma = await find_turma(db, idioma, numero)
    if turma is None:
        raise TurmaNotFoundError(f"Turma {idioma.strip()} {numero} não encontrada.")
    return turma


async def count_matriculas(db: AsyncSession, turma_id: int) -> int:
    """Count matriculas of a turma."""
    stmt = select(func.count()).select_from(Matricula).where(Matricula.turma_id == turma_id)
    result = await db.execute(stmt)
    return result.scalar_one()


async def ensure_capacity(db: AsyncSession, turma: Turma) -> None:
    """Check that a turma can take one more aluno.

    The count is read before the insert, so two concurrent requests can
    both pass for the last seat.

    Raises:
        TurmaFullError: If turma already holds CAPACIDADE_MAXIMA matriculas.
    """
    if await count_matriculas(db, turma.id) >= CAPACIDADE_MAXIMA:
        raise TurmaFullError(
            f"Turma {turma.idioma} {turma.numero} está lotada (máx. {CAPACIDADE_MAXIMA})."
        )


def vagas_restantes(total_matriculas: int) -> int:
    """Seats left given the current number of matriculas."""
    return CAPACIDADE_MAXIMA - total_matriculas


async def commit(db: AsyncSession) -> None:
    """Commit the unit of work.

    Unique or foreign key violations detected by the store (e.g. a
    concurrent insert of the same e-mail) surface as InvalidOperationError.

    Raises:
        InvalidOperationError: If the store rejects the transaction.
    """
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning("Integrity violation on commit: %s", e.orig)
        raise InvalidOperationError("Operação viola uma restrição de integridade dos dados.") from e
