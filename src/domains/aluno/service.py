# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Aluno service for managing students and their matriculas.

This module provides the AlunoService class for:
- Aluno CRUD
- Enrolling an aluno in a turma (matricular)
- Removing an aluno from a turma (desmatricular)

Every aluno keeps at least one matricula and no turma holds more than
CAPACIDADE_MAXIMA alunos.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.enrollment.exceptions import (
    AlreadyEnrolledError,
    AlunoNotFoundError,
    CpfAlreadyExistsError,
    EmailAlreadyExistsError,
    MinimumEnrollmentError,
    NotEnrolledError,
    StillEnrolledError,
)
from src.domains.enrollment.rules import commit, ensure_capacity, resolve_turma
from src.infrastructure.database.models import Aluno, Matricula, Turma
from src.models.aluno import (
    AlunoCreateRequest,
    AlunoDetail,
    AlunoListItem,
    AlunoUpdateRequest,
    MatriculaRequest,
)
from src.models.turma import TurmaRef, TurmaSummary
from src.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class AlunoService:
    """Service for managing alunos and their matriculas.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize aluno service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def create_aluno(self, request: AlunoCreateRequest) -> AlunoDetail:
        """Create an aluno enrolled in the requested turmas.

        Args:
            request: Aluno data with at least one turma reference.

        Returns:
            Created aluno with turmas sorted by (idioma, numero).

        Raises:
            EmailAlreadyExistsError: If the e-mail is taken.
            CpfAlreadyExistsError: If the CPF is taken.
            TurmaNotFoundError: If a turma reference does not resolve.
            TurmaFullError: If a requested turma is full.
        """
        nome = request.nome.strip()
        email = request.email.strip()
        cpf = request.cpf_digits

        await self._ensure_unique_email(email)
        await self._ensure_unique_cpf(cpf)

        turmas = await self._resolve_turmas(request.turmas)
        for turma in turmas:
            await ensure_capacity(self.db, turma)

        aluno = Aluno(nome=nome, email=email, cpf=cpf, idade=request.idade)
        self.db.add(aluno)
        for turma in turmas:
            self.db.add(Matricula(aluno=aluno, turma=turma, data_matricula=utc_now()))

        await commit(self.db)

        logger.info(
            "Created aluno: id=%s, turmas=%s",
            aluno.id,
            [t.id for t in turmas],
        )

        return self._to_detail(aluno, turmas)

    async def update_aluno(self, aluno_id: int, request: AlunoUpdateRequest) -> AlunoDetail:
        """Update an aluno and reconcile its turmas with the desired set.

        Matriculas no longer desired are removed and new ones are added.
        Capacity is only checked for turmas the aluno does not already have.

        Args:
            aluno_id: Aluno identifier.
            request: New aluno data and full desired turma list.

        Returns:
            Updated aluno detail.

        Raises:
            AlunoNotFoundError: If aluno not found.
            MinimumEnrollmentError: If the turma list is empty.
            EmailAlreadyExistsError: If the e-mail belongs to another aluno.
            CpfAlreadyExistsError: If the CPF belongs to another aluno.
            TurmaNotFoundError: If a turma reference does not resolve.
            TurmaFullError: If a newly requested turma is full.
        """
        aluno = await self._get_aluno(aluno_id)

        if not request.turmas:
            raise MinimumEnrollmentError("Aluno deve permanecer em pelo menos 1 turma.")

        email = request.email.strip()
        cpf = request.cpf_digits
        await self._ensure_unique_email(email, exclude_id=aluno.id)
        await self._ensure_unique_cpf(cpf, exclude_id=aluno.id)

        desired = {t.id: t for t in await self._resolve_turmas(request.turmas)}
        current_ids = set(
            (
                await self.db.execute(
                    select(Matricula.turma_id).where(Matricula.aluno_id == aluno.id)
                )
            ).scalars()
        )

        to_add = [t for tid, t in desired.items() if tid not in current_ids]
        to_remove = current_ids - desired.keys()

        for turma in to_add:
            await ensure_capacity(self.db, turma)

        aluno.nome = request.nome.strip()
        aluno.email = email
        aluno.cpf = cpf
        aluno.idade = request.idade

        if to_remove:
            await self.db.execute(
                delete(Matricula).where(
                    Matricula.aluno_id == aluno.id,
                    Matricula.turma_id.in_(sorted(to_remove)),
                )
            )
        for turma in to_add:
            self.db.add(Matricula(aluno_id=aluno.id, turma_id=turma.id, data_matricula=utc_now()))

        await commit(self.db)

        logger.info(
            "Updated aluno: id=%s, added=%s, removed=%s",
            aluno.id,
            [t.id for t in to_add],
            sorted(to_remove),
        )

        return self._to_detail(aluno, list(desired.values()))

    async def delete_aluno(self, aluno_id: int) -> None:
        """Delete an aluno with no matriculas.

        Args:
            aluno_id: Aluno identifier.

        Raises:
            AlunoNotFoundError: If aluno not found.
            StillEnrolledError: If the aluno is still enrolled in any turma.
        """
        aluno = await self._get_aluno(aluno_id)

        if await self._count_matriculas(aluno.id) > 0:
            raise StillEnrolledError(
                "Aluno não pode ser excluído pois está associado a turma(s)."
            )

        await self.db.delete(aluno)
        await commit(self.db)

        logger.info("Deleted aluno: id=%s", aluno_id)

    async def matricular(self, aluno_id: int, request: MatriculaRequest) -> AlunoDetail:
        """Enroll an aluno in a turma.

        Args:
            aluno_id: Aluno identifier.
            request: Turma reference (idioma, numero).

        Returns:
            Aluno detail after the enrollment.

        Raises:
            AlunoNotFoundError: If aluno not found.
            TurmaNotFoundError: If turma not found.
            AlreadyEnrolledError: If the aluno is already in the turma.
            TurmaFullError: If the turma is full.
        """
        aluno = await self._get_aluno(aluno_id)
        turma = await resolve_turma(self.db, request.idioma, request.numero)

        if await self.db.get(Matricula, (aluno.id, turma.id)) is not None:
            raise AlreadyEnrolledError("Aluno já está matriculado nessa turma.")

        await ensure_capacity(self.db, turma)

        self.db.add(Matricula(aluno_id=aluno.id, turma_id=turma.id, data_matricula=utc_now()))
        await commit(self.db)

        logger.info("Enrolled aluno: aluno=%s, turma=%s", aluno.id, turma.id)

        return await self.get_aluno(aluno.id)

    async def desmatricular(self, aluno_id: int, request: MatriculaRequest) -> AlunoDetail:
        """Remove an aluno from a turma.

        Args:
            aluno_id: Aluno identifier.
            request: Turma reference (idioma, numero).

        Returns:
            Aluno detail after the removal.

        Raises:
            AlunoNotFoundError: If aluno not found.
            TurmaNotFoundError: If turma not found.
            NotEnrolledError: If the aluno is not in the turma.
            MinimumEnrollmentError: If it is the aluno's only turma.
        """
        aluno = await self._get_aluno(aluno_id)
        turma = await resolve_turma(self.db, request.idioma, request.numero)

        matricula = await self.db.get(Matricula, (aluno.id, turma.id))
        if matricula is None:
            raise NotEnrolledError("Aluno não está matriculado nessa turma.")

        if await self._count_matriculas(aluno.id) <= 1:
            raise MinimumEnrollmentError("Aluno deve permanecer com pelo menos 1 turma.")

        await self.db.delete(matricula)
        await commit(self.db)

        logger.info("Unenrolled aluno: aluno=%s, turma=%s", aluno.id, turma.id)

        return await self.get_aluno(aluno.id)

    async def list_alunos(self) -> list[AlunoListItem]:
        """List alunos ordered by nome."""
        result = await self.db.execute(select(Aluno).order_by(Aluno.nome, Aluno.id))
        return [AlunoListItem.model_validate(a) for a in result.scalars()]

    async def list_alunos_com_turmas(self) -> list[AlunoDetail]:
        """List alunos ordered by nome, each with its turmas."""
        alunos = (await self.db.execute(select(Aluno).order_by(Aluno.nome, Aluno.id))).scalars().all()

        stmt = (
            select(Matricula.aluno_id, Turma)
            .join(Turma, Turma.id == Matricula.turma_id)
            .order_by(Turma.idioma, Turma.numero)
        )
        turmas_by_aluno: dict[int, list[Turma]] = defaultdict(list)
        for aluno_id, turma in (await self.db.execute(stmt)).all():
            turmas_by_aluno[aluno_id].append(turma)

        return [self._to_detail(a, turmas_by_aluno[a.id]) for a in alunos]

    async def get_aluno(self, aluno_id: int) -> AlunoDetail:
        """Get aluno detail by id.

        Args:
            aluno_id: Aluno identifier.

        Returns:
            Aluno with turmas sorted by (idioma, numero).

        Raises:
            AlunoNotFoundError: If aluno not found.
        """
        aluno = await self._get_aluno(aluno_id)

        stmt = (
            select(Turma)
            .join(Matricula, Matricula.turma_id == Turma.id)
            .where(Matricula.aluno_id == aluno.id)
            .order_by(Turma.idioma, Turma.numero)
        )
        turmas = (await self.db.execute(stmt)).scalars().all()

        return self._to_detail(aluno, turmas)

    # =========================================================================
    # Private helpers
    # =========================================================================

    async def _get_aluno(self, aluno_id: int) -> Aluno:
        """Get aluno by id or raise AlunoNotFoundError."""
        aluno = await self.db.get(Aluno, aluno_id)
        if aluno is None:
            raise AlunoNotFoundError("Aluno não encontrado.")
        return aluno

    async def _resolve_turmas(self, refs: list[TurmaRef]) -> list[Turma]:
        """Resolve turma references in order, failing on the first miss."""
        turmas: dict[int, Turma] = {}
        for ref in refs:
            turma = await resolve_turma(self.db, ref.idioma, ref.numero)
            turmas.setdefault(turma.id, turma)
        return list(turmas.values())

    async def _count_matriculas(self, aluno_id: int) -> int:
        stmt = select(func.count()).select_from(Matricula).where(Matricula.aluno_id == aluno_id)
        return (await self.db.execute(stmt)).scalar_one()

    async def _ensure_unique_email(self, email: str, exclude_id: int | None = None) -> None:
        stmt = select(Aluno.id).where(Aluno.email == email)
        if exclude_id is not None:
            stmt = stmt.where(Aluno.id != exclude_id)
        if (await self.db.execute(stmt)).first() is not None:
            raise EmailAlreadyExistsError("E-mail já cadastrado.")

    async def _ensure_unique_cpf(self, cpf: str, exclude_id: int | None = None) -> None:
        stmt = select(Aluno.id).where(Aluno.cpf == cpf)
        if exclude_id is not None:
            stmt = stmt.where(Aluno.id != exclude_id)
        if (await self.db.execute(stmt)).first() is not None:
            raise CpfAlreadyExistsError("CPF já cadastrado.")

    def _to_detail(self, aluno: Aluno, turmas: list[Turma]) -> AlunoDetail:
        """Convert aluno and its turmas to the detail response."""
        ordered = sorted(turmas, key=lambda t: (t.idioma, t.numero))
        return AlunoDetail(
            id=aluno.id,
            nome=aluno.nome,
            email=aluno.email,
            cpf=aluno.cpf,
            idade=aluno.idade,
            turmas=[TurmaSummary.model_validate(t) for t in ordered],
        )
