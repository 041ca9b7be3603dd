# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course enrollment models: alunos, turmas and matriculas.

Matricula is the association model between Aluno and Turma. It references
both parents by foreign key and owns the only relationships (many-to-one);
parents keep no back-reference collections, so enrollment state is always
read from the matriculas table.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from src.infrastructure.database.models.base import Base
from src.utils.datetime import utc_now

NOME_MAX_LENGTH = 150
EMAIL_MAX_LENGTH = 200
CPF_LENGTH = 11
IDIOMA_MAX_LENGTH = 50
# Case folding can expand a character to up to three
IDIOMA_KEY_MAX_LENGTH = IDIOMA_MAX_LENGTH * 3
ANO_LETIVO_MAX_LENGTH = 16


def normalize_idioma(idioma: str) -> str:
    """Comparison key for idioma: trimmed and Unicode case-folded.

    "Inglês", " INGLÊS " and "inglês" share the key "inglês".
    """
    return idioma.strip().casefold()


class Aluno(Base):
    """Student."""

    __tablename__ = "alunos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(NOME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH), nullable=False, unique=True)
    cpf: Mapped[str] = mapped_column(String(CPF_LENGTH), nullable=False, unique=True)
    idade: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Aluno(id={self.id}, nome={self.nome!r})>"


class Turma(Base):
    """Language class, identified by (idioma, numero).

    idioma keeps the spelling given by the user; idioma_key holds
    normalize_idioma(idioma) and backs lookups and the identity constraint.
    """

    __tablename__ = "turmas"
    __table_args__ = (
        UniqueConstraint("numero", "idioma_key", name="uq_turmas_numero_idioma_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    numero: Mapped[int] = mapped_column(Integer, nullable=False)
    idioma: Mapped[str] = mapped_column(String(IDIOMA_MAX_LENGTH), nullable=False)
    idioma_key: Mapped[str] = mapped_column(String(IDIOMA_KEY_MAX_LENGTH), nullable=False)
    ano_letivo: Mapped[str] = mapped_column(String(ANO_LETIVO_MAX_LENGTH), nullable=False)

    @validates("idioma")
    def _sync_idioma_key(self, key: str, value: str) -> str:
        self.idioma_key = normalize_idioma(value)
        return value

    def __repr__(self) -> str:
        return f"<Turma(id={self.id}, idioma={self.idioma!r}, numero={self.numero})>"


class Matricula(Base):
    """Enrollment of one aluno in one turma."""

    __tablename__ = "matriculas"

    aluno_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("alunos.id", ondelete="RESTRICT"),
        primary_key=True,
    )
    turma_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("turmas.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    )
    data_matricula: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    aluno: Mapped[Aluno] = relationship(Aluno, lazy="raise")
    turma: Mapped[Turma] = relationship(Turma, lazy="raise")

    def __repr__(self) -> str:
        return f"<Matricula(aluno_id={self.aluno_id}, turma_id={self.turma_id})>"
