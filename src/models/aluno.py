# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Aluno request and response models.

Request models validate shape and formats only. Uniqueness of email/CPF,
class resolution and capacity are checked by the services against the
database.
"""

from pydantic import EmailStr, Field, field_validator

from src.infrastructure.database.models.courses import EMAIL_MAX_LENGTH, NOME_MAX_LENGTH
from src.models.common import CamelModel, require_text
from src.models.turma import TurmaRef, TurmaSummary
from src.utils.cpf import is_valid_cpf, normalize_cpf


class AlunoWriteRequest(CamelModel):
    """Fields accepted when creating or updating an aluno."""

    nome: str = Field(..., max_length=NOME_MAX_LENGTH, description="Nome do aluno")
    email: EmailStr = Field(..., description="E-mail único")
    cpf: str = Field(..., description="CPF com ou sem máscara")
    idade: int = Field(..., ge=0, description="Idade")
    turmas: list[TurmaRef] = Field(..., description="Turmas desejadas (idioma, número)")

    @field_validator("nome")
    @classmethod
    def _nome_required(cls, v: str) -> str:
        return require_text(v, "Nome é obrigatório.")

    @field_validator("email")
    @classmethod
    def _email_length(cls, v: str) -> str:
        if len(v) > EMAIL_MAX_LENGTH:
            raise ValueError(f"E-mail deve ter no máximo {EMAIL_MAX_LENGTH} caracteres.")
        return v

    @field_validator("cpf")
    @classmethod
    def _cpf_valid(cls, v: str) -> str:
        require_text(v, "CPF é obrigatório.")
        if not is_valid_cpf(v):
            raise ValueError("CPF inválido.")
        return v

    @field_validator("turmas")
    @classmethod
    def _turmas_unique(cls, v: list[TurmaRef]) -> list[TurmaRef]:
        if not v:
            raise ValueError("Aluno deve estar matriculado em pelo menos 1 turma.")
        keys = [ref.key() for ref in v]
        if len(keys) != len(set(keys)):
            raise ValueError("Turmas duplicadas não são permitidas.")
        return v

    @property
    def cpf_digits(self) -> str:
        """CPF with the mask removed."""
        return normalize_cpf(self.cpf)


class AlunoCreateRequest(AlunoWriteRequest):
    """Request to create an aluno with its initial turmas."""


class AlunoUpdateRequest(AlunoWriteRequest):
    """Request to update an aluno; turmas is the full desired set."""


class MatriculaRequest(TurmaRef):
    """Request to enroll an aluno in, or remove them from, one turma."""


class AlunoListItem(CamelModel):
    """Aluno without turmas."""

    id: int
    nome: str
    email: str
    cpf: str
    idade: int


class AlunoDetail(AlunoListItem):
    """Aluno with turmas sorted by (idioma, numero)."""

    turmas: list[TurmaSummary] = Field(default_factory=list)


class AlunoTurmaItem(CamelModel):
    """Aluno enrolled in a given turma."""

    aluno_id: int
    nome: str
    email: str
    cpf: str
    idade: int
