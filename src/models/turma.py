# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Turma request and response models."""

import re

from pydantic import Field, field_validator

from src.infrastructure.database.models.courses import (
    ANO_LETIVO_MAX_LENGTH,
    IDIOMA_MAX_LENGTH,
    normalize_idioma,
)
from src.models.common import CamelModel, require_text

ANO_LETIVO_PATTERN = re.compile(r"^\d{4}/[12]$")


class TurmaRef(CamelModel):
    """Reference to a turma by its identity (idioma, numero)."""

    idioma: str = Field(
        ..., max_length=IDIOMA_MAX_LENGTH, description="Idioma da turma (case-insensitive)"
    )
    numero: int = Field(..., gt=0, description="Número da turma")

    @field_validator("idioma")
    @classmethod
    def _idioma_required(cls, v: str) -> str:
        return require_text(v, "Idioma é obrigatório.")

    def key(self) -> tuple[str, int]:
        """Identity key used to detect repeated references."""
        return normalize_idioma(self.idioma), self.numero


class TurmaWriteRequest(CamelModel):
    """Fields accepted when creating or updating a turma."""

    numero: int = Field(..., gt=0, description="Número da turma")
    idioma: str = Field(..., max_length=IDIOMA_MAX_LENGTH, description="Idioma ensinado")
    ano_letivo: str = Field(
        ..., max_length=ANO_LETIVO_MAX_LENGTH, description="Ano letivo no formato YYYY/1 ou YYYY/2"
    )

    @field_validator("idioma")
    @classmethod
    def _idioma_required(cls, v: str) -> str:
        return require_text(v, "Idioma é obrigatório.")

    @field_validator("ano_letivo")
    @classmethod
    def _ano_letivo_format(cls, v: str) -> str:
        require_text(v, "Ano letivo é obrigatório.")
        if not ANO_LETIVO_PATTERN.match(v.strip()):
            raise ValueError("Ano letivo inválido. Use formato 'YYYY/1' ou 'YYYY/2'.")
        return v


class TurmaCreateRequest(TurmaWriteRequest):
    """Request to create a turma."""


class TurmaUpdateRequest(TurmaWriteRequest):
    """Request to update a turma."""


class TurmaSummary(CamelModel):
    """Turma as listed inside an aluno detail."""

    id: int
    idioma: str
    numero: int
    ano_letivo: str


class TurmaResponse(CamelModel):
    """Turma with its remaining seats."""

    id: int
    numero: int
    idioma: str
    ano_letivo: str
    vagas_restantes: int = Field(description="Vagas restantes (5 - matrículas)")
