# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API request and response models."""

from src.models.aluno import (
    AlunoCreateRequest,
    AlunoDetail,
    AlunoListItem,
    AlunoTurmaItem,
    AlunoUpdateRequest,
    AlunoWriteRequest,
    MatriculaRequest,
)
from src.models.common import CamelModel
from src.models.turma import (
    TurmaCreateRequest,
    TurmaRef,
    TurmaResponse,
    TurmaSummary,
    TurmaUpdateRequest,
    TurmaWriteRequest,
)

__all__ = [
    "AlunoCreateRequest",
    "AlunoDetail",
    "AlunoListItem",
    "AlunoTurmaItem",
    "AlunoUpdateRequest",
    "AlunoWriteRequest",
    "CamelModel",
    "MatriculaRequest",
    "TurmaCreateRequest",
    "TurmaRef",
    "TurmaResponse",
    "TurmaSummary",
    "TurmaUpdateRequest",
    "TurmaWriteRequest",
]
