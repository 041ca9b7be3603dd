# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides the rules and errors shared by the aluno and turma
services:
- Turma capacity (CAPACIDADE_MAXIMA)
- Turma lookup by (idioma, numero)
- NotFound / InvalidOperation exception hierarchy
"""

from src.domains.enrollment.exceptions import (
    AlreadyEnrolledError,
    AlunoNotFoundError,
    CpfAlreadyExistsError,
    EmailAlreadyExistsError,
    EnrollmentServiceError,
    InvalidOperationError,
    MinimumEnrollmentError,
    NotEnrolledError,
    NotFoundError,
    StillEnrolledError,
    TurmaAlreadyExistsError,
    TurmaFullError,
    TurmaHasAlunosError,
    TurmaNotFoundError,
)
from src.domains.enrollment.rules import CAPACIDADE_MAXIMA

__all__ = [
    "CAPACIDADE_MAXIMA",
    "AlreadyEnrolledError",
    "AlunoNotFoundError",
    "CpfAlreadyExistsError",
    "EmailAlreadyExistsError",
    "EnrollmentServiceError",
    "InvalidOperationError",
    "MinimumEnrollmentError",
    "NotEnrolledError",
    "NotFoundError",
    "StillEnrolledError",
    "TurmaAlreadyExistsError",
    "TurmaFullError",
    "TurmaHasAlunosError",
    "TurmaNotFoundError",
]
