# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Aluno domain package.

This package provides aluno (student) management including:
- Aluno CRUD operations
- Matricular / desmatricular in turmas
"""

from src.domains.aluno.service import AlunoService

__all__ = [
    "AlunoService",
]
