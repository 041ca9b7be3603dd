# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Turma domain package.

This package provides turma (language class) management including:
- Turma CRUD operations
- Lookup by (idioma, numero)
- Remaining seats tracking
"""

from src.domains.turma.service import TurmaService

__all__ = [
    "TurmaService",
]
