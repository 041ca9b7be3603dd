# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models.

Importing this package registers every table on ``Base.metadata``.
"""

from src.infrastructure.database.models.base import Base
from src.infrastructure.database.models.courses import Aluno, Matricula, Turma, normalize_idioma

__all__ = [
    "Base",
    "Aluno",
    "Turma",
    "Matricula",
    "normalize_idioma",
]
