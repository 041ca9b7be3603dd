# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    alunos: Aluno management and matricula endpoints.
    turmas: Turma management endpoints.
"""

from fastapi import APIRouter

from src.api.v1 import alunos, turmas

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(alunos.router, prefix="/alunos", tags=["Alunos"])
router.include_router(turmas.router, prefix="/turmas", tags=["Turmas"])

__all__ = ["router"]
