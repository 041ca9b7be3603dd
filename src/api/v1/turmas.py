# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Turma management API endpoints.

This module provides endpoints for turma (language class) management:
- GET / - List turmas with remaining seats
- GET /idioma/{idioma} - List turmas of an idioma
- GET /{turma_id} - Get turma details
- GET /{idioma}/{numero} - Get turma by identity
- GET /{idioma}/{numero}/alunos - List alunos of a turma
- POST / - Create a turma
- PUT /{turma_id} - Update turma
- DELETE /{turma_id} - Delete turma
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db
from src.domains.enrollment.exceptions import (
    InvalidOperationError,
    NotFoundError,
)
from src.domains.turma.service import TurmaService
from src.models.aluno import AlunoTurmaItem
from src.models.turma import (
    TurmaCreateRequest,
    TurmaResponse,
    TurmaUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_service(db: AsyncSession) -> TurmaService:
    """Get turma service instance.

    Args:
        db: Database session.

    Returns:
        Configured TurmaService instance.
    """
    return TurmaService(db=db)


@router.get(
    "",
    response_model=list[TurmaResponse],
    summary="List turmas",
    description="List turmas ordered by idioma and numero, with remaining seats.",
)
async def list_turmas(
    db: AsyncSession = Depends(get_db),
) -> list[TurmaResponse]:
    """List turmas."""
    return await _get_service(db).list_turmas()


@router.get(
    "/idioma/{idioma}",
    response_model=list[TurmaResponse],
    summary="List turmas of an idioma",
    description="List turmas of an idioma (case-insensitive) ordered by numero.",
)
async def list_turmas_by_idioma(
    idioma: str,
    db: AsyncSession = Depends(get_db),
) -> list[TurmaResponse]:
    """List turmas of an idioma."""
    return await _get_service(db).list_turmas_by_idioma(idioma)


@router.get(
    "/{turma_id}",
    response_model=TurmaResponse,
    summary="Get turma",
    description="Get turma details with remaining seats.",
)
async def get_turma(
    turma_id: int,
    db: AsyncSession = Depends(get_db),
) -> TurmaResponse:
    """Get turma details.

    Raises:
        HTTPException: 404 if turma not found.
    """
    try:
        return await _get_service(db).get_turma(turma_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.get(
    "/{idioma}/{numero}",
    response_model=TurmaResponse,
    summary="Get turma by identity",
    description="Get turma by idioma (case-insensitive) and numero.",
)
async def get_turma_by_identity(
    idioma: str,
    numero: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
) -> TurmaResponse:
    """Get turma by (idioma, numero).

    Raises:
        HTTPException: 404 if turma not found.
    """
    try:
        return await _get_service(db).get_turma_by_identity(idioma, numero)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.get(
    "/{idioma}/{numero}/alunos",
    response_model=list[AlunoTurmaItem],
    summary="List alunos of a turma",
    description="List alunos enrolled in the turma, ordered by name.",
)
async def list_alunos_da_turma(
    idioma: str,
    numero: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
) -> list[AlunoTurmaItem]:
    """List alunos of a turma.

    Raises:
        HTTPException: 404 if turma not found.
    """
    try:
        return await _get_service(db).list_alunos_da_turma(idioma, numero)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.post(
    "",
    response_model=TurmaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create turma",
    description="Create a turma. (idioma, numero) must be unique.",
)
async def create_turma(
    data: TurmaCreateRequest,
    db: AsyncSession = Depends(get_db),
) -> TurmaResponse:
    """Create a new turma.

    Args:
        data: Turma data.
        db: Database session.

    Returns:
        Created turma.

    Raises:
        HTTPException: 400 if the turma already exists.
    """
    try:
        return await _get_service(db).create_turma(data)
    except InvalidOperationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.put(
    "/{turma_id}",
    response_model=TurmaResponse,
    summary="Update turma",
    description="Update turma data.",
)
async def update_turma(
    turma_id: int,
    data: TurmaUpdateRequest,
    db: AsyncSession = Depends(get_db),
) -> TurmaResponse:
    """Update a turma.

    Args:
        turma_id: Turma identifier.
        data: New turma data.
        db: Database session.

    Returns:
        Updated turma.

    Raises:
        HTTPException: 404 if turma not found, 400 if the new identity is taken.
    """
    try:
        return await _get_service(db).update_turma(turma_id, data)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except InvalidOperationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.delete(
    "/{turma_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete turma",
    description="Delete a turma without alunos.",
)
async def delete_turma(
    turma_id: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Delete a turma.

    Raises:
        HTTPException: 404 if turma not found, 400 if it has alunos.
    """
    try:
        await _get_service(db).delete_turma(turma_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except InvalidOperationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
