# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Aluno management API endpoints.

This module provides endpoints for aluno (student) management:
- GET / - List alunos
- GET /com-turmas - List alunos with their turmas
- GET /{aluno_id} - Get aluno details
- POST / - Create an aluno with its turmas
- PUT /{aluno_id} - Update aluno and its turmas
- DELETE /{aluno_id} - Delete aluno

Matricula endpoints:
- POST /{aluno_id}/matriculas - Enroll aluno in a turma
- DELETE /{aluno_id}/matriculas - Remove aluno from a turma
"""

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db
from src.domains.aluno.service import AlunoService
from src.domains.enrollment.exceptions import (
    InvalidOperationError,
    NotFoundError,
)
from src.models.aluno import (
    AlunoCreateRequest,
    AlunoDetail,
    AlunoListItem,
    AlunoUpdateRequest,
    MatriculaRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_service(db: AsyncSession) -> AlunoService:
    """Get aluno service instance.

    Args:
        db: Database session.

    Returns:
        Configured AlunoService instance.
    """
    return AlunoService(db=db)


@router.get(
    "",
    response_model=list[AlunoListItem],
    summary="List alunos",
    description="List alunos ordered by name.",
)
async def list_alunos(
    db: AsyncSession = Depends(get_db),
) -> list[AlunoListItem]:
    """List alunos."""
    return await _get_service(db).list_alunos()


@router.get(
    "/com-turmas",
    response_model=list[AlunoDetail],
    summary="List alunos with turmas",
    description="List alunos ordered by name, each with its turmas.",
)
async def list_alunos_com_turmas(
    db: AsyncSession = Depends(get_db),
) -> list[AlunoDetail]:
    """List alunos with their turmas."""
    return await _get_service(db).list_alunos_com_turmas()


@router.get(
    "/{aluno_id}",
    response_model=AlunoDetail,
    summary="Get aluno",
    description="Get aluno details with turmas sorted by idioma and numero.",
)
async def get_aluno(
    aluno_id: int,
    db: AsyncSession = Depends(get_db),
) -> AlunoDetail:
    """Get aluno details.

    Raises:
        HTTPException: 404 if aluno not found.
    """
    try:
        return await _get_service(db).get_aluno(aluno_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.post(
    "",
    response_model=AlunoDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create aluno",
    description="Create an aluno enrolled in at least one turma.",
)
async def create_aluno(
    data: AlunoCreateRequest,
    db: AsyncSession = Depends(get_db),
) -> AlunoDetail:
    """Create a new aluno.

    Args:
        data: Aluno data and turma references.
        db: Database session.

    Returns:
        Created aluno.

    Raises:
        HTTPException: 404 if a turma is not found, 400 if a rule is violated.
    """
    try:
        return await _get_service(db).create_aluno(data)
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


@router.put(
    "/{aluno_id}",
    response_model=AlunoDetail,
    summary="Update aluno",
    description="Update aluno data; turmas is the full desired set of turmas.",
)
async def update_aluno(
    aluno_id: int,
    data: AlunoUpdateRequest,
    db: AsyncSession = Depends(get_db),
) -> AlunoDetail:
    """Update an aluno.

    Args:
        aluno_id: Aluno identifier.
        data: New aluno data.
        db: Database session.

    Returns:
        Updated aluno.

    Raises:
        HTTPException: 404 if aluno or a turma is not found, 400 if a rule is violated.
    """
    try:
        return await _get_service(db).update_aluno(aluno_id, data)
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
    "/{aluno_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete aluno",
    description="Delete an aluno that is not enrolled in any turma.",
)
async def delete_aluno(
    aluno_id: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Delete an aluno.

    Raises:
        HTTPException: 404 if aluno not found, 400 if still enrolled.
    """
    try:
        await _get_service(db).delete_aluno(aluno_id)
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


# =========================================================================
# Matricula Endpoints
# =========================================================================


@router.post(
    "/{aluno_id}/matriculas",
    response_model=AlunoDetail,
    summary="Enroll aluno",
    description="Enroll an aluno in the turma identified by idioma and numero.",
)
async def matricular(
    aluno_id: int,
    data: MatriculaRequest,
    db: AsyncSession = Depends(get_db),
) -> AlunoDetail:
    """Enroll an aluno in a turma.

    Raises:
        HTTPException: 404 if aluno or turma not found, 400 if already
            enrolled or the turma is full.
    """
    try:
        return await _get_service(db).matricular(aluno_id, data)
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
    "/{aluno_id}/matriculas",
    response_model=AlunoDetail,
    summary="Unenroll aluno",
    description="Remove an aluno from a turma. The aluno must keep at least one turma.",
)
async def desmatricular(
    aluno_id: int,
    data: MatriculaRequest = Body(...),
    db: AsyncSession = Depends(get_db),
) -> AlunoDetail:
    """Remove an aluno from a turma.

    Raises:
        HTTPException: 404 if aluno or turma not found, 400 if not enrolled
            or it is the aluno's only turma.
    """
    try:
        return await _get_service(db).desmatricular(aluno_id, data)
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
