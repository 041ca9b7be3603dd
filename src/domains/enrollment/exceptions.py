# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions raised by the aluno and turma services.

Two families are exposed to callers: NotFoundError when a referenced
aluno or turma does not exist, and InvalidOperationError when a request
would break a business rule. Messages are user-facing.
"""


class EnrollmentServiceError(Exception):
    """Base exception for enrollment service errors."""

    pass


class NotFoundError(EnrollmentServiceError):
    """Raised when a referenced entity does not exist."""

    pass


class AlunoNotFoundError(NotFoundError):
    """Raised when aluno is not found."""

    pass


class TurmaNotFoundError(NotFoundError):
    """Raised when turma is not found by id or by (idioma, numero)."""

    pass


class InvalidOperationError(EnrollmentServiceError):
    """Raised when an operation would violate a business rule."""

    pass


class EmailAlreadyExistsError(InvalidOperationError):
    """Raised when the e-mail belongs to another aluno."""

    pass


class CpfAlreadyExistsError(InvalidOperationError):
    """Raised when the CPF belongs to another aluno."""

    pass


class TurmaAlreadyExistsError(InvalidOperationError):
    """Raised when another turma already has the same (idioma, numero)."""

    pass


class TurmaFullError(InvalidOperationError):
    """Raised when turma has reached its capacity."""

    pass


class AlreadyEnrolledError(InvalidOperationError):
    """Raised when aluno is already enrolled in turma."""

    pass


class NotEnrolledError(InvalidOperationError):
    """Raised when aluno is not enrolled in turma."""

    pass


class MinimumEnrollmentError(InvalidOperationError):
    """Raised when aluno would be left without any turma."""

    pass


class StillEnrolledError(InvalidOperationError):
    """Raised when deleting an aluno that still has matriculas."""

    pass


class TurmaHasAlunosError(InvalidOperationError):
    """Raised when deleting a turma that still has matriculas."""

    pass
