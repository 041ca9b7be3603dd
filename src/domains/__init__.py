# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer.

This package contains the services that encapsulate business logic.
Each service receives an AsyncSession and commits once per operation.

Domains:
    aluno: Aluno CRUD and matricula management.
    turma: Turma CRUD, lookups and remaining seats.
    enrollment: Capacity rules and the shared exception hierarchy.
"""
