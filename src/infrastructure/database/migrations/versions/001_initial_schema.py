# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial schema: alunos, turmas and matriculas.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2025-01-15
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create alunos, turmas and matriculas tables."""
    # =========================================================================
    # ALUNOS
    # =========================================================================
    op.create_table(
        "alunos",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("nome", sa.String(150), nullable=False),
        sa.Column("email", sa.String(200), nullable=False),
        sa.Column("cpf", sa.String(11), nullable=False),
        sa.Column("idade", sa.Integer, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_alunos"),
        sa.UniqueConstraint("email", name="uq_alunos_email"),
        sa.UniqueConstraint("cpf", name="uq_alunos_cpf"),
    )

    # =========================================================================
    # TURMAS
    # =========================================================================
    op.create_table(
        "turmas",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("numero", sa.Integer, nullable=False),
        sa.Column("idioma", sa.String(50), nullable=False),
        sa.Column("idioma_key", sa.String(150), nullable=False),
        sa.Column("ano_letivo", sa.String(16), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_turmas"),
        sa.UniqueConstraint("numero", "idioma_key", name="uq_turmas_numero_idioma_key"),
    )

    # =========================================================================
    # MATRICULAS (composite key, restrict on delete of either parent)
    # =========================================================================
    op.create_table(
        "matriculas",
        sa.Column("aluno_id", sa.Integer, nullable=False),
        sa.Column("turma_id", sa.Integer, nullable=False),
        sa.Column("data_matricula", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("aluno_id", "turma_id", name="pk_matriculas"),
        sa.ForeignKeyConstraint(
            ["aluno_id"],
            ["alunos.id"],
            name="fk_matriculas_aluno_id_alunos",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["turma_id"],
            ["turmas.id"],
            name="fk_matriculas_turma_id_turmas",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("ix_matriculas_turma_id", "matriculas", ["turma_id"])


def downgrade() -> None:
    """Drop alunos, turmas and matriculas tables."""
    op.drop_index("ix_matriculas_turma_id", table_name="matriculas")
    op.drop_table("matriculas")
    op.drop_table("turmas")
    op.drop_table("alunos")
