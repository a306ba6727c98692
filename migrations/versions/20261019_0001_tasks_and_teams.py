# migrations/versions/20261019_0001_tasks_and_teams.py
"""Create the teams and tasks tables."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from taskmanager_api.infrastructure.database.models.base import DEFAULT_DB_SCHEMA

# Revision identifiers, used by Alembic.
revision = "20261019_0001_tasks_and_teams"
down_revision = None
branch_labels = None
depends_on = None


def _audit_columns() -> list[sa.Column[object]]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    schema = DEFAULT_DB_SCHEMA
    if schema:
        op.execute(sa.text(f'CREATE SCHEMA IF NOT EXISTS "{schema}"'))

    op.create_table(
        "teams",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column("uuid", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id", name="pk_teams"),
        sa.UniqueConstraint("uuid", name="uq_teams_uuid"),
        schema=schema,
    )

    op.create_table(
        "tasks",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column("uuid", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="to_do"),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("team_id", sa.BigInteger(), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id", name="pk_tasks"),
        sa.UniqueConstraint("uuid", name="uq_tasks_uuid"),
        sa.ForeignKeyConstraint(
            ["team_id"],
            [f"{schema}.teams.id" if schema else "teams.id"],
            name="fk_tasks_team_id_teams",
            ondelete="SET NULL",
        ),
        schema=schema,
    )
    op.create_index(
        "ix_tasks_status_created_at", "tasks", ["status", "created_at"], schema=schema
    )
    op.create_index("ix_tasks_team_id", "tasks", ["team_id"], schema=schema)


def downgrade() -> None:
    schema = DEFAULT_DB_SCHEMA
    op.drop_index("ix_tasks_team_id", table_name="tasks", schema=schema)
    op.drop_index("ix_tasks_status_created_at", table_name="tasks", schema=schema)
    op.drop_table("tasks", schema=schema)
    op.drop_table("teams", schema=schema)
