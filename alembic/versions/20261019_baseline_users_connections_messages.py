"""baseline: users, connections, connection_requests, messages

Revision ID: 20261019_baseline
Revises:
Create Date: 2026-10-19 10:00:00.000000

Описание:
- users: профиль, ключ — Firebase uid.
- connections: принятые связи, каноническая пара (user_min, user_max) уникальна.
- connection_requests: заявки, одна строка на упорядоченную пару (from_uid, to_uid).
- messages: личные сообщения.
Заявки и сообщения живут сутки: чистит src/jobs/expire_records.py.
"""

from __future__ import annotations

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "20261019_baseline"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("uid", sa.String(128), primary_key=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("photo_url", sa.String(), nullable=True),
        sa.Column("bio", sa.String(), nullable=True),
        sa.Column("branch", sa.String(), nullable=True),
        sa.Column("year", sa.String(), nullable=True),
        sa.Column("college", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("phone_number", sa.String(), nullable=True),
        sa.Column("linkedin_url", sa.String(), nullable=True),
        sa.Column("github_url", sa.String(), nullable=True),
        sa.Column("portfolio_url", sa.String(), nullable=True),
        sa.Column("profile_picture", sa.String(), nullable=True),
        sa.Column("career_goals", sa.String(), nullable=True),
        sa.Column("date_of_birth", sa.String(), nullable=True),
        sa.Column("skills", sa.JSON(), nullable=False),
        sa.Column("interests", sa.JSON(), nullable=False),
        sa.Column("resume_files", sa.JSON(), nullable=False),
        sa.Column("project_files", sa.JSON(), nullable=False),
        sa.Column("certification_files", sa.JSON(), nullable=False),
        sa.Column("is_online", sa.Boolean(), nullable=True),
        sa.Column("completed_profile", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_uid", "users", ["uid"])

    op.create_table(
        "connections",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("from_uid", sa.String(128), nullable=False),
        sa.Column("to_uid", sa.String(128), nullable=False),
        sa.Column("user_min", sa.String(128), nullable=False),
        sa.Column("user_max", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_min", "user_max", name="uq_connection_pair"),
        sa.CheckConstraint("user_min < user_max", name="ck_connection_min_lt_max"),
    )
    op.create_index("ix_connections_id", "connections", ["id"])
    op.create_index("ix_connections_from_uid", "connections", ["from_uid"])
    op.create_index("ix_connections_to_uid", "connections", ["to_uid"])

    op.create_table(
        "connection_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("from_uid", sa.String(128), nullable=False),
        sa.Column("to_uid", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("from_uid", "to_uid", name="uq_connection_request_pair"),
    )
    op.create_index("ix_connection_requests_id", "connection_requests", ["id"])
    op.create_index("ix_connection_requests_to_uid", "connection_requests", ["to_uid"])
    op.create_index("ix_connection_requests_created_at", "connection_requests", ["created_at"])

    op.create_table(
        "messages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("from_uid", sa.String(128), nullable=False),
        sa.Column("to_uid", sa.String(128), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_messages_id", "messages", ["id"])
    op.create_index("ix_messages_pair", "messages", ["from_uid", "to_uid"])
    op.create_index("ix_messages_created_at", "messages", ["created_at"])


def downgrade() -> None:
    op.drop_table("messages")
    op.drop_table("connection_requests")
    op.drop_table("connections")
    op.drop_table("users")
