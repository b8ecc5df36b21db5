"""Create users, todos, tags, and todo_tags tables.

Revision ID: 7b2e4c9a1d30
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "7b2e4c9a1d30"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    # --- users table ---
    if not inspector.has_table("users"):
        op.create_table(
            "users",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("email", sa.String(), nullable=True),
            sa.Column("name", sa.String(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_users_email"), "users", ["email"])

    # --- todos table ---
    if not inspector.has_table("todos"):
        op.create_table(
            "todos",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("title", sa.String(length=255), nullable=False),
            sa.Column("description", sa.String(), nullable=True),
            sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("priority", sa.String(), nullable=False, server_default="medium"),
            sa.Column("due_date", sa.DateTime(), nullable=True),
            sa.Column("user_id", sa.String(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_todos_user_id"), "todos", ["user_id"])
        op.create_index(op.f("ix_todos_completed"), "todos", ["completed"])
        op.create_index(op.f("ix_todos_priority"), "todos", ["priority"])
        op.create_index(op.f("ix_todos_due_date"), "todos", ["due_date"])

    # --- tags table ---
    if not inspector.has_table("tags"):
        op.create_table(
            "tags",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("name", sa.String(length=50), nullable=False),
            sa.Column("color", sa.String(length=7), nullable=False, server_default="#3B82F6"),
            sa.Column("user_id", sa.String(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_tags_user_id"), "tags", ["user_id"])

    # --- todo_tags association table ---
    if not inspector.has_table("todo_tags"):
        op.create_table(
            "todo_tags",
            sa.Column("todo_id", sa.String(), nullable=False),
            sa.Column("tag_id", sa.String(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["todo_id"], ["todos.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("todo_id", "tag_id"),
        )
        op.create_index(op.f("ix_todo_tags_tag_id"), "todo_tags", ["tag_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_todo_tags_tag_id"), table_name="todo_tags")
    op.drop_table("todo_tags")
    op.drop_index(op.f("ix_tags_user_id"), table_name="tags")
    op.drop_table("tags")
    op.drop_index(op.f("ix_todos_due_date"), table_name="todos")
    op.drop_index(op.f("ix_todos_priority"), table_name="todos")
    op.drop_index(op.f("ix_todos_completed"), table_name="todos")
    op.drop_index(op.f("ix_todos_user_id"), table_name="todos")
    op.drop_table("todos")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
