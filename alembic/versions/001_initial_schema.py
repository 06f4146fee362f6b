"""Initial schema - note and note_chunk.

Embeddings, tags and entities are stored as JSON text.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "note",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False, server_default=""),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("embedding", sa.Text(), nullable=True),
        sa.Column("tags", sa.Text(), nullable=True),
        sa.Column("entities", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_note_created_at", "note", ["created_at"])

    op.create_table(
        "note_chunk",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "note_id",
            sa.UUID(),
            sa.ForeignKey("note.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("ord", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("embedding", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_note_chunk_note_id_ord", "note_chunk", ["note_id", "ord"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_note_chunk_note_id_ord", table_name="note_chunk")
    op.drop_table("note_chunk")
    op.drop_index("ix_note_created_at", table_name="note")
    op.drop_table("note")
