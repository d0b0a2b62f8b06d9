"""Initial schema - document, document_version, document_branch, document_tag.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "document",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(255), nullable=True),
    )

    op.create_table(
        "document_version",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "document_id",
            sa.String(255),
            sa.ForeignKey("document.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("parent_ids", postgresql.ARRAY(sa.UUID()), nullable=False),
        sa.Column("branch", sa.String(255), nullable=False),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("author", sa.String(255), nullable=False),
        sa.Column("author_id", sa.String(255), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("content_hash", sa.String(64), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.Column("insertions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("deletions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("unchanged", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("delta", postgresql.JSONB(), nullable=True),
        sa.Column("chain_depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reverted_from", sa.UUID(), nullable=True),
        sa.Column("merged_branch", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("document_id", "number", name="uq_document_version_number"),
        sa.CheckConstraint(
            "content IS NOT NULL OR delta IS NOT NULL", name="ck_document_version_payload"
        ),
    )
    op.create_index("ix_document_version_document_id", "document_version", ["document_id"])

    op.create_table(
        "document_branch",
        sa.Column(
            "document_id",
            sa.String(255),
            sa.ForeignKey("document.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("name", sa.String(255), primary_key=True),
        sa.Column(
            "head_version_id",
            sa.UUID(),
            sa.ForeignKey("document_version.id"),
            nullable=False,
        ),
        sa.Column(
            "created_from_version_id",
            sa.UUID(),
            sa.ForeignKey("document_version.id"),
            nullable=False,
        ),
        sa.Column("protected", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "document_tag",
        sa.Column(
            "document_id",
            sa.String(255),
            sa.ForeignKey("document.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("name", sa.String(255), primary_key=True),
        sa.Column(
            "version_id",
            sa.UUID(),
            sa.ForeignKey("document_version.id"),
            nullable=False,
        ),
        sa.Column("version_number", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("message", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("document_tag")
    op.drop_table("document_branch")
    op.drop_index("ix_document_version_document_id", table_name="document_version")
    op.drop_table("document_version")
    op.drop_table("document")
