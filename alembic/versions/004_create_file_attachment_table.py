"""Create file attachment table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "004"
down_revision: str | None = "003"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "file_attachment",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("filename", sa.String(length=256), nullable=False),
        sa.Column("file_type", sa.String(length=128), nullable=True),
        sa.Column("upload_date", sa.DateTime(), nullable=False),
        sa.Column("hoax_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["hoax_id"], ["hoax.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("filename"),
    )
    op.create_index(op.f("ix_file_attachment_upload_date"), "file_attachment", ["upload_date"], unique=False)
    op.create_index(op.f("ix_file_attachment_hoax_id"), "file_attachment", ["hoax_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_file_attachment_hoax_id"), table_name="file_attachment")
    op.drop_index(op.f("ix_file_attachment_upload_date"), table_name="file_attachment")
    op.drop_table("file_attachment")
