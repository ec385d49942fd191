"""Advocates schema — advocates and their ordered specialty rows.

Revision ID: 001_advocates
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_advocates"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "advocates",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("degree", sa.String(20), nullable=False),
        sa.Column("years_of_experience", sa.Integer, nullable=False, server_default="0"),
        sa.Column("phone_number", sa.BigInteger, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_advocates_last_name", "advocates", ["last_name"])
    op.create_index("ix_advocates_city", "advocates", ["city"])

    op.create_table(
        "advocate_specialties",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "advocate_id", sa.Integer,
            sa.ForeignKey("advocates.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
    )
    op.create_index(
        "ix_advocate_specialties_advocate_id",
        "advocate_specialties", ["advocate_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_advocate_specialties_advocate_id", table_name="advocate_specialties")
    op.drop_table("advocate_specialties")
    op.drop_index("ix_advocates_city", table_name="advocates")
    op.drop_index("ix_advocates_last_name", table_name="advocates")
    op.drop_table("advocates")
