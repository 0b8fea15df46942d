"""tutor profiles and course categories

Revision ID: 8c2d4e6f1a37
Revises: 3f1c9a2b7d10
Create Date: 2026-10-19 09:41:07.318552

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '8c2d4e6f1a37'
down_revision: Union[str, Sequence[str], None] = '3f1c9a2b7d10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "coursecategory",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_coursecategory_name", "coursecategory", ["name"], unique=True)

    op.add_column("course", sa.Column("category_id", sa.Integer(), nullable=True))
    op.create_foreign_key(
        "fk_course_category_id", "course", "coursecategory", ["category_id"], ["id"]
    )
    op.create_index("ix_course_category_id", "course", ["category_id"])

    op.add_column("tutor", sa.Column("specialties", sa.JSON(), nullable=True))
    op.add_column("tutor", sa.Column("availability", sa.String(), nullable=True))
    op.add_column("tutor", sa.Column("session_duration", sa.String(), nullable=True))
    op.add_column("tutor", sa.Column("language", sa.String(), nullable=True))
    op.add_column("tutor", sa.Column("timezone", sa.String(), nullable=True))


def downgrade() -> None:
    op.drop_column("tutor", "timezone")
    op.drop_column("tutor", "language")
    op.drop_column("tutor", "session_duration")
    op.drop_column("tutor", "availability")
    op.drop_column("tutor", "specialties")

    op.drop_index("ix_course_category_id", table_name="course")
    op.drop_constraint("fk_course_category_id", "course", type_="foreignkey")
    op.drop_column("course", "category_id")

    op.drop_index("ix_coursecategory_name", table_name="coursecategory")
    op.drop_table("coursecategory")
