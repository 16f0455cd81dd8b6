"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


family_category_enum = postgresql.ENUM(
    "Orphans",
    "Widows",
    "Elderly",
    "Disabled",
    "LowIncome",
    "Other",
    name="familycategoryenum",
    create_type=False,
)
gender_enum = postgresql.ENUM("Male", "Female", name="genderenum", create_type=False)
marital_status_enum = postgresql.ENUM(
    "Single",
    "Married",
    "Divorced",
    "Widowed",
    name="maritalstatusenum",
    create_type=False,
)


def upgrade() -> None:
    bind = op.get_bind()
    family_category_enum.create(bind, checkfirst=True)
    gender_enum.create(bind, checkfirst=True)
    marital_status_enum.create(bind, checkfirst=True)

    op.create_table(
        "families",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("house_condition", sa.Text(), nullable=False, server_default=""),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("family_category", family_category_enum, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "family_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("FamilyId", sa.Integer(), sa.ForeignKey("families.id", ondelete="CASCADE"), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=False),
        sa.Column("last_name", sa.String(length=255), nullable=False),
        sa.Column("gender", gender_enum, nullable=False, server_default="Male"),
        sa.Column("marital_status", marital_status_enum, nullable=False, server_default="Single"),
        sa.Column("address", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column("phone_number", sa.String(length=15), nullable=False),
        sa.Column("is_working", sa.Boolean(), nullable=False),
        sa.Column("is_person_charge", sa.Boolean(), nullable=True),
        sa.Column("proficient", sa.String(length=255), nullable=False),
        sa.Column("total_income", sa.Float(), nullable=False, server_default="0"),
        sa.Column("education_level", sa.String(length=255), nullable=False),
        sa.CheckConstraint("total_income >= 0", name="ck_member_total_income"),
    )
    op.create_index("ix_family_members_family", "family_members", ["FamilyId"], unique=False)

    op.create_table(
        "member_needs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("FamilyId", sa.Integer(), sa.ForeignKey("families.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "familyMemberId",
            sa.Integer(),
            sa.ForeignKey("family_members.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("need_name", sa.String(length=255), nullable=False),
        sa.Column("MemberPriority", sa.Integer(), nullable=False, server_default="0"),
        sa.CheckConstraint('"MemberPriority" >= 0', name="ck_member_needs_priority"),
    )
    op.create_index(
        "ix_member_needs_family_member",
        "member_needs",
        ["FamilyId", "familyMemberId"],
        unique=False,
    )

    op.create_table(
        "health_history",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "familyMemberId",
            sa.Integer(),
            sa.ForeignKey("family_members.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("condition_name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("diagnosed_on", sa.Date(), nullable=True),
        sa.Column("is_chronic", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )
    op.create_index("ix_health_history_member", "health_history", ["familyMemberId"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_health_history_member", table_name="health_history")
    op.drop_table("health_history")
    op.drop_index("ix_member_needs_family_member", table_name="member_needs")
    op.drop_table("member_needs")
    op.drop_index("ix_family_members_family", table_name="family_members")
    op.drop_table("family_members")
    op.drop_table("families")

    bind = op.get_bind()
    marital_status_enum.drop(bind, checkfirst=True)
    gender_enum.drop(bind, checkfirst=True)
    family_category_enum.drop(bind, checkfirst=True)
