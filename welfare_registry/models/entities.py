from datetime import date, datetime, timezone
from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum as SqlEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from welfare_registry.models.base import Base


class FamilyCategoryEnum(str, Enum):
    orphans = "Orphans"
    widows = "Widows"
    elderly = "Elderly"
    disabled = "Disabled"
    low_income = "LowIncome"
    other = "Other"


class GenderEnum(str, Enum):
    male = "Male"
    female = "Female"


class MaritalStatusEnum(str, Enum):
    single = "Single"
    married = "Married"
    divorced = "Divorced"
    widowed = "Widowed"


def _values(enum_cls):
    return [item.value for item in enum_cls]


family_category_sql_enum = SqlEnum(FamilyCategoryEnum, name="familycategoryenum", values_callable=_values)
gender_sql_enum = SqlEnum(GenderEnum, name="genderenum", values_callable=_values)
marital_status_sql_enum = SqlEnum(MaritalStatusEnum, name="maritalstatusenum", values_callable=_values)


class Family(Base):
    __tablename__ = "families"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    house_condition: Mapped[str] = mapped_column(Text, nullable=False, default="")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    family_category: Mapped[FamilyCategoryEnum] = mapped_column(family_category_sql_enum, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(timezone.utc))

    members: Mapped[list["FamilyMember"]] = relationship(
        back_populates="family",
        order_by="FamilyMember.id",
        passive_deletes=True,
    )


class FamilyMember(Base):
    __tablename__ = "family_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    family_id: Mapped[int] = mapped_column("FamilyId", ForeignKey("families.id", ondelete="CASCADE"), nullable=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[GenderEnum] = mapped_column(gender_sql_enum, nullable=False, default=GenderEnum.male)
    marital_status: Mapped[MaritalStatusEnum] = mapped_column(
        marital_status_sql_enum, nullable=False, default=MaritalStatusEnum.single
    )
    address: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    phone_number: Mapped[str] = mapped_column(String(15), nullable=False)
    is_working: Mapped[bool] = mapped_column(Boolean, nullable=False)
    is_person_charge: Mapped[bool | None] = mapped_column(Boolean)
    proficient: Mapped[str] = mapped_column(String(255), nullable=False)
    total_income: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    education_level: Mapped[str] = mapped_column(String(255), nullable=False)

    family: Mapped[Family] = relationship(back_populates="members")
    needs: Mapped[list["MemberNeeds"]] = relationship(
        back_populates="member",
        order_by="MemberNeeds.id",
        passive_deletes=True,
    )
    health_history: Mapped[list["HealthHistory"]] = relationship(
        back_populates="member",
        order_by="HealthHistory.id",
        passive_deletes=True,
    )

    __table_args__ = (CheckConstraint("total_income >= 0", name="ck_member_total_income"),)


class MemberNeeds(Base):
    __tablename__ = "member_needs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # Denormalized: both keys must match for a need to be addressable.
    family_id: Mapped[int] = mapped_column("FamilyId", ForeignKey("families.id", ondelete="CASCADE"), nullable=False)
    family_member_id: Mapped[int] = mapped_column(
        "familyMemberId", ForeignKey("family_members.id", ondelete="CASCADE"), nullable=False
    )
    need_name: Mapped[str] = mapped_column(String(255), nullable=False)
    member_priority: Mapped[int] = mapped_column("MemberPriority", Integer, nullable=False, default=0)

    member: Mapped[FamilyMember] = relationship(back_populates="needs")

    __table_args__ = (CheckConstraint('"MemberPriority" >= 0', name="ck_member_needs_priority"),)


class HealthHistory(Base):
    __tablename__ = "health_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    family_member_id: Mapped[int] = mapped_column(
        "familyMemberId", ForeignKey("family_members.id", ondelete="CASCADE"), nullable=False
    )
    condition_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    diagnosed_on: Mapped[date | None] = mapped_column(Date)
    is_chronic: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    member: Mapped[FamilyMember] = relationship(back_populates="health_history")


Index("ix_family_members_family", FamilyMember.family_id)
Index("ix_member_needs_family_member", MemberNeeds.family_id, MemberNeeds.family_member_id)
Index("ix_health_history_member", HealthHistory.family_member_id)
