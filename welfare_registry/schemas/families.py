from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from welfare_registry.models.entities import FamilyCategoryEnum
from welfare_registry.schemas.common import SparseUpdate
from welfare_registry.schemas.family_members import FamilyMemberCreate, FamilyMemberResponse


class FamilyCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    house_condition: str = ""
    notes: str = ""
    family_category: FamilyCategoryEnum


class FamilyWithMembersCreate(FamilyCreate):
    # Emptiness is checked by the cascade writer so it can be reported as a
    # rejection rather than a schema error.
    members: list[FamilyMemberCreate] = Field(default_factory=list)


class FamilyUpdate(SparseUpdate):
    house_condition: str | None = None
    notes: str | None = None
    family_category: FamilyCategoryEnum | None = None


class FamilyResponse(BaseModel):
    id: int
    house_condition: str
    notes: str
    family_category: FamilyCategoryEnum
    created_at: datetime


class FamilyDetailResponse(FamilyResponse):
    members: list[FamilyMemberResponse]


class FamilyListResponse(BaseModel):
    items: list[FamilyResponse]
    count: int
