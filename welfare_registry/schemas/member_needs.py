from pydantic import BaseModel, ConfigDict, Field

from welfare_registry.schemas.common import SparseUpdate


class MemberNeedCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    need_name: str = Field(min_length=1, max_length=255)
    member_priority: int = Field(default=0, ge=0)


class MemberNeedUpdate(SparseUpdate):
    need_name: str | None = Field(default=None, min_length=1, max_length=255)
    member_priority: int | None = Field(default=None, ge=0)


class MemberNeedResponse(BaseModel):
    id: int
    family_id: int
    family_member_id: int
    need_name: str
    member_priority: int


class MemberNeedListResponse(BaseModel):
    items: list[MemberNeedResponse]
    count: int
