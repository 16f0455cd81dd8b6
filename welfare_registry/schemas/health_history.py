from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from welfare_registry.schemas.common import SparseUpdate
from welfare_registry.schemas.family_members import CalendarDate


class HealthRecordCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    condition_name: str = Field(min_length=1, max_length=255)
    description: str = ""
    diagnosed_on: CalendarDate | None = None
    is_chronic: bool = False


class HealthRecordUpdate(SparseUpdate):
    nullable_fields = frozenset({"diagnosed_on"})

    condition_name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    diagnosed_on: CalendarDate | None = None
    is_chronic: bool | None = None


class HealthRecordResponse(BaseModel):
    id: int
    family_member_id: int
    condition_name: str
    description: str
    diagnosed_on: date | None
    is_chronic: bool


class HealthRecordListResponse(BaseModel):
    items: list[HealthRecordResponse]
    count: int
