from __future__ import annotations

from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field

from welfare_registry.models.entities import GenderEnum, MaritalStatusEnum
from welfare_registry.schemas.common import SparseUpdate

# Accepted on input besides ISO dates; intake forms send US-style dates.
_DATE_FORMATS = ("%m/%d/%Y",)


def parse_date(value):
    if isinstance(value, str) and "/" in value:
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(value, fmt).date()
            except ValueError:
                continue
        raise ValueError(f"invalid date: {value}")
    return value


def normalize_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


Name = Annotated[str, Field(min_length=1, max_length=255)]
Address = Annotated[str, Field(min_length=5, max_length=100)]
PhoneNumber = Annotated[str, Field(min_length=10, max_length=15)]
Income = Annotated[float, Field(ge=0)]
Email = Annotated[EmailStr, BeforeValidator(normalize_email)]
CalendarDate = Annotated[date, BeforeValidator(parse_date)]


class FamilyMemberCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    first_name: Name
    last_name: Name
    gender: GenderEnum = GenderEnum.male
    marital_status: MaritalStatusEnum = MaritalStatusEnum.single
    address: Address
    email: Email
    date_of_birth: CalendarDate
    phone_number: PhoneNumber
    is_working: bool
    is_person_charge: bool | None = None
    proficient: Name
    total_income: Income = 0
    education_level: Name


class FamilyMemberUpdate(SparseUpdate):
    nullable_fields = frozenset({"is_person_charge"})

    first_name: Name | None = None
    last_name: Name | None = None
    gender: GenderEnum | None = None
    marital_status: MaritalStatusEnum | None = None
    address: Address | None = None
    email: Email | None = None
    date_of_birth: CalendarDate | None = None
    phone_number: PhoneNumber | None = None
    is_working: bool | None = None
    is_person_charge: bool | None = None
    proficient: Name | None = None
    total_income: Income | None = None
    education_level: Name | None = None


class FamilyMemberResponse(BaseModel):
    id: int
    family_id: int
    first_name: str
    last_name: str
    gender: GenderEnum
    marital_status: MaritalStatusEnum
    address: str
    email: str
    date_of_birth: date
    phone_number: str
    is_working: bool
    is_person_charge: bool | None
    proficient: str
    total_income: float
    education_level: str


class FamilyMemberListResponse(BaseModel):
    items: list[FamilyMemberResponse]
    count: int
