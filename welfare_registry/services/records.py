"""Chain-checked reads over the family hierarchy."""

from __future__ import annotations

from welfare_registry.core.db import Store
from welfare_registry.models.entities import Family, FamilyMember, HealthHistory, MemberNeeds
from welfare_registry.schemas.families import FamilyDetailResponse, FamilyResponse
from welfare_registry.schemas.family_members import FamilyMemberResponse
from welfare_registry.schemas.health_history import HealthRecordResponse
from welfare_registry.schemas.member_needs import MemberNeedResponse
from welfare_registry.services.outcomes import Missing, Outcome, Success, classified
from welfare_registry.services.queries import find_all
from welfare_registry.services.resolver import resolve, resolve_health


@classified("retrieve families")
def list_families(store: Store) -> Outcome:
    with store.transaction() as db:
        families = find_all(db, Family)
        return Success([FamilyResponse.model_validate(item, from_attributes=True) for item in families])


@classified("retrieve family")
def get_family(store: Store, family_id: int) -> Outcome:
    with store.transaction() as db:
        chain = resolve(db, family_id)
        if isinstance(chain, Missing):
            return chain
        return Success(FamilyDetailResponse.model_validate(chain.family, from_attributes=True))


@classified("retrieve family members")
def list_members(store: Store, family_id: int) -> Outcome:
    with store.transaction() as db:
        chain = resolve(db, family_id)
        if isinstance(chain, Missing):
            return chain
        members = find_all(db, FamilyMember, family_id=family_id)
        return Success([FamilyMemberResponse.model_validate(item, from_attributes=True) for item in members])


@classified("retrieve family member")
def get_member(store: Store, family_id: int, member_id: int) -> Outcome:
    with store.transaction() as db:
        chain = resolve(db, family_id, member_id)
        if isinstance(chain, Missing):
            return chain
        return Success(FamilyMemberResponse.model_validate(chain.member, from_attributes=True))


@classified("retrieve family members needs")
def list_family_needs(store: Store, family_id: int) -> Outcome:
    with store.transaction() as db:
        chain = resolve(db, family_id)
        if isinstance(chain, Missing):
            return chain
        needs = find_all(db, MemberNeeds, family_id=family_id)
        return Success([MemberNeedResponse.model_validate(item, from_attributes=True) for item in needs])


@classified("retrieve member needs")
def list_member_needs(store: Store, family_id: int, member_id: int) -> Outcome:
    with store.transaction() as db:
        chain = resolve(db, family_id, member_id)
        if isinstance(chain, Missing):
            return chain
        needs = find_all(db, MemberNeeds, family_id=family_id, family_member_id=member_id)
        return Success([MemberNeedResponse.model_validate(item, from_attributes=True) for item in needs])


@classified("retrieve member need")
def get_member_need(store: Store, family_id: int, member_id: int, need_id: int) -> Outcome:
    with store.transaction() as db:
        chain = resolve(db, family_id, member_id, need_id)
        if isinstance(chain, Missing):
            return chain
        return Success(MemberNeedResponse.model_validate(chain.need, from_attributes=True))


@classified("retrieve health history")
def list_health_history(store: Store, family_id: int, member_id: int) -> Outcome:
    with store.transaction() as db:
        chain = resolve_health(db, family_id, member_id)
        if isinstance(chain, Missing):
            return chain
        records = find_all(db, HealthHistory, family_member_id=member_id)
        return Success([HealthRecordResponse.model_validate(item, from_attributes=True) for item in records])


@classified("retrieve health record")
def get_health_record(store: Store, family_id: int, member_id: int, record_id: int) -> Outcome:
    with store.transaction() as db:
        chain = resolve_health(db, family_id, member_id, record_id)
        if isinstance(chain, Missing):
            return chain
        return Success(HealthRecordResponse.model_validate(chain.health_record, from_attributes=True))
