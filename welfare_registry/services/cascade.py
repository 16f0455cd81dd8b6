"""
Multi-row writes over the family hierarchy.

Each operation runs in a single transaction: either every row it touches is
written, or the store is left exactly as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from welfare_registry.core.db import Store
from welfare_registry.models.entities import Family, FamilyMember, HealthHistory, MemberNeeds
from welfare_registry.schemas.common import DeleteSummary, validated
from welfare_registry.schemas.families import FamilyCreate, FamilyDetailResponse, FamilyResponse
from welfare_registry.schemas.family_members import FamilyMemberCreate, FamilyMemberResponse
from welfare_registry.schemas.health_history import HealthRecordCreate, HealthRecordResponse
from welfare_registry.schemas.member_needs import MemberNeedCreate, MemberNeedResponse
from welfare_registry.services.outcomes import Level, Missing, Outcome, Rejected, RejectReason, Success, classified
from welfare_registry.services.purge import purge_family, purge_members
from welfare_registry.services.queries import delete_where, insert
from welfare_registry.services.resolver import resolve, resolve_health

logger = logging.getLogger(__name__)

Fields = Mapping[str, Any] | BaseModel


@classified("add family with members")
def create_family_with_members(store: Store, family_fields: Fields, members: Sequence[Fields]) -> Outcome:
    if not members:
        logger.info("family rejected: no members supplied")
        return Rejected(RejectReason.empty_members)

    # Everything is validated before the transaction opens.
    family_data = validated(FamilyCreate, family_fields)
    member_data = [validated(FamilyMemberCreate, item) for item in members]

    with store.transaction() as db:
        family = insert(db, Family, family_data.model_dump())
        created = [insert(db, FamilyMember, {**item.model_dump(), "family_id": family.id}) for item in member_data]
        payload = FamilyDetailResponse(
            **FamilyResponse.model_validate(family, from_attributes=True).model_dump(),
            members=[FamilyMemberResponse.model_validate(member, from_attributes=True) for member in created],
        )

    logger.info("created family %s with %d members", payload.id, len(payload.members))
    return Success(payload)


@classified("add family member")
def add_member(store: Store, family_id: int, fields: Fields) -> Outcome:
    with store.transaction() as db:
        chain = resolve(db, family_id)
        if isinstance(chain, Missing):
            return chain
        data = validated(FamilyMemberCreate, fields)
        member = insert(db, FamilyMember, {**data.model_dump(), "family_id": chain.family.id})
        payload = FamilyMemberResponse.model_validate(member, from_attributes=True)

    logger.info("added member %s to family %s", payload.id, family_id)
    return Success(payload)


@classified("add member need")
def add_member_need(store: Store, family_id: int, member_id: int, fields: Fields) -> Outcome:
    with store.transaction() as db:
        chain = resolve(db, family_id, member_id)
        if isinstance(chain, Missing):
            return chain
        data = validated(MemberNeedCreate, fields)
        need = insert(
            db,
            MemberNeeds,
            {**data.model_dump(), "family_id": chain.family.id, "family_member_id": chain.member.id},
        )
        payload = MemberNeedResponse.model_validate(need, from_attributes=True)

    logger.info("added need %s to member %s/%s", payload.id, family_id, member_id)
    return Success(payload)


@classified("add health record")
def add_health_record(store: Store, family_id: int, member_id: int, fields: Fields) -> Outcome:
    with store.transaction() as db:
        chain = resolve_health(db, family_id, member_id)
        if isinstance(chain, Missing):
            return chain
        data = validated(HealthRecordCreate, fields)
        record = insert(db, HealthHistory, {**data.model_dump(), "family_member_id": chain.member.id})
        payload = HealthRecordResponse.model_validate(record, from_attributes=True)

    logger.info("added health record %s to member %s/%s", payload.id, family_id, member_id)
    return Success(payload)


@classified("delete family")
def delete_family(store: Store, family_id: int) -> Outcome:
    with store.transaction() as db:
        chain = resolve(db, family_id)
        if isinstance(chain, Missing):
            return chain
        # The row can disappear between resolve and purge under a concurrent delete.
        summary = purge_family(db, family_id)
        if not summary.families:
            return Missing(Level.family)

    logger.info(
        "deleted family %s (%d members, %d needs, %d health records)",
        family_id,
        summary.members,
        summary.needs,
        summary.health_records,
    )
    return Success(summary)


@classified("delete family member")
def delete_member(store: Store, family_id: int, member_id: int) -> Outcome:
    with store.transaction() as db:
        chain = resolve(db, family_id, member_id)
        if isinstance(chain, Missing):
            return chain
        summary = purge_members(db, [chain.member.id])
        if not summary.members:
            return Missing(Level.member)

    logger.info("deleted member %s/%s", family_id, member_id)
    return Success(summary)


@classified("delete member need")
def delete_member_need(store: Store, family_id: int, member_id: int, need_id: int) -> Outcome:
    with store.transaction() as db:
        chain = resolve(db, family_id, member_id, need_id)
        if isinstance(chain, Missing):
            return chain
        needs = delete_where(
            db,
            MemberNeeds,
            {"id": need_id, "family_id": family_id, "family_member_id": member_id},
        )
        if not needs:
            return Missing(Level.need)

    logger.info("deleted need %s/%s/%s", family_id, member_id, need_id)
    return Success(DeleteSummary(needs=needs))


@classified("delete health record")
def delete_health_record(store: Store, family_id: int, member_id: int, record_id: int) -> Outcome:
    with store.transaction() as db:
        chain = resolve_health(db, family_id, member_id, record_id)
        if isinstance(chain, Missing):
            return chain
        health_records = delete_where(db, HealthHistory, {"id": record_id, "family_member_id": member_id})
        if not health_records:
            return Missing(Level.health_record)

    logger.info("deleted health record %s/%s/%s", family_id, member_id, record_id)
    return Success(DeleteSummary(health_records=health_records))
