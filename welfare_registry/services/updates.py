from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from sqlalchemy import select

from welfare_registry.core.db import Store
from welfare_registry.models.base import Base
from welfare_registry.models.entities import Family, FamilyMember, HealthHistory, MemberNeeds
from welfare_registry.schemas.common import SparseUpdate, validated
from welfare_registry.schemas.families import FamilyUpdate
from welfare_registry.schemas.family_members import FamilyMemberUpdate
from welfare_registry.schemas.health_history import HealthRecordUpdate
from welfare_registry.schemas.member_needs import MemberNeedUpdate
from welfare_registry.services.outcomes import NoChange, Outcome, Rejected, RejectReason, classified, classify_update
from welfare_registry.services.queries import update_where

logger = logging.getLogger(__name__)


def apply_update(
    store: Store,
    model: type[Base],
    predicates: Mapping[str, Any],
    fields: Mapping[str, Any] | BaseModel,
    schema: type[SparseUpdate],
    *criteria,
) -> Outcome:
    """
    Apply the supplied subset of ``fields`` to the row(s) matching ``predicates``.

    The chain is not resolved beforehand: a target that matches nothing yields
    NoChange, not Missing. Validation errors propagate to the caller's
    ``classified`` wrapper.
    """
    if isinstance(fields, BaseModel):
        fields = fields.model_dump(exclude_unset=True)
    if not fields:
        return Rejected(RejectReason.empty_update)

    changes = validated(schema, fields).changes()
    with store.transaction() as db:
        count = update_where(db, model, predicates, changes, *criteria)

    outcome = classify_update(count)
    if isinstance(outcome, NoChange):
        logger.info("%s update matched no rows for %s", model.__tablename__, dict(predicates))
    else:
        logger.info("%s updated %d row(s) for %s", model.__tablename__, count, dict(predicates))
    return outcome


@classified("edit family")
def update_family(store: Store, family_id: int, fields) -> Outcome:
    return apply_update(store, Family, {"id": family_id}, fields, FamilyUpdate)


@classified("edit family member")
def update_member(store: Store, family_id: int, member_id: int, fields) -> Outcome:
    return apply_update(store, FamilyMember, {"id": member_id, "family_id": family_id}, fields, FamilyMemberUpdate)


@classified("edit member need")
def update_member_need(store: Store, family_id: int, member_id: int, need_id: int, fields) -> Outcome:
    return apply_update(
        store,
        MemberNeeds,
        {"id": need_id, "family_id": family_id, "family_member_id": member_id},
        fields,
        MemberNeedUpdate,
    )


@classified("edit health record")
def update_health_record(store: Store, family_id: int, member_id: int, record_id: int, fields) -> Outcome:
    # Health records carry no family key; scope the member through the family.
    member_in_family = select(FamilyMember.id).where(
        FamilyMember.id == member_id,
        FamilyMember.family_id == family_id,
    )
    return apply_update(
        store,
        HealthHistory,
        {"id": record_id, "family_member_id": member_id},
        fields,
        HealthRecordUpdate,
        HealthHistory.family_member_id.in_(member_in_family),
    )
