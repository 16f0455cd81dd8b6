from __future__ import annotations

from sqlalchemy.orm import Session

from welfare_registry.models.entities import Family, FamilyMember, HealthHistory, MemberNeeds
from welfare_registry.schemas.common import DeleteSummary
from welfare_registry.services.queries import delete_where, ids_where


def purge_members(db: Session, member_ids: list[int]) -> DeleteSummary:
    """
    Hard-delete members together with their needs and health history.

    Children are removed explicitly (instead of relying on ON DELETE CASCADE)
    so the result does not depend on the engine enforcing foreign keys.
    """
    if not member_ids:
        return DeleteSummary()

    health_records = delete_where(db, HealthHistory, {"family_member_id": member_ids})
    needs = delete_where(db, MemberNeeds, {"family_member_id": member_ids})
    members = delete_where(db, FamilyMember, {"id": member_ids})
    return DeleteSummary(members=members, needs=needs, health_records=health_records)


def purge_family(db: Session, family_id: int) -> DeleteSummary:
    member_ids = ids_where(db, FamilyMember, family_id=family_id)
    summary = purge_members(db, member_ids)

    # Needs are also keyed by family; sweep any whose member key points elsewhere.
    stray_needs = delete_where(db, MemberNeeds, {"family_id": family_id})
    families = delete_where(db, Family, {"id": family_id})
    return DeleteSummary(
        families=families,
        members=summary.members,
        needs=summary.needs + stray_needs,
        health_records=summary.health_records,
    )
