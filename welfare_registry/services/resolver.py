from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from welfare_registry.models.base import Base
from welfare_registry.models.entities import Family, FamilyMember, HealthHistory, MemberNeeds
from welfare_registry.services.outcomes import Level, Missing, classify_lookup
from welfare_registry.services.queries import find_by_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolveStep:
    """One hierarchy level: which table to probe and how ancestors scope it."""

    level: Level
    model: type[Base]
    scope: Callable[[dict[Level, Any]], dict[str, Any]]


@dataclass(frozen=True)
class ResolvedChain:
    rows: dict[Level, Any]

    @property
    def family(self) -> Family:
        return self.rows[Level.family]

    @property
    def member(self) -> FamilyMember | None:
        return self.rows.get(Level.member)

    @property
    def need(self) -> MemberNeeds | None:
        return self.rows.get(Level.need)

    @property
    def health_record(self) -> HealthHistory | None:
        return self.rows.get(Level.health_record)


FAMILY_STEP = ResolveStep(Level.family, Family, lambda found: {})
MEMBER_STEP = ResolveStep(
    Level.member,
    FamilyMember,
    lambda found: {"family_id": found[Level.family].id},
)
# Single compound lookup: the need must carry both ancestor keys.
NEED_STEP = ResolveStep(
    Level.need,
    MemberNeeds,
    lambda found: {"family_id": found[Level.family].id, "family_member_id": found[Level.member].id},
)
HEALTH_RECORD_STEP = ResolveStep(
    Level.health_record,
    HealthHistory,
    lambda found: {"family_member_id": found[Level.member].id},
)

NEEDS_CHAIN: tuple[ResolveStep, ...] = (FAMILY_STEP, MEMBER_STEP, NEED_STEP)
HEALTH_CHAIN: tuple[ResolveStep, ...] = (FAMILY_STEP, MEMBER_STEP, HEALTH_RECORD_STEP)


def _supplied(*ids: int | None) -> list[int]:
    chain = []
    for position, ident in enumerate(ids):
        if ident is None:
            if any(rest is not None for rest in ids[position + 1 :]):
                raise ValueError("chain identifiers must be supplied from the root down")
            break
        chain.append(ident)
    return chain


def resolve_chain(db: Session, steps: Sequence[ResolveStep], ids: Sequence[int]) -> ResolvedChain | Missing:
    """
    Resolve ``ids`` level by level. Stops at the first level that does not
    resolve and reports it; deeper levels are never queried.
    """
    if not ids:
        raise ValueError("at least the root identifier is required")
    if len(ids) > len(steps):
        raise ValueError(f"chain has {len(steps)} levels, got {len(ids)} identifiers")

    found: dict[Level, Any] = {}
    for step, ident in zip(steps, ids):
        outcome = classify_lookup(find_by_id(db, step.model, ident, **step.scope(found)), step.level)
        if isinstance(outcome, Missing):
            logger.debug("chain %s stopped at %s", list(ids), step.level.value)
            return outcome
        found[step.level] = outcome.payload
    return ResolvedChain(found)


def resolve(
    db: Session,
    family_id: int,
    member_id: int | None = None,
    need_id: int | None = None,
) -> ResolvedChain | Missing:
    return resolve_chain(db, NEEDS_CHAIN, _supplied(family_id, member_id, need_id))


def resolve_health(
    db: Session,
    family_id: int,
    member_id: int,
    record_id: int | None = None,
) -> ResolvedChain | Missing:
    return resolve_chain(db, HEALTH_CHAIN, _supplied(family_id, member_id, record_id))
