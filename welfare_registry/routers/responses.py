from __future__ import annotations

from fastapi import HTTPException

from welfare_registry.schemas.common import MutationResponse
from welfare_registry.services.outcomes import (
    InternalFailure,
    Level,
    Missing,
    NoChange,
    Outcome,
    Rejected,
    RejectReason,
    Success,
)

MISSING_DETAIL = {
    Level.family: "family not found",
    Level.member: "family member not found",
    Level.need: "member need not found",
    Level.health_record: "health record not found",
}

REJECTED_STATUS = {
    RejectReason.empty_members: 400,
    RejectReason.empty_update: 400,
    RejectReason.invalid_fields: 422,
    RejectReason.constraint_violation: 409,
}

REJECTED_DETAIL = {
    RejectReason.empty_members: "family must have at least one member",
    RejectReason.empty_update: "no fields to update",
    RejectReason.invalid_fields: "invalid fields",
    RejectReason.constraint_violation: "email already exists",
}


def unwrap(outcome: Outcome):
    """Return the payload of a success or raise the matching HTTP error."""
    if isinstance(outcome, Success):
        return outcome.payload
    if isinstance(outcome, Missing):
        raise HTTPException(status_code=404, detail=MISSING_DETAIL[outcome.level])
    if isinstance(outcome, Rejected):
        detail = REJECTED_DETAIL[outcome.reason]
        if outcome.reason == RejectReason.invalid_fields:
            detail = {"error": detail, "fields": outcome.errors}
        raise HTTPException(status_code=REJECTED_STATUS[outcome.reason], detail=detail)
    if isinstance(outcome, InternalFailure):
        raise HTTPException(status_code=500, detail=f"failed to {outcome.operation}")
    raise HTTPException(status_code=500, detail="unexpected outcome")


def mutation_response(outcome: Outcome, message: str) -> MutationResponse:
    if isinstance(outcome, NoChange):
        return MutationResponse(message="no records were updated", affected=0)
    summary = unwrap(outcome)
    return MutationResponse(message=message, affected=summary.affected)
