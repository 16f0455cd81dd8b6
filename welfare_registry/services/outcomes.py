from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import wraps
from typing import Any, Generic, TypeVar, Union

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from welfare_registry.schemas.common import UpdateSummary

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Postgres SQLSTATE for unique_violation.
UNIQUE_VIOLATION = "23505"


class Level(str, Enum):
    family = "Family"
    member = "FamilyMember"
    need = "MemberNeeds"
    health_record = "HealthHistory"


class RejectReason(str, Enum):
    empty_members = "EmptyMembers"
    empty_update = "EmptyUpdate"
    invalid_fields = "InvalidFields"
    constraint_violation = "ConstraintViolation"


@dataclass(frozen=True)
class Success(Generic[T]):
    payload: T


@dataclass(frozen=True)
class Rejected:
    reason: RejectReason
    errors: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class Missing:
    level: Level


@dataclass(frozen=True)
class NoChange:
    pass


@dataclass(frozen=True)
class InternalFailure:
    operation: str
    error: BaseException | None = field(default=None, compare=False)


Outcome = Union[Success, Rejected, Missing, NoChange, InternalFailure]


def classify_lookup(row: T | None, level: Level) -> Success[T] | Missing:
    if row is None:
        return Missing(level)
    return Success(row)


def classify_update(count: int) -> Success[UpdateSummary] | NoChange:
    if count > 0:
        return Success(UpdateSummary(affected=count))
    return NoChange()


def is_unique_violation(exc: IntegrityError) -> bool:
    if getattr(exc.orig, "pgcode", None) == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(exc.orig)


def classify_error(operation: str, exc: Exception) -> Rejected | InternalFailure:
    if isinstance(exc, ValidationError):
        return Rejected(
            RejectReason.invalid_fields,
            errors=exc.errors(include_url=False, include_context=False, include_input=False),
        )
    if isinstance(exc, IntegrityError) and is_unique_violation(exc):
        return Rejected(RejectReason.constraint_violation, errors=[{"msg": str(exc.orig)}])
    return InternalFailure(operation, exc)


def classified(operation: str):
    """
    Turn validation and storage exceptions raised by a service operation into
    outcomes. Anything that is not a pydantic or SQLAlchemy error propagates.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (ValidationError, SQLAlchemyError) as exc:
                outcome = classify_error(operation, exc)
                if isinstance(outcome, InternalFailure):
                    logger.exception("%s failed", operation)
                else:
                    logger.info("%s rejected: %s", operation, outcome.reason.value)
                return outcome

        return wrapper

    return decorator
