"""
Storage operations used by the service layer.

Every function takes the session of the caller's transaction; none of them
commit. Predicates are ``attribute=value`` pairs ANDed together; a list, tuple
or set value becomes an ``IN`` clause.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from welfare_registry.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


def _criteria(model: type[Base], predicates: Mapping[str, Any]) -> list:
    clauses = []
    for name, value in predicates.items():
        column = getattr(model, name)
        if isinstance(value, (list, tuple, set, frozenset)):
            clauses.append(column.in_(value))
        else:
            clauses.append(column == value)
    return clauses


def find_by_id(db: Session, model: type[ModelT], id_: int, **predicates: Any) -> ModelT | None:
    return db.execute(
        select(model).where(model.id == id_, *_criteria(model, predicates))
    ).scalar_one_or_none()


def find_all(db: Session, model: type[ModelT], **predicates: Any) -> list[ModelT]:
    return list(
        db.execute(select(model).where(*_criteria(model, predicates)).order_by(model.id.asc())).scalars().all()
    )


def ids_where(db: Session, model: type[Base], **predicates: Any) -> list[int]:
    return [row[0] for row in db.execute(select(model.id).where(*_criteria(model, predicates))).all()]


def insert(db: Session, model: type[ModelT], fields: Mapping[str, Any]) -> ModelT:
    row = model(**fields)
    db.add(row)
    db.flush()
    return row


def update_where(
    db: Session,
    model: type[Base],
    predicates: Mapping[str, Any],
    fields: Mapping[str, Any],
    *criteria,
) -> int:
    """Apply ``fields`` to every matching row and return the matched row count."""
    result = db.execute(
        update(model)
        .where(*_criteria(model, predicates), *criteria)
        .values({getattr(model, name): value for name, value in fields.items()})
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


def delete_where(db: Session, model: type[Base], predicates: Mapping[str, Any], *criteria) -> int:
    result = db.execute(
        delete(model).where(*_criteria(model, predicates), *criteria).execution_options(synchronize_session=False)
    )
    return result.rowcount
