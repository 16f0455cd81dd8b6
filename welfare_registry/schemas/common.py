from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator


class SparseUpdate(BaseModel):
    """
    Base for PATCH payloads.

    Only the fields the caller actually sent are applied. Sending an explicit
    null is only allowed for columns listed in ``nullable_fields``.
    """

    model_config = ConfigDict(extra="forbid")

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{name} may not be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class MutationResponse(BaseModel):
    message: str
    affected: int


class DeleteSummary(BaseModel):
    families: int = 0
    members: int = 0
    needs: int = 0
    health_records: int = 0


class UpdateSummary(BaseModel):
    affected: int


def validated(schema: type[BaseModel], data) -> BaseModel:
    """Validate ``data`` (a mapping or another model) against ``schema``."""
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=isinstance(data, SparseUpdate))
    return schema.model_validate(data)
