from fastapi import APIRouter, Body, Depends

from welfare_registry.core.db import Store, get_store
from welfare_registry.routers.responses import mutation_response, unwrap
from welfare_registry.schemas.common import DeleteSummary, MutationResponse
from welfare_registry.schemas.family_members import (
    FamilyMemberListResponse,
    FamilyMemberResponse,
    FamilyMemberUpdate,
)
from welfare_registry.services import cascade, records, updates

router = APIRouter(prefix="/v1/families/{family_id}/members", tags=["family members"])


@router.get("", response_model=FamilyMemberListResponse)
def list_family_members(family_id: int, store: Store = Depends(get_store)):
    members = unwrap(records.list_members(store, family_id))
    return FamilyMemberListResponse(items=members, count=len(members))


# Child bodies are validated by the service once the parent chain resolves.
@router.post("", response_model=FamilyMemberResponse, status_code=201)
def create_family_member(
    family_id: int,
    payload: dict | None = Body(None),
    store: Store = Depends(get_store),
):
    return unwrap(cascade.add_member(store, family_id, payload or {}))


@router.get("/{member_id}", response_model=FamilyMemberResponse)
def get_family_member(family_id: int, member_id: int, store: Store = Depends(get_store)):
    return unwrap(records.get_member(store, family_id, member_id))


@router.patch("/{member_id}", response_model=MutationResponse)
def update_family_member(
    family_id: int,
    member_id: int,
    payload: FamilyMemberUpdate,
    store: Store = Depends(get_store),
):
    return mutation_response(updates.update_member(store, family_id, member_id, payload), "family member updated")


@router.delete("/{member_id}", response_model=DeleteSummary)
def delete_family_member(family_id: int, member_id: int, store: Store = Depends(get_store)):
    return unwrap(cascade.delete_member(store, family_id, member_id))
