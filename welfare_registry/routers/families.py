from fastapi import APIRouter, Depends

from welfare_registry.core.db import Store, get_store
from welfare_registry.routers.responses import mutation_response, unwrap
from welfare_registry.schemas.common import DeleteSummary, MutationResponse
from welfare_registry.schemas.families import (
    FamilyDetailResponse,
    FamilyListResponse,
    FamilyUpdate,
    FamilyWithMembersCreate,
)
from welfare_registry.services import cascade, records, updates

router = APIRouter(prefix="/v1/families", tags=["families"])


@router.get("", response_model=FamilyListResponse)
def list_families(store: Store = Depends(get_store)):
    families = unwrap(records.list_families(store))
    return FamilyListResponse(items=families, count=len(families))


@router.post("", response_model=FamilyDetailResponse, status_code=201)
def create_family(payload: FamilyWithMembersCreate, store: Store = Depends(get_store)):
    return unwrap(cascade.create_family_with_members(store, payload, payload.members))


@router.get("/{family_id}", response_model=FamilyDetailResponse)
def get_family(family_id: int, store: Store = Depends(get_store)):
    return unwrap(records.get_family(store, family_id))


@router.patch("/{family_id}", response_model=MutationResponse)
def update_family(family_id: int, payload: FamilyUpdate, store: Store = Depends(get_store)):
    return mutation_response(updates.update_family(store, family_id, payload), "family updated")


@router.delete("/{family_id}", response_model=DeleteSummary)
def delete_family(family_id: int, store: Store = Depends(get_store)):
    return unwrap(cascade.delete_family(store, family_id))
