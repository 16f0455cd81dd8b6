from fastapi import APIRouter, Body, Depends

from welfare_registry.core.db import Store, get_store
from welfare_registry.routers.responses import mutation_response, unwrap
from welfare_registry.schemas.common import DeleteSummary, MutationResponse
from welfare_registry.schemas.health_history import (
    HealthRecordListResponse,
    HealthRecordResponse,
    HealthRecordUpdate,
)
from welfare_registry.services import cascade, records, updates

router = APIRouter(prefix="/v1/families/{family_id}/members/{member_id}/health-history", tags=["health history"])


@router.get("", response_model=HealthRecordListResponse)
def list_health_history(family_id: int, member_id: int, store: Store = Depends(get_store)):
    items = unwrap(records.list_health_history(store, family_id, member_id))
    return HealthRecordListResponse(items=items, count=len(items))


@router.post("", response_model=HealthRecordResponse, status_code=201)
def create_health_record(
    family_id: int,
    member_id: int,
    payload: dict | None = Body(None),
    store: Store = Depends(get_store),
):
    return unwrap(cascade.add_health_record(store, family_id, member_id, payload or {}))


@router.get("/{record_id}", response_model=HealthRecordResponse)
def get_health_record(family_id: int, member_id: int, record_id: int, store: Store = Depends(get_store)):
    return unwrap(records.get_health_record(store, family_id, member_id, record_id))


@router.patch("/{record_id}", response_model=MutationResponse)
def update_health_record(
    family_id: int,
    member_id: int,
    record_id: int,
    payload: HealthRecordUpdate,
    store: Store = Depends(get_store),
):
    outcome = updates.update_health_record(store, family_id, member_id, record_id, payload)
    return mutation_response(outcome, "health record updated")


@router.delete("/{record_id}", response_model=DeleteSummary)
def delete_health_record(family_id: int, member_id: int, record_id: int, store: Store = Depends(get_store)):
    return unwrap(cascade.delete_health_record(store, family_id, member_id, record_id))
