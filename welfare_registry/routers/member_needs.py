from fastapi import APIRouter, Body, Depends

from welfare_registry.core.db import Store, get_store
from welfare_registry.routers.responses import mutation_response, unwrap
from welfare_registry.schemas.common import DeleteSummary, MutationResponse
from welfare_registry.schemas.member_needs import (
    MemberNeedListResponse,
    MemberNeedResponse,
    MemberNeedUpdate,
)
from welfare_registry.services import cascade, records, updates

router = APIRouter(prefix="/v1/families/{family_id}", tags=["member needs"])


@router.get("/needs", response_model=MemberNeedListResponse)
def list_family_needs(family_id: int, store: Store = Depends(get_store)):
    needs = unwrap(records.list_family_needs(store, family_id))
    return MemberNeedListResponse(items=needs, count=len(needs))


@router.get("/members/{member_id}/needs", response_model=MemberNeedListResponse)
def list_member_needs(family_id: int, member_id: int, store: Store = Depends(get_store)):
    needs = unwrap(records.list_member_needs(store, family_id, member_id))
    return MemberNeedListResponse(items=needs, count=len(needs))


@router.post("/members/{member_id}/needs", response_model=MemberNeedResponse, status_code=201)
def create_member_need(
    family_id: int,
    member_id: int,
    payload: dict | None = Body(None),
    store: Store = Depends(get_store),
):
    return unwrap(cascade.add_member_need(store, family_id, member_id, payload or {}))


@router.get("/members/{member_id}/needs/{need_id}", response_model=MemberNeedResponse)
def get_member_need(family_id: int, member_id: int, need_id: int, store: Store = Depends(get_store)):
    return unwrap(records.get_member_need(store, family_id, member_id, need_id))


@router.patch("/members/{member_id}/needs/{need_id}", response_model=MutationResponse)
def update_member_need(
    family_id: int,
    member_id: int,
    need_id: int,
    payload: MemberNeedUpdate,
    store: Store = Depends(get_store),
):
    outcome = updates.update_member_need(store, family_id, member_id, need_id, payload)
    return mutation_response(outcome, "member need updated")


@router.delete("/members/{member_id}/needs/{need_id}", response_model=DeleteSummary)
def delete_member_need(family_id: int, member_id: int, need_id: int, store: Store = Depends(get_store)):
    return unwrap(cascade.delete_member_need(store, family_id, member_id, need_id))
