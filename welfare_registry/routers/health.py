from fastapi import APIRouter, Depends
from sqlalchemy import text

from welfare_registry.core.db import Store, get_store

router = APIRouter(tags=["health"])


@router.get("/health")
def health(store: Store = Depends(get_store)):
    with store.transaction() as db:
        db.execute(text("SELECT 1"))
    return {"status": "ok"}
