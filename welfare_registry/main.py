from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from welfare_registry.core.config import settings
from welfare_registry.core.db import build_store
from welfare_registry.core.logging_config import setup_logging
from welfare_registry.routers import families, family_members, health, health_history, member_needs


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The store may already be installed (tests do this); only own what we build.
    owned = getattr(app.state, "store", None) is None
    if owned:
        app.state.store = build_store(settings)
    try:
        yield
    finally:
        if owned:
            app.state.store.dispose()
            app.state.store = None


setup_logging(settings.log_level)

app = FastAPI(
    title="Family Welfare Registry API",
    version="1.0.0",
    description="API for families, their members, member needs and health history.",
    root_path=settings.root_path,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(families.router)
app.include_router(family_members.router)
app.include_router(member_needs.router)
app.include_router(health_history.router)
