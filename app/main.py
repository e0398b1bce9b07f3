# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI
from sqlmodel import Session

from app.core.config import get_settings
from app.core.errors import register_exception_handlers
from app.database import create_db_and_tables, engine

# Import models so SQLModel metadata is populated before create_all()
from app.models import item as _item_models  # noqa: F401
from app.models import account as _account_models  # noqa: F401

# Routers
from app.routers.auth import router as auth_router
from app.routers.items import router as items_router, service as catalog_service
from app.routers.cart import router as cart_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
      - Seed the default catalog when enabled and the catalog is empty.

    Shutdown:
      - No special cleanup needed for sync engine.
    """
    logger.info("Startup: connecting to database...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise

    if settings.SEED_ITEMS:
        with Session(engine) as session:
            seeded = catalog_service.seed_default_items(session)
        if seeded:
            logger.info(f"Startup: seeded {seeded} catalog items.")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
)

register_exception_handlers(app)

# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(items_router, prefix=settings.API_PREFIX)
app.include_router(cart_router, prefix=settings.API_PREFIX)


@app.get(f"{settings.API_PREFIX}/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "version": settings.VERSION}
