# main.py

from contextlib import asynccontextmanager
import logging
import os

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from print_queue.logging import configure_logging
from print_queue.core.config import settings
from print_queue.core.error_handlers import (
    setup_error_handlers,
    add_request_id_middleware,
    add_security_headers_middleware,
)
from print_queue.database.core import SessionLocal, init_db
from print_queue.database.legacy_import import import_legacy_orders
from print_queue.orders.controller import router as orders_router
from print_queue.schemas.orders import HealthResponse
from print_queue.utils.timestamps import utc_now_iso

configure_logging()
logger = logging.getLogger("print_queue.main")


def run_legacy_import() -> int:
    """Bring over orders from the pre-database JSON file, once."""
    db = SessionLocal()
    try:
        return import_legacy_orders(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    init_db()
    run_legacy_import()
    logger.info(f"3D Print Queue ready on http://{settings.HOST}:{settings.PORT}")

    yield

    logger.info("3D Print Queue shutting down")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan,
)

setup_error_handlers(app)

# Last registered runs outermost: security headers wrap the request-id layer
app.middleware("http")(add_request_id_middleware)
app.middleware("http")(add_security_headers_middleware)

if settings.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )

api_router = APIRouter()


@api_router.get("/health", response_model=HealthResponse)
def health_check():
    """Liveness probe."""
    return {"ok": True, "timestamp": utc_now_iso()}


api_router.include_router(orders_router, tags=["Orders"])
app.include_router(api_router, prefix="/api")

# The browser UI is plain static files; mount last so /api routes win
if os.path.isdir(settings.PUBLIC_DIR):
    app.mount("/", StaticFiles(directory=settings.PUBLIC_DIR, html=True), name="public")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
