import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.config import settings
from app.database import check_db_connection, session_scope
from app.utils.exceptions import AppException
from app.middleware.error_handler import (
    app_exception_handler,
    validation_exception_handler,
    integrity_error_handler,
    generic_exception_handler,
)
from app.schemas.common import ERROR_RESPONSES
from app.services.destination_standard_service import destination_standard_service

from app.api.v1 import (
    users,
    suppliers,
    lpos,
    stock,
    dashboard,
    trips,
    destination_standards,
    offences,
    reports,
    search,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# (router, OpenAPI tag) in the order they appear in the docs
ROUTERS = [
    (users.router,                 "Users"),
    (suppliers.router,             "Suppliers"),
    (lpos.router,                  "LPOs"),
    (stock.router,                 "Stock"),
    (stock.logs_router,            "System Logs"),
    (dashboard.router,             "Dashboard"),
    (trips.router,                 "Trips"),
    (destination_standards.router, "Destination Standards"),
    (offences.router,              "Offences"),
    (reports.router,               "Reports"),
    (search.router,                "Search"),
]


def seed_reference_data() -> None:
    """Fill in missing destination standards; the app still starts if this fails."""
    try:
        with session_scope() as db:
            destination_standard_service.seed_defaults(db)
    except SQLAlchemyError as e:
        logger.error(f"Seeding destination standards failed: {e}")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="Inventory, purchase order and fleet operations API",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── Exception Handlers ───────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ─── Routers ──────────────────────────────────────────────────────────────
    for router, tag in ROUTERS:
        app.include_router(router, prefix=API_PREFIX, tags=[tag], responses=ERROR_RESPONSES)

    # ─── Startup ──────────────────────────────────────────────────────────────
    @app.on_event("startup")
    def on_startup():
        if not check_db_connection():
            logger.error("Backend database unreachable at startup")
            return
        logger.info(f"{settings.APP_NAME} connected to the backend database ({settings.APP_ENV})")
        seed_reference_data()

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok", "app": settings.APP_NAME, "version": "1.0.0"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.APP_HOST, port=settings.APP_PORT,
                reload=settings.is_development)
