# =======================================================================================
# campus_access/main.py - FastAPI Application Entry Point
# =======================================================================================
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from . import __version__
from .config import config
from .api.routes.rfid import router as rfid_router
from .api.routes.students import router as students_router
from .api.routes.attendance import router as attendance_router
from .api.routes.auth import router as auth_router
from .api.routes.dashboard import router as dashboard_router
from .database import db_manager
from .models.schemas import HealthResponse
from .utils.exceptions import CampusAccessError, CollaboratorError
from .utils.logger import configure_logging, get_logger

logger = get_logger("api")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CampusAccessError)
    async def campus_access_error_handler(request: Request, exc: CampusAccessError):
        if isinstance(exc, CollaboratorError):
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("%s %s database error: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.DB_CREATE_SCHEMA:
        db_manager.create_schema()
    logger.info("Campus access API started")
    yield
    logger.info("Campus access API stopped")


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Campus RFID Access Control API",
        version=__version__,
        description="Student directory, attendance and card-tap access decisions for the campus admin panel",
        debug=config.API_DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routers
    app.include_router(rfid_router, prefix="/api", tags=["rfid"])
    app.include_router(students_router, prefix="/api", tags=["students"])
    app.include_router(attendance_router, prefix="/api", tags=["attendance"])
    app.include_router(auth_router, prefix="/api", tags=["auth"])
    app.include_router(dashboard_router, prefix="/api", tags=["dashboard"])

    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    def api_health():
        try:
            db_manager.fetch_one("SELECT 1")
            return HealthResponse(status="ok", dataAvailable=True, message=None)
        except SQLAlchemyError as e:
            return HealthResponse(
                status="error", dataAvailable=False, message=str(e)
            )

    # liveness only, no database round trip
    @app.get("/health")
    def liveness():
        return {"status": "ok"}

    return app


app = create_app()
