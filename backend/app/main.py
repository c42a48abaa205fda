"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from app.config import get_settings
from app.db.session import SessionLocal, engine
from app.db.base import Base
from app.routers import auth, dashboard, employees, menu_config, navigation, profile, tables, users
from app.schemas.forms import field_errors
from app.services.crud_table import DraftValidationError
from app.services.gateway import GatewayError, RecordNotFoundError
from app.services.session import AuthError, SignUpError
from app.services.storage import StorageError

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger(__name__)


def _warm_backend_state() -> None:
    """Prime the DB connection and storage root at process start."""

    try:
        Path(settings.storage_root).mkdir(parents=True, exist_ok=True)
        if settings.auto_create_schema:
            Base.metadata.create_all(bind=engine)
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Backend warm-up failed; continuing without startup pre-warm.")


@asynccontextmanager
async def lifespan(_: FastAPI):
    _warm_backend_state()
    yield


app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GatewayError)
async def gateway_error_handler(_: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(RecordNotFoundError)
async def not_found_handler(_: Request, exc: RecordNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(StorageError)
async def storage_error_handler(_: Request, exc: StorageError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(SignUpError)
async def sign_up_error_handler(_: Request, exc: SignUpError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(AuthError)
async def auth_error_handler(_: Request, exc: AuthError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"detail": exc.message})


@app.exception_handler(DraftValidationError)
async def draft_error_handler(_: Request, exc: DraftValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc), "field_errors": exc.field_errors})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = field_errors(exc.errors())
    detail = next(iter(errors.values()), "Invalid request")
    return JSONResponse(status_code=422, content={"detail": detail, "field_errors": errors})


app.include_router(auth.router, tags=["auth"])
app.include_router(navigation.router, tags=["navigation"])
app.include_router(dashboard.router, tags=["dashboard"])
app.include_router(employees.router, tags=["employees"])
app.include_router(users.router, tags=["users"])
app.include_router(menu_config.router, tags=["menu-config"])
app.include_router(profile.router, tags=["profile"])
for table_router in tables.table_routers:
    app.include_router(table_router, tags=["tables"])

app.mount(
    "/storage",
    StaticFiles(directory=settings.storage_root, check_dir=False),
    name="storage",
)


@app.get("/health")
def health() -> dict[str, str]:
    """Simple health check endpoint."""

    return {"status": "ok"}
