# employee_api/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from employee_api.core.config import get_settings, Settings
from employee_api.core.errors import register_error_handlers
from employee_api.core.logging import setup_logging
from employee_api.db import build_engine, build_session_factory, ping
from employee_api.migrate import run_migrations
from employee_api.repository import EmployeeRepository
from employee_api.routers import employees, system
from employee_api.service import EmployeeService

logger = logging.getLogger(__name__)

tags_metadata = [
    {"name": "System", "description": "Salud del servicio y metadatos."},
    {"name": "Employees", "description": "CRUD de empleados."},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    engine = app.state.engine
    ping(engine)
    logger.info("Pong from db")
    if settings.RUN_MIGRATIONS:
        run_migrations(engine)
    logger.info("Server run on %s:%s", settings.SERVER_HOST, settings.SERVER_PORT)
    yield
    engine.dispose()
    logger.info("%s shutting down", settings.APP_NAME)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=settings.APP_DESCRIPTION,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    repository = EmployeeRepository(build_session_factory(engine))
    app.state.settings = settings
    app.state.engine = engine
    app.state.employee_service = EmployeeService(repository)

    # Redirige "/" -> "/docs"
    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url="/docs")

    app.include_router(system.router)
    app.include_router(employees.router)
    register_error_handlers(app)
    log_routes(app)
    return app


def log_routes(app: FastAPI) -> None:
    # not every entry of app.routes carries a path (mounted/included routers)
    for r in app.routes:
        logger.debug("ROUTE: %s %s", getattr(r, "path", r), sorted(getattr(r, "methods", None) or []))


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.SERVER_HOST, port=settings.SERVER_PORT)


if __name__ == "__main__":
    run()
