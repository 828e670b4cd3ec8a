# employee_api/routers/system.py
import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from employee_api.db import ping

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", tags=["System"], summary="Health check",
            responses={200: {"description": "Service healthy"}})
def health():
    return {"status": "ok"}


@router.get("/health/ready", tags=["System"], summary="Readiness (incluye la DB)",
            responses={503: {"description": "Database unreachable"}})
def ready(request: Request):
    try:
        ping(request.app.state.engine)
    except SQLAlchemyError as err:
        logger.warning("readiness check failed: %s", err)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready"}


@router.get("/info", tags=["System"], summary="Información de la app",
            status_code=status.HTTP_200_OK)
def info(request: Request):
    settings = request.app.state.settings
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "db": settings.database_name,
        "engine": f"SQLAlchemy + {request.app.state.engine.dialect.name}",
    }
