"""
Translate storage errors into HTTP responses.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..infra.db.errors import DatabaseError

logger = logging.getLogger(__name__)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": exc.message}, status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DatabaseError, database_error_handler)
