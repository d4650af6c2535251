from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from career_graph.errors import NotFoundError, UpstreamError, ValidationError

logger = logging.getLogger(__name__)


def ok(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


def _fail(status: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"success": False, "error": error})


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError):
        return _fail(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def _bad_request(_req: Request, exc: RequestValidationError):
        first = (exc.errors() or [{}])[0]
        where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        return _fail(400, f"{where}: {first.get('msg', 'invalid request')}" if where else "invalid request")

    @app.exception_handler(NotFoundError)
    async def _not_found(_req: Request, exc: NotFoundError):
        return _fail(404, str(exc))

    @app.exception_handler(UpstreamError)
    async def _upstream(req: Request, exc: UpstreamError):
        # details stay in the log
        logger.error("upstream failure on %s %s: %s", req.method, req.url.path, exc, exc_info=exc)
        return _fail(502, "upstream service unavailable")
