"""
Domain errors and global exception handlers for consistent API errors.

Every domain error carries its HTTP status and a public message; handlers
translate them into `{"success": false, "error": ...}` bodies. Internal details
are logged, never returned to the caller.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class AppError(Exception):
    status_code: int = 500
    message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message

    def body(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message}


class ValidationError(AppError):
    """Client input fails declared constraints; lists every failing field."""

    status_code = 400
    message = "Validation error"

    def __init__(self, errors: List[Dict[str, Any]]) -> None:
        super().__init__()
        self.errors = errors

    def body(self) -> Dict[str, Any]:
        return {"success": False, "errors": self.errors}


class DuplicateUser(AppError):
    # Los clientes esperan 200 con success=false
    status_code = 200
    message = "User already exists"


class InvalidCredentials(AppError):
    status_code = 404
    message = "Please enter correct login credentials."


class MissingToken(AppError):
    status_code = 401
    message = "Please authenticate using a valid token."


class InvalidToken(AppError):
    status_code = 401
    message = "Please authenticate using a valid token."


class NotFound(AppError):
    status_code = 404
    message = "Not Found."


class Forbidden(AppError):
    status_code = 401
    message = "Action not allowed."


class InternalError(AppError):
    status_code = 500
    message = "Internal Server Error"


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _with_req_id(request: Request, body: Dict[str, Any]) -> Dict[str, Any]:
    rid = _req_id(request)
    if rid:
        body["request_id"] = rid
    return body


def validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Normalize pydantic error dicts into `{field, msg, location}` items."""
    out: List[Dict[str, Any]] = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ())]
        location = loc[0] if len(loc) > 1 else "body"
        field = ".".join(loc[1:]) if len(loc) > 1 else (loc[0] if loc else "")
        out.append({"field": field, "msg": err.get("msg", "Invalid value"), "location": location})
    return out


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("notes.errors")

    @app.exception_handler(AppError)
    async def _app_error_handler(request: Request, exc: AppError):
        if isinstance(exc, InternalError):
            log.error("Internal error request_id=%s: %s", _req_id(request), exc.__cause__ or exc)
        return JSONResponse(status_code=exc.status_code, content=_with_req_id(request, exc.body()))

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        body: Dict[str, Any] = {"success": False, "error": exc.detail or "HTTP error"}
        return JSONResponse(status_code=exc.status_code, content=_with_req_id(request, body))

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        err = ValidationError(validation_errors(exc.errors()))
        return JSONResponse(status_code=err.status_code, content=_with_req_id(request, err.body()))

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        rid = _req_id(request)
        log.exception("Unhandled error request_id=%s", rid)
        return JSONResponse(status_code=500, content=_with_req_id(request, InternalError().body()))
