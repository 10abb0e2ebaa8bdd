"""The ``{success, message, data, meta?}`` JSON envelope used by every route."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def ok(data: Any = None, message: str = "Success", status_code: int = 200, meta: dict | None = None) -> JSONResponse:
    content = {"success": True, "message": message, "data": data}
    if meta is not None:
        content["meta"] = meta
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def created(data: Any = None, message: str = "Created successfully") -> JSONResponse:
    return ok(data, message=message, status_code=201)


def paginated(collection: str, items: list, meta: dict, message: str = "Success") -> JSONResponse:
    """List responses carry the page twice: inside ``data`` and as ``meta``."""
    return ok({collection: items, "pagination": meta}, message=message, meta=meta)


def failure(message: str, status_code: int, errors: Any = None) -> JSONResponse:
    content = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))
