# app/api/errors.py
import logging
from typing import Any, Dict, List

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_snake

from app.services.results import LedgerResult

logger = logging.getLogger(__name__)

USER_ID_NOT_ALLOWED = "USER_ID_NOT_ALLOWED"


def raise_for_failure(result: LedgerResult) -> Any:
    """Return the payload of a successful result, or raise the matching HTTPException."""
    if result.ok:
        return result.value
    failure = result.failure
    raise HTTPException(status_code=failure.status_code, detail=failure.to_detail())


def _field_name(loc: List[Any]) -> str:
    # ("body", "lockDays") -> "lock_days"; ("query", "limit") -> "limit"
    names = [part for part in loc if isinstance(part, str) and part not in ("body", "query", "path")]
    return to_snake(names[-1]) if names else ""


def validation_error_detail(errors: List[Dict[str, Any]]) -> Dict[str, str]:
    """
    Collapse Pydantic's error list into one {"error", "code"} pair.

    A body carrying a user id wins over everything else; otherwise the first
    error decides, as MISSING_<FIELD> or INVALID_<FIELD>.
    """
    for error in errors:
        if error.get("type") == "user_id_not_allowed":
            return {"error": "User ID cannot be provided in request body", "code": USER_ID_NOT_ALLOWED}

    if not errors:
        return {"error": "Invalid request", "code": "VALIDATION_ERROR"}

    first = errors[0]
    field = _field_name(list(first.get("loc", ())))
    if not field:
        return {"error": first.get("msg", "Invalid request body"), "code": "INVALID_BODY"}
    if first.get("type") == "missing":
        return {"error": f"{field} is required", "code": f"MISSING_{field.upper()}"}
    return {"error": f"Invalid {field}: {first.get('msg', 'invalid value')}", "code": f"INVALID_{field.upper()}"}


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    detail = validation_error_detail(list(exc.errors()))
    logger.info(f"Rejected {request.method} {request.url.path}: {detail['code']}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})
