"""Interface layer error translation.

Every DomainError becomes a JSON body `{"kind": ..., "detail": ...}` with a
status code chosen by its kind.
"""

import logfire
from fastapi import Request
from fastapi.responses import JSONResponse

from tide.domain.error import DomainError
from tide.domain.value import ErrorKind

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.SELECTION: 409,
    ErrorKind.ILLEGAL_TRANSITION: 409,
    ErrorKind.SELF_ACTION: 403,
    ErrorKind.INSUFFICIENT_BALANCE: 409,
}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate a DomainError into a typed JSON error response."""
    logfire.info(
        "Command failed",
        kind=exc.kind.value,
        path=request.url.path,
        detail=str(exc),
    )
    return JSONResponse(
        status_code=STATUS_BY_KIND[exc.kind],
        content={"kind": exc.kind.value, "detail": str(exc)},
    )
