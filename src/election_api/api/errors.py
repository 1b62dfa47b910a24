"""Map voting domain failures onto HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from election_api.lib.voting import (
    InvalidInputError,
    NotEligibleError,
    NotEnrolledError,
    NotFoundError,
    UnauthorizedError,
    UnknownCandidateError,
    VotingError,
)

_STATUS_BY_ERROR: dict[type[VotingError], int] = {
    InvalidInputError: 400,
    NotEligibleError: 400,
    UnknownCandidateError: 400,
    UnauthorizedError: 401,
    NotEnrolledError: 403,
    NotFoundError: 404,
}

# State and uniqueness failures
_DEFAULT_STATUS = 409


def status_for(error: VotingError) -> int:
    """Return the HTTP status code for a voting error."""
    for error_type in type(error).__mro__:
        status = _STATUS_BY_ERROR.get(error_type)
        if status is not None:
            return status
    return _DEFAULT_STATUS


async def voting_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, VotingError):
        raise exc
    status = status_for(exc)
    logger.debug("Rejected {} {}: {} ({})", request.method, request.url.path, exc.code, status)
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(
        status_code=status,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the VotingError and ValueError handlers on ``app``."""

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc)},
        )

    app.add_exception_handler(VotingError, voting_error_handler)
