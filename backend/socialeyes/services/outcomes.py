"""Typed outcomes returned by the service layer.

Services never raise for expected rejections (missing rows, role failures,
invalid transitions). They return one of the outcome values below and the
routers turn them into HTTP responses with :func:`unwrap`.
"""
from dataclasses import dataclass, field
from typing import Any, NoReturn, Optional, Union

from fastapi import HTTPException, status

EVENT_NOT_FOUND = "Event couldn't be found"
USER_NOT_FOUND = "User couldn't be found"
GROUP_NOT_FOUND = "Group couldn't be found"
VENUE_NOT_FOUND = "Venue couldn't be found"
FORBIDDEN = "Forbidden"
BAD_REQUEST = "Bad Request"


@dataclass(frozen=True)
class Success:
    payload: Any = None
    status_code: int = status.HTTP_200_OK


@dataclass(frozen=True)
class NotFound:
    message: str
    status_code: int = field(default=status.HTTP_404_NOT_FOUND, init=False)


@dataclass(frozen=True)
class Forbidden:
    message: str = FORBIDDEN
    status_code: int = field(default=status.HTTP_403_FORBIDDEN, init=False)


@dataclass(frozen=True)
class BadRequest:
    message: str = BAD_REQUEST
    errors: Optional[dict[str, str]] = None
    status_code: int = field(default=status.HTTP_400_BAD_REQUEST, init=False)


Rejection = Union[NotFound, Forbidden, BadRequest]
Outcome = Union[Success, Rejection]


def error_body(outcome: Rejection) -> dict[str, Any]:
    body: dict[str, Any] = {"message": outcome.message, "statusCode": outcome.status_code}
    if isinstance(outcome, BadRequest) and outcome.errors:
        body["errors"] = dict(outcome.errors)
    return body


def raise_for(outcome: Rejection) -> NoReturn:
    raise HTTPException(status_code=outcome.status_code, detail=error_body(outcome))


def unwrap(outcome: Outcome) -> Any:
    """Return the payload of a Success, raise HTTPException for anything else."""
    if isinstance(outcome, Success):
        return outcome.payload
    raise_for(outcome)
