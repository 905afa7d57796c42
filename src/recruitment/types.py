from __future__ import annotations

from enum import IntEnum
from typing import Any, Literal

from pydantic import BaseModel

ApplicationStatus = Literal["unhandled", "rejected", "accepted"]
APPLICATION_STATUSES: tuple[str, ...] = ("unhandled", "rejected", "accepted")
STATUS_PATTERN = r"^(unhandled|rejected|accepted)$"
INITIAL_STATUS: ApplicationStatus = "unhandled"


class Role(IntEnum):
    """Account role as stored in ``person.role_id``."""

    RECRUITER = 1
    APPLICANT = 2

    @property
    def is_privileged(self) -> bool:
        return self is Role.RECRUITER


class ExpertiseEntry(BaseModel):
    competence_id: int
    yoe: float


class AvailabilityEntry(BaseModel):
    from_date: str
    to_date: str


class SessionIdentity(BaseModel):
    id: int
    username: str


class StatusUpdateResult(BaseModel):
    updated: bool
    record: dict[str, Any] | None = None

