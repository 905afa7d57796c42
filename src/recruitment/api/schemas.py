"""Request and response bodies.

Request models accept loosely typed fields; the validation layer checks every
value and answers with field-named 400 errors.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SignInRequest(BaseModel):
    username: Any = None
    password: Any = None


class SignUpRequest(BaseModel):
    name: Any = None
    surname: Any = None
    pnr: Any = None
    email: Any = None
    username: Any = None
    password: Any = None


class PersonResponse(BaseModel):
    person_id: int
    name: str
    surname: str
    email: str
    username: str
    role: str


class ApplyRequest(BaseModel):
    expertise: Any = None
    availability: Any = None


class ApplicationDetailRequest(BaseModel):
    job_application_id: Any = None
    person_id: Any = None
    status: Any = None
    name: Any = None
    surname: Any = None


class StatusUpdateRequest(BaseModel):
    job_application_id: Any = None
    status: Any = None


class CompetenceResponse(BaseModel):
    competence_id: int
    name: str


class ApplicationResponse(BaseModel):
    job_application_id: int
    person_id: int
    status: str


class ApplicationListItem(ApplicationResponse):
    name: str
    surname: str


class CompetenceExperience(BaseModel):
    yoe: float
    name: str | None


class AvailabilityPeriodResponse(BaseModel):
    to_date: str
    from_date: str


class ApplicationDetailResponse(ApplicationListItem):
    competences: list[CompetenceExperience] = Field(default_factory=list)
    availabilities: list[AvailabilityPeriodResponse] = Field(default_factory=list)
