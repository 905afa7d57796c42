from __future__ import annotations

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy.orm import Session

from recruitment.core import validation as check
from recruitment.core.errors import DuplicatePersonError, FieldValidationError
from recruitment.core.passwords import hash_password
from recruitment.db.models import JobApplication, Person
from recruitment.db.repositories import Repository
from recruitment.db.session import transaction
from recruitment.types import (
    INITIAL_STATUS,
    AvailabilityEntry,
    ExpertiseEntry,
    Role,
    StatusUpdateResult,
)

logger = logging.getLogger(__name__)

MAX_YEARS_OF_EXPERIENCE = 50
ONE_DECIMAL = Decimal("0.1")


def serialize_application(application: JobApplication) -> dict[str, Any]:
    return {
        "job_application_id": application.job_application_id,
        "person_id": application.person_id,
        "status": application.status,
    }


def serialize_person(person: Person) -> dict[str, Any]:
    return {
        "person_id": person.person_id,
        "name": person.name,
        "surname": person.surname,
        "email": person.email,
        "username": person.username,
        "role": person.role.name.lower(),
    }


class ApplicationWorkflow:
    """Job-application lifecycle and account operations.

    The workflow is handed an open session and never reaches for a global one.
    Every public operation validates its input first and then does all of its
    persistence work inside a single ``transaction`` scope.
    """

    def __init__(self, session: Session):
        self.session = session
        self.repo = Repository(session)

    # Accounts

    def login(self, username: str) -> Person | None:
        check.is_username(username)
        with transaction(self.session):
            return self.repo.find_person_by_username(username)

    def find_person(self, person_id: int) -> Person | None:
        check.is_positive_integer(person_id, "person_id")
        with transaction(self.session):
            return self.repo.find_person_by_id(person_id)

    def create_account(
        self,
        *,
        name: str,
        surname: str,
        pnr: str,
        email: str,
        username: str,
        password: str,
        role: Role = Role.APPLICANT,
    ) -> Person:
        check.is_person_name(name, "name")
        check.is_person_name(surname, "surname")
        check.is_pnr(pnr)
        check.is_email(email, "email")
        check.is_username(username)
        check.is_string(password, "password")
        check.is_length(password, 8, 255, "password")

        email = email.strip().lower()
        with transaction(self.session):
            conflicts = self.repo.find_person_conflicts(username=username, pnr=pnr, email=email)
            if conflicts:
                raise DuplicatePersonError(conflicts)
            person = self.repo.create_person(
                name=name,
                surname=surname,
                pnr=pnr,
                email=email,
                username=username,
                password_hash=hash_password(password),
                role=role,
            )
        logger.info("Created %s account person_id=%s", role.name.lower(), person.person_id)
        return person

    # Applications

    def submit_application(
        self,
        expertise: list[dict[str, Any]],
        availability: list[dict[str, Any]],
        person_id: int,
    ) -> dict[str, Any]:
        check.is_array(expertise, "expertise")
        check.is_length(expertise, 1, float("inf"), "expertise")
        check.is_array(availability, "availability")
        check.is_length(availability, 1, float("inf"), "availability")
        check.is_positive_integer(person_id, "person_id")

        competences = [_parse_expertise(entry, index) for index, entry in enumerate(expertise)]
        periods = [_parse_availability(entry, index) for index, entry in enumerate(availability)]

        with transaction(self.session):
            for entry in competences:
                years = Decimal(str(entry.yoe)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
                self.repo.create_competence_profile(person_id, entry.competence_id, years)
            for entry in periods:
                self.repo.create_availability(
                    person_id,
                    date.fromisoformat(entry.from_date),
                    date.fromisoformat(entry.to_date),
                )
            application = self.repo.create_job_application(person_id, INITIAL_STATUS)

        logger.info(
            "Submitted job_application_id=%s person_id=%s competences=%s periods=%s",
            application.job_application_id,
            person_id,
            len(competences),
            len(periods),
        )
        return serialize_application(application)

    def list_applications(self) -> list[dict[str, Any]]:
        # One owner lookup per row; batch by person id if this ever gets hot.
        with transaction(self.session):
            enriched = []
            for application in self.repo.list_job_applications():
                person = self.repo.find_person_by_id(application.person_id)
                item = serialize_application(application)
                item["name"] = person.name if person else ""
                item["surname"] = person.surname if person else ""
                enriched.append(item)
        return enriched

    def list_applications_for_person(self, person_id: int) -> list[dict[str, Any]]:
        check.is_positive_integer(person_id, "person_id")
        with transaction(self.session):
            rows = self.repo.list_job_applications_for_person(person_id)
        return [serialize_application(row) for row in rows]

    def get_application_detail(
        self,
        job_application_id: int,
        person_id: int,
        status: str,
        name: str,
        surname: str,
    ) -> dict[str, Any]:
        check.is_positive_integer(job_application_id, "job_application_id")
        check.is_positive_integer(person_id, "person_id")
        check.is_status(status)
        check.not_empty_string(name, "name")
        check.is_alpha(name, "name")
        check.not_empty_string(surname, "surname")
        check.is_alpha(surname, "surname")

        with transaction(self.session):
            competences = []
            for profile in self.repo.list_competence_profiles_by_person(person_id):
                competence = self.repo.get_competence(profile.competence_id)
                competences.append(
                    {
                        "yoe": float(profile.years_of_experience),
                        "name": competence.name if competence else None,
                    }
                )
            availabilities = [
                {"to_date": period.to_date.isoformat(), "from_date": period.from_date.isoformat()}
                for period in self.repo.list_availabilities_by_person(person_id)
            ]

        return {
            "job_application_id": job_application_id,
            "person_id": person_id,
            "status": status,
            "name": name,
            "surname": surname,
            "competences": competences,
            "availabilities": availabilities,
        }

    def update_application_status(self, job_application_id: int, status: str) -> StatusUpdateResult:
        check.is_status(status)
        check.is_positive_integer(job_application_id, "job_application_id")

        with transaction(self.session):
            application = self.repo.update_job_application_status(job_application_id, status)

        if application is None:
            logger.info("Status update for unknown job_application_id=%s", job_application_id)
            return StatusUpdateResult(updated=False)

        logger.info("job_application_id=%s moved to %s", job_application_id, status)
        return StatusUpdateResult(updated=True, record=serialize_application(application))

    def list_competences(self) -> list[dict[str, Any]]:
        with transaction(self.session):
            rows = self.repo.list_competences()
        return [{"competence_id": row.competence_id, "name": row.name} for row in rows]


def _parse_expertise(entry: Any, index: int) -> ExpertiseEntry:
    if not isinstance(entry, dict):
        raise FieldValidationError(f"expertise[{index}] must be an object", field="expertise")
    competence_id = entry.get("competence_id")
    yoe = entry.get("yoe")
    check.is_positive_integer(competence_id, f"expertise[{index}].competence_id")
    check.is_number_between(yoe, 0, MAX_YEARS_OF_EXPERIENCE, f"expertise[{index}].yoe")
    return ExpertiseEntry(competence_id=int(competence_id), yoe=yoe)


def _parse_availability(entry: Any, index: int) -> AvailabilityEntry:
    if not isinstance(entry, dict):
        raise FieldValidationError(f"availability[{index}] must be an object", field="availability")
    from_date = entry.get("from_date")
    to_date = entry.get("to_date")
    check.is_date_string(from_date, f"availability[{index}].from_date")
    check.is_date_string(to_date, f"availability[{index}].to_date")
    if from_date > to_date:
        raise FieldValidationError(
            f"availability[{index}].from_date must not be after to_date", field="availability"
        )
    return AvailabilityEntry(from_date=from_date, to_date=to_date)
