from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from recruitment.db.models import (
    Availability,
    Competence,
    CompetenceProfile,
    JobApplication,
    Person,
)
from recruitment.types import Role


class Repository:
    """CRUD primitives over the recruitment tables.

    Methods flush but never commit; the caller's transaction scope decides
    whether the work is kept.
    """

    def __init__(self, session: Session):
        self.session = session

    def find_person_by_username(self, username: str) -> Person | None:
        return self.session.scalar(select(Person).where(Person.username == username))

    def find_person_by_id(self, person_id: int) -> Person | None:
        return self.session.get(Person, person_id)

    def find_person_conflicts(self, *, username: str, pnr: str, email: str) -> list[str]:
        statement = select(Person).where(
            or_(Person.username == username, Person.pnr == pnr, Person.email == email)
        )
        conflicts: list[str] = []
        for person in self.session.scalars(statement).all():
            if person.username == username and "username" not in conflicts:
                conflicts.append("username")
            if person.pnr == pnr and "pnr" not in conflicts:
                conflicts.append("pnr")
            if person.email == email and "email" not in conflicts:
                conflicts.append("email")
        return conflicts

    def create_person(
        self,
        *,
        name: str,
        surname: str,
        pnr: str,
        email: str,
        username: str,
        password_hash: str,
        role: Role,
    ) -> Person:
        person = Person(
            name=name,
            surname=surname,
            pnr=pnr,
            email=email,
            username=username,
            password=password_hash,
            role_id=int(role),
        )
        self.session.add(person)
        self.session.flush()
        return person

    def create_competence_profile(
        self, person_id: int, competence_id: int, years_of_experience: Decimal
    ) -> CompetenceProfile:
        profile = CompetenceProfile(
            person_id=person_id,
            competence_id=competence_id,
            years_of_experience=years_of_experience,
        )
        self.session.add(profile)
        return profile

    def create_availability(self, person_id: int, from_date: date, to_date: date) -> Availability:
        period = Availability(person_id=person_id, from_date=from_date, to_date=to_date)
        self.session.add(period)
        return period

    def create_job_application(self, person_id: int, status: str) -> JobApplication:
        application = JobApplication(person_id=person_id, status=status)
        self.session.add(application)
        self.session.flush()
        return application

    def get_job_application(self, job_application_id: int) -> JobApplication | None:
        return self.session.get(JobApplication, job_application_id)

    def list_job_applications(self) -> list[JobApplication]:
        statement = select(JobApplication).order_by(JobApplication.job_application_id.asc())
        return list(self.session.scalars(statement).all())

    def list_job_applications_for_person(self, person_id: int) -> list[JobApplication]:
        statement = (
            select(JobApplication)
            .where(JobApplication.person_id == person_id)
            .order_by(JobApplication.job_application_id.asc())
        )
        return list(self.session.scalars(statement).all())

    def update_job_application_status(self, job_application_id: int, status: str) -> JobApplication | None:
        application = self.get_job_application(job_application_id)
        if application is None:
            return None
        application.status = status
        self.session.flush()
        return application

    def list_competences(self) -> list[Competence]:
        statement = select(Competence).order_by(Competence.competence_id.asc())
        return list(self.session.scalars(statement).all())

    def get_competence(self, competence_id: int) -> Competence | None:
        return self.session.get(Competence, competence_id)

    def list_competence_profiles_by_person(self, person_id: int) -> list[CompetenceProfile]:
        statement = (
            select(CompetenceProfile)
            .where(CompetenceProfile.person_id == person_id)
            .order_by(CompetenceProfile.competence_profile_id.asc())
        )
        return list(self.session.scalars(statement).all())

    def list_availabilities_by_person(self, person_id: int) -> list[Availability]:
        statement = (
            select(Availability)
            .where(Availability.person_id == person_id)
            .order_by(Availability.availability_id.asc())
        )
        return list(self.session.scalars(statement).all())
