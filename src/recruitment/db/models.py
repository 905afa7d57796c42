from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from recruitment.db.base import Base
from recruitment.types import INITIAL_STATUS, Role


class Person(Base):
    __tablename__ = "person"

    person_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    surname: Mapped[str] = mapped_column(String(255), nullable=False)
    pnr: Mapped[str] = mapped_column(String(12), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role_id: Mapped[int] = mapped_column(Integer, default=int(Role.APPLICANT), nullable=False)
    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)

    @property
    def role(self) -> Role:
        return Role(self.role_id)


class Competence(Base):
    __tablename__ = "competence"

    competence_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)


class CompetenceProfile(Base):
    __tablename__ = "competence_profile"
    __table_args__ = (
        CheckConstraint(
            "years_of_experience >= 0 AND years_of_experience <= 50", name="years_of_experience_range"
        ),
    )

    competence_profile_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    person_id: Mapped[int] = mapped_column(ForeignKey("person.person_id"), index=True, nullable=False)
    competence_id: Mapped[int] = mapped_column(ForeignKey("competence.competence_id"), nullable=False)
    years_of_experience: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False)


class Availability(Base):
    __tablename__ = "availability"
    __table_args__ = (CheckConstraint("from_date <= to_date", name="period_order"),)

    availability_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    person_id: Mapped[int] = mapped_column(ForeignKey("person.person_id"), index=True, nullable=False)
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date] = mapped_column(Date, nullable=False)


class JobApplication(Base):
    __tablename__ = "job_application"

    job_application_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    person_id: Mapped[int] = mapped_column(ForeignKey("person.person_id"), index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=INITIAL_STATUS, nullable=False)
