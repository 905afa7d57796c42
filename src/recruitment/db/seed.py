from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from recruitment.db.models import Competence
from recruitment.db.session import transaction

COMPETENCES: list[str] = [
    "ticket sales",
    "lotteries",
    "roller coaster operation",
]


def seed_competences(session: Session) -> int:
    existing = set(session.scalars(select(Competence.name)).all())
    inserted = 0
    with transaction(session):
        for name in COMPETENCES:
            if name in existing:
                continue
            session.add(Competence(name=name))
            inserted += 1
    return inserted
