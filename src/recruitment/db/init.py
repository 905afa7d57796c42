from __future__ import annotations

from recruitment.config import get_settings
from recruitment.db.base import Base
from recruitment.db.session import SessionLocal, engine
from recruitment.db import models  # noqa: F401
from recruitment.db.seed import seed_competences


def ensure_data_directories() -> None:
    get_settings().data_dir.mkdir(parents=True, exist_ok=True)


def init_database() -> dict[str, int]:
    ensure_data_directories()
    Base.metadata.create_all(bind=engine)

    with SessionLocal() as session:
        inserted = seed_competences(session)
    return {"seeded_competences": inserted}
