from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from recruitment.core.auth import SessionGate
from recruitment.core.errors import AuthorizationDenied
from recruitment.core.workflow import ApplicationWorkflow
from recruitment.db.session import get_db_session
from recruitment.types import SessionIdentity


def get_db() -> Generator[Session, None, None]:
    yield from get_db_session()


def get_workflow(db: Session = Depends(get_db)) -> ApplicationWorkflow:
    return ApplicationWorkflow(db)


def get_gate() -> SessionGate:
    return SessionGate()


def require_login(request: Request, gate: SessionGate = Depends(get_gate)) -> SessionIdentity:
    result = gate.check_login(request.cookies.get(gate.cookie_name))
    if not result.ok:
        raise AuthorizationDenied(result.error, clear_cookie=result.clear_cookie)
    request.state.user = result.identity
    return result.identity


def require_recruiter(
    request: Request,
    gate: SessionGate = Depends(get_gate),
    workflow: ApplicationWorkflow = Depends(get_workflow),
) -> SessionIdentity:
    result = gate.check_recruiter(request.cookies.get(gate.cookie_name), workflow.find_person)
    if not result.ok:
        raise AuthorizationDenied(result.error, clear_cookie=result.clear_cookie)
    request.state.user = result.identity
    return result.identity
