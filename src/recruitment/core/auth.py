"""Cookie session issuing and verification.

A session is an HS256 JWT carrying ``{id, username, iat, exp}``, delivered as an
HTTP-only cookie whose max-age matches the token lifetime. Nothing is stored
server side; revoking a session only clears the cookie.

Verification never raises. Every check returns an :class:`AuthResult`; the HTTP
layer decides how to answer a failed one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

import jwt
from starlette.responses import Response

from recruitment.config import Settings, get_settings
from recruitment.types import Role, SessionIdentity

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

SESSION_INVALID = "auth.login_session_invalid"
SESSION_EXPIRED = "auth.user_login_expired"
PERMISSION_DENIED = "auth.permission_denied"


class SessionOwner(Protocol):
    person_id: int
    username: str


class RoleBearer(Protocol):
    @property
    def role(self) -> Role: ...


@dataclass(slots=True)
class AuthResult:
    ok: bool
    identity: SessionIdentity | None = None
    error: str | None = None
    clear_cookie: bool = False

    def __bool__(self) -> bool:
        return self.ok


class SessionGate:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    @property
    def cookie_name(self) -> str:
        return self.settings.session_cookie_name

    def issue_token(self, person: SessionOwner, *, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "id": person.person_id,
            "username": person.username,
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=self.settings.session_ttl_min),
        }
        return jwt.encode(payload, self.settings.secret_key, algorithm=ALGORITHM)

    def issue_session(self, person: SessionOwner, response: Response) -> str:
        token = self.issue_token(person)
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=self.settings.session_max_age_sec,
            httponly=True,
            secure=self.settings.session_cookie_secure,
            samesite="lax",
        )
        return token

    def revoke_session(self, response: Response) -> None:
        response.delete_cookie(key=self.cookie_name, httponly=True, samesite="lax")

    def decode_token(self, token: str) -> SessionIdentity:
        payload = jwt.decode(
            token,
            self.settings.secret_key,
            algorithms=[ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
        person_id = payload.get("id")
        username = payload.get("username")
        if not isinstance(person_id, int) or not isinstance(username, str):
            raise jwt.InvalidTokenError("session claims are malformed")
        return SessionIdentity(id=person_id, username=username)

    def check_login(self, token: str | None) -> AuthResult:
        if not token:
            return AuthResult(ok=False, error=SESSION_INVALID)
        try:
            identity = self.decode_token(token)
        except jwt.InvalidTokenError as exc:
            logger.info("Rejected session token: %s", exc)
            return AuthResult(ok=False, error=SESSION_EXPIRED, clear_cookie=True)
        return AuthResult(ok=True, identity=identity)

    def check_recruiter(
        self,
        token: str | None,
        find_person: Callable[[int], RoleBearer | None],
    ) -> AuthResult:
        result = self.check_login(token)
        if not result.ok:
            return result

        try:
            person = find_person(result.identity.id)
        except Exception:
            logger.exception("Role lookup failed for person_id=%s", result.identity.id)
            return AuthResult(ok=False, error=SESSION_EXPIRED, clear_cookie=True)
        if person is None or not person.role.is_privileged:
            logger.warning("Permission denied for person_id=%s", result.identity.id)
            return AuthResult(ok=False, error=PERMISSION_DENIED, clear_cookie=True)
        return result
