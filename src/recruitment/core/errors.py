from __future__ import annotations


class RecruitmentError(Exception):
    """Base class for expected, client-recoverable failures."""


class FieldValidationError(RecruitmentError, ValueError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class DuplicatePersonError(RecruitmentError):
    def __init__(self, fields: list[str]):
        super().__init__(f"person already exists with the same {', '.join(fields)}")
        self.fields = fields


class AuthorizationDenied(RecruitmentError):
    def __init__(self, reason: str, *, clear_cookie: bool = False):
        super().__init__(reason)
        self.reason = reason
        self.clear_cookie = clear_cookie
