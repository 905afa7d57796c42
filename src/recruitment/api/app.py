from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recruitment.api.routes import account_router, application_router
from recruitment.config import get_settings
from recruitment.core.auth import SessionGate
from recruitment.core.errors import AuthorizationDenied, DuplicatePersonError, FieldValidationError
from recruitment.db.init import init_database
from recruitment.logging_config import configure_logging

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(FieldValidationError)
    async def _validation_error(request: Request, exc: FieldValidationError) -> JSONResponse:
        return JSONResponse({"error": exc.message}, status_code=400)

    @app.exception_handler(RequestValidationError)
    async def _malformed_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "invalid request") if errors else "invalid request"
        return JSONResponse({"error": message}, status_code=400)

    @app.exception_handler(DuplicatePersonError)
    async def _duplicate_person(request: Request, exc: DuplicatePersonError) -> JSONResponse:
        return JSONResponse({"error": "account_exists", "fields": exc.fields}, status_code=409)

    @app.exception_handler(AuthorizationDenied)
    async def _denied(request: Request, exc: AuthorizationDenied) -> JSONResponse:
        response = JSONResponse({"error": exc.reason}, status_code=403)
        if exc.clear_cookie:
            SessionGate().revoke_session(response)
        return response

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": "Operation failed"}, status_code=500)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def _startup() -> None:
        init_database()

    @app.get("/health")
    def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    register_exception_handlers(app)
    app.include_router(account_router)
    app.include_router(application_router)
    return app
