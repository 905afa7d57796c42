from __future__ import annotations

import json

import typer
import uvicorn

from recruitment.api.app import create_app
from recruitment.config import get_settings
from recruitment.core.errors import DuplicatePersonError, FieldValidationError
from recruitment.core.workflow import ApplicationWorkflow, serialize_person
from recruitment.db.init import init_database
from recruitment.db.session import SessionLocal
from recruitment.logging_config import configure_logging
from recruitment.types import APPLICATION_STATUSES, Role

app = typer.Typer(help="Recruitment CLI")
account_app = typer.Typer(help="Manage accounts")
competence_app = typer.Typer(help="Competence reference data")
application_app = typer.Typer(help="Review job applications")

app.add_typer(account_app, name="account")
app.add_typer(competence_app, name="competences")
app.add_typer(application_app, name="applications")

_INITIALIZED = False


def ensure_initialized() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    init_database()
    _INITIALIZED = True


def _echo(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2))


@app.command("init")
def init_cmd() -> None:
    """Create tables and seed competences."""
    configure_logging()
    result = init_database()
    _echo({"ok": True, **result})


@account_app.command("create-recruiter")
def account_create_recruiter(
    name: str = typer.Option(..., "--name"),
    surname: str = typer.Option(..., "--surname"),
    pnr: str = typer.Option(..., "--pnr"),
    email: str = typer.Option(..., "--email"),
    username: str = typer.Option(..., "--username"),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        workflow = ApplicationWorkflow(db)
        try:
            person = workflow.create_account(
                name=name,
                surname=surname,
                pnr=pnr,
                email=email,
                username=username,
                password=password,
                role=Role.RECRUITER,
            )
        except (FieldValidationError, DuplicatePersonError) as exc:
            raise typer.BadParameter(str(exc)) from exc
        _echo(serialize_person(person))


@competence_app.command("list")
def competences_list() -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        _echo(ApplicationWorkflow(db).list_competences())


@application_app.command("list")
def applications_list() -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        _echo(ApplicationWorkflow(db).list_applications())


@application_app.command("set-status")
def applications_set_status(
    application_id: int = typer.Option(..., "--id"),
    status: str = typer.Option(..., "--status", help=f"One of {', '.join(APPLICATION_STATUSES)}"),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        try:
            result = ApplicationWorkflow(db).update_application_status(application_id, status)
        except FieldValidationError as exc:
            raise typer.BadParameter(str(exc)) from exc
        if not result.updated:
            raise typer.BadParameter(f"job application {application_id} not found")
        _echo(result.record)


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
    log_level: str | None = typer.Option(None, "--log-level"),
) -> None:
    configure_logging(log_level)
    ensure_initialized()
    settings = get_settings()
    app_instance = create_app()
    uvicorn.run(app_instance, host=host or settings.app_host, port=port or settings.app_port)
