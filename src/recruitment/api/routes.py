from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from recruitment.api.deps import get_gate, get_workflow, require_login, require_recruiter
from recruitment.api.schemas import (
    ApplicationDetailRequest,
    ApplicationDetailResponse,
    ApplicationListItem,
    ApplicationResponse,
    ApplyRequest,
    CompetenceResponse,
    PersonResponse,
    SignInRequest,
    SignUpRequest,
    StatusUpdateRequest,
)
from recruitment.core import validation as check
from recruitment.core.auth import SessionGate
from recruitment.core.passwords import verify_password
from recruitment.core.workflow import ApplicationWorkflow, serialize_person
from recruitment.types import SessionIdentity

account_router = APIRouter(prefix="/account", tags=["account"])
application_router = APIRouter(prefix="/application", tags=["application"])


def success(body: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse({"success": jsonable_encoder(body)}, status_code=status_code)


def failure(reason: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": reason}, status_code=status_code)


@account_router.post("/sign_in")
def sign_in(
    payload: SignInRequest,
    workflow: ApplicationWorkflow = Depends(get_workflow),
    gate: SessionGate = Depends(get_gate),
) -> JSONResponse:
    check.not_empty_string(payload.password, "password")
    person = workflow.login(payload.username)
    if person is None or not verify_password(payload.password, person.password):
        return failure("invalid_credentials", 401)

    response = success(PersonResponse.model_validate(serialize_person(person)))
    gate.issue_session(person, response)
    return response


@account_router.post("/sign_up")
def sign_up(
    payload: SignUpRequest,
    workflow: ApplicationWorkflow = Depends(get_workflow),
) -> JSONResponse:
    person = workflow.create_account(
        name=payload.name,
        surname=payload.surname,
        pnr=payload.pnr,
        email=payload.email,
        username=payload.username,
        password=payload.password,
    )
    return success(PersonResponse.model_validate(serialize_person(person)))


@account_router.post("/sign_out")
def sign_out(gate: SessionGate = Depends(get_gate)) -> JSONResponse:
    response = success("signed_out")
    gate.revoke_session(response)
    return response


@account_router.get("/id")
def current_person(
    identity: SessionIdentity = Depends(require_login),
    workflow: ApplicationWorkflow = Depends(get_workflow),
) -> JSONResponse:
    person = workflow.find_person(identity.id)
    if person is None:
        return failure("person_not_found", 404)
    return success(PersonResponse.model_validate(serialize_person(person)), status_code=201)


@application_router.post("/apply")
def apply(
    payload: ApplyRequest,
    identity: SessionIdentity = Depends(require_login),
    workflow: ApplicationWorkflow = Depends(get_workflow),
) -> JSONResponse:
    workflow.submit_application(payload.expertise, payload.availability, identity.id)
    return success({"message": "sent application"})


@application_router.get("/list_competences")
def list_competences(
    identity: SessionIdentity = Depends(require_login),
    workflow: ApplicationWorkflow = Depends(get_workflow),
) -> JSONResponse:
    rows = workflow.list_competences()
    return success([CompetenceResponse.model_validate(row) for row in rows])


@application_router.get("/my_applications")
def my_applications(
    identity: SessionIdentity = Depends(require_login),
    workflow: ApplicationWorkflow = Depends(get_workflow),
) -> JSONResponse:
    rows = workflow.list_applications_for_person(identity.id)
    return success([ApplicationResponse.model_validate(row) for row in rows])


@application_router.get("/list_applications")
def list_applications(
    identity: SessionIdentity = Depends(require_recruiter),
    workflow: ApplicationWorkflow = Depends(get_workflow),
) -> JSONResponse:
    rows = workflow.list_applications()
    return success([ApplicationListItem.model_validate(row) for row in rows])


@application_router.post("/get_application")
def get_application(
    payload: ApplicationDetailRequest,
    identity: SessionIdentity = Depends(require_recruiter),
    workflow: ApplicationWorkflow = Depends(get_workflow),
) -> JSONResponse:
    detail = workflow.get_application_detail(
        payload.job_application_id,
        payload.person_id,
        payload.status,
        payload.name,
        payload.surname,
    )
    return success(ApplicationDetailResponse.model_validate(detail))


@application_router.patch("/update_application")
def update_application(
    payload: StatusUpdateRequest,
    identity: SessionIdentity = Depends(require_recruiter),
    workflow: ApplicationWorkflow = Depends(get_workflow),
) -> JSONResponse:
    result = workflow.update_application_status(payload.job_application_id, payload.status)
    if not result.updated:
        return failure("status_not_found", 404)
    return success(ApplicationResponse.model_validate(result.record))
