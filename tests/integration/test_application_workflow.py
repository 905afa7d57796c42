from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from recruitment.core.errors import DuplicatePersonError, FieldValidationError
from recruitment.core.passwords import verify_password
from recruitment.db.models import Availability, CompetenceProfile, JobApplication, Person
from recruitment.types import Role

EXPERTISE = [{"competence_id": 1, "yoe": 2}]
AVAILABILITY = [{"from_date": "2026-01-01", "to_date": "2026-01-10"}]


def _count(db, model) -> int:
    return db.scalar(select(func.count()).select_from(model))


def _assert_no_submission_rows(db) -> None:
    assert _count(db, CompetenceProfile) == 0
    assert _count(db, Availability) == 0
    assert _count(db, JobApplication) == 0


def test_submit_creates_unhandled_application_and_lists_it_with_owner_name(workflow, make_person) -> None:
    for index in range(4):
        make_person(f"filler{index}")
    owner = make_person("BrittaAnn", name="Britta", surname="Svensson")
    assert owner.person_id == 5

    application = workflow.submit_application(EXPERTISE, AVAILABILITY, 5)

    assert application["status"] == "unhandled"
    assert application["person_id"] == 5
    listed = workflow.list_applications()
    assert listed == [
        {
            "job_application_id": application["job_application_id"],
            "person_id": 5,
            "status": "unhandled",
            "name": "Britta",
            "surname": "Svensson",
        }
    ]


@pytest.mark.parametrize(
    ("expertise", "availability"),
    [
        ([], AVAILABILITY),
        (EXPERTISE, []),
        ([], []),
        (None, AVAILABILITY),
        (EXPERTISE, "2026-01-01"),
    ],
)
def test_submit_without_expertise_or_availability_creates_nothing(
    db, workflow, make_person, expertise, availability
) -> None:
    person = make_person("applicant")

    with pytest.raises(FieldValidationError):
        workflow.submit_application(expertise, availability, person.person_id)

    _assert_no_submission_rows(db)


@pytest.mark.parametrize(
    ("expertise", "availability", "field"),
    [
        ([{"competence_id": 1, "yoe": 51}], AVAILABILITY, "expertise[0].yoe"),
        ([{"competence_id": 1, "yoe": -1}], AVAILABILITY, "expertise[0].yoe"),
        ([{"competence_id": "1", "yoe": 2}], AVAILABILITY, "expertise[0].competence_id"),
        ([{"yoe": 2}], AVAILABILITY, "expertise[0].competence_id"),
        (EXPERTISE, [{"from_date": "2026-01-10", "to_date": "2026-01-01"}], "availability"),
        (EXPERTISE, [{"from_date": "01-01-2026", "to_date": "2026-01-10"}], "availability[0].from_date"),
        (["ticket sales"], AVAILABILITY, "expertise"),
    ],
)
def test_submit_rejects_malformed_entries_before_writing(
    db, workflow, make_person, expertise, availability, field
) -> None:
    person = make_person("applicant")

    with pytest.raises(FieldValidationError) as excinfo:
        workflow.submit_application(expertise, availability, person.person_id)

    assert excinfo.value.field == field
    _assert_no_submission_rows(db)


@pytest.mark.parametrize("yoe", [float("nan"), float("inf")])
def test_submit_rejects_non_finite_years(db, workflow, make_person, yoe) -> None:
    person = make_person("applicant")

    with pytest.raises(FieldValidationError) as excinfo:
        workflow.submit_application([{"competence_id": 1, "yoe": yoe}], AVAILABILITY, person.person_id)

    assert excinfo.value.field == "expertise[0].yoe"
    _assert_no_submission_rows(db)


def test_submit_rejects_negative_person_id(db, workflow) -> None:
    with pytest.raises(FieldValidationError, match="person_id must be positive integer"):
        workflow.submit_application(EXPERTISE, AVAILABILITY, -1)
    _assert_no_submission_rows(db)


def test_submit_ignores_caller_supplied_status(workflow, make_person) -> None:
    person = make_person("applicant")
    expertise = [{"competence_id": 2, "yoe": 1.5, "status": "accepted"}]
    availability = [{"from_date": "2026-03-01", "to_date": "2026-03-02", "status": "accepted"}]

    application = workflow.submit_application(expertise, availability, person.person_id)

    assert application["status"] == "unhandled"


def test_failed_write_rolls_back_whole_submission(db, workflow, make_person) -> None:
    person = make_person("applicant")
    expertise = [{"competence_id": 1, "yoe": 2}, {"competence_id": 999, "yoe": 1}]

    with pytest.raises(IntegrityError):
        workflow.submit_application(expertise, AVAILABILITY, person.person_id)

    _assert_no_submission_rows(db)


def test_list_applications_enriches_each_owner(workflow, make_person) -> None:
    people = [
        make_person("anna", name="Anna", surname="Berg"),
        make_person("bertil", name="Bertil", surname="Ek"),
        make_person("cecilia", name="Cecilia", surname="Lund"),
    ]
    for person in people:
        workflow.submit_application(EXPERTISE, AVAILABILITY, person.person_id)

    listed = workflow.list_applications()

    assert len(listed) == 3
    by_owner = {item["person_id"]: (item["name"], item["surname"]) for item in listed}
    assert by_owner == {person.person_id: (person.name, person.surname) for person in people}


def test_list_applications_is_empty_without_submissions(workflow) -> None:
    assert workflow.list_applications() == []


def test_detail_matches_submitted_rows_exactly(workflow, make_person) -> None:
    person = make_person("applicant", name="John", surname="Doe")
    expertise = [{"competence_id": 1, "yoe": 2}, {"competence_id": 3, "yoe": 4.25}]
    availability = [
        {"from_date": "2026-01-01", "to_date": "2026-01-10"},
        {"from_date": "2026-06-01", "to_date": "2026-08-31"},
    ]
    application = workflow.submit_application(expertise, availability, person.person_id)

    detail = workflow.get_application_detail(
        application["job_application_id"], person.person_id, "unhandled", "John", "Doe"
    )

    assert detail["job_application_id"] == application["job_application_id"]
    assert detail["name"] == "John"
    assert detail["competences"] == [
        {"yoe": 2.0, "name": "ticket sales"},
        {"yoe": 4.3, "name": "roller coaster operation"},
    ]
    assert detail["availabilities"] == [
        {"to_date": "2026-01-10", "from_date": "2026-01-01"},
        {"to_date": "2026-08-31", "from_date": "2026-06-01"},
    ]


@pytest.mark.parametrize(
    ("args", "field"),
    [
        ((-1, 1, "unhandled", "John", "Doe"), "job_application_id"),
        ((1, "1", "unhandled", "John", "Doe"), "person_id"),
        ((1, 1, "cancelled", "John", "Doe"), "status"),
        ((1, 1, "unhandled", "", "Doe"), "name"),
        ((1, 1, "unhandled", "John", "Doe2"), "surname"),
    ],
)
def test_detail_validates_echoed_fields(workflow, args, field) -> None:
    with pytest.raises(FieldValidationError) as excinfo:
        workflow.get_application_detail(*args)
    assert excinfo.value.field == field


def test_status_is_not_terminal(db, workflow, make_person) -> None:
    person = make_person("applicant")
    for _ in range(7):
        workflow.submit_application(EXPERTISE, AVAILABILITY, person.person_id)

    accepted = workflow.update_application_status(7, "accepted")
    assert accepted.updated
    assert accepted.record == {"job_application_id": 7, "person_id": person.person_id, "status": "accepted"}

    reverted = workflow.update_application_status(7, "unhandled")
    assert reverted.updated
    db.expire_all()
    assert db.get(JobApplication, 7).status == "unhandled"


@pytest.mark.parametrize("status", ["cancelled", "pending", "ACCEPTED", "", 3])
def test_illegal_status_leaves_stored_status_unchanged(db, workflow, make_person, status) -> None:
    person = make_person("applicant")
    application = workflow.submit_application(EXPERTISE, AVAILABILITY, person.person_id)

    with pytest.raises(FieldValidationError):
        workflow.update_application_status(application["job_application_id"], status)

    db.expire_all()
    assert db.get(JobApplication, application["job_application_id"]).status == "unhandled"


def test_status_update_for_unknown_application_reports_not_updated(workflow) -> None:
    result = workflow.update_application_status(42, "rejected")

    assert not result.updated
    assert result.record is None


def test_list_competences_returns_seeded_reference_data(workflow) -> None:
    assert workflow.list_competences() == [
        {"competence_id": 1, "name": "ticket sales"},
        {"competence_id": 2, "name": "lotteries"},
        {"competence_id": 3, "name": "roller coaster operation"},
    ]


def test_applications_for_person_only_returns_own(workflow, make_person) -> None:
    first = make_person("first")
    second = make_person("second")
    workflow.submit_application(EXPERTISE, AVAILABILITY, first.person_id)
    workflow.submit_application(EXPERTISE, AVAILABILITY, second.person_id)

    own = workflow.list_applications_for_person(first.person_id)

    assert [item["person_id"] for item in own] == [first.person_id]


def test_create_account_hashes_password_and_defaults_to_applicant(db, workflow) -> None:
    person = workflow.create_account(
        name="John",
        surname="Doe",
        pnr="199001011234",
        email="John@Test.com",
        username="johndoe",
        password="password123",
    )

    stored = db.get(Person, person.person_id)
    assert stored.role is Role.APPLICANT
    assert stored.email == "john@test.com"
    assert stored.password != "password123"
    assert verify_password("password123", stored.password)


def test_create_account_rejects_collisions(workflow, make_person) -> None:
    make_person("johndoe")

    with pytest.raises(DuplicatePersonError) as excinfo:
        workflow.create_account(
            name="John",
            surname="Doe",
            pnr="209001011234",
            email="johndoe@example.com",
            username="johndoe",
            password="password123",
        )
    assert excinfo.value.fields == ["username", "email"]


def test_login_validates_username_before_lookup(workflow, monkeypatch) -> None:
    def lookup(username: str):
        raise AssertionError("lookup must not happen")

    monkeypatch.setattr(workflow.repo, "find_person_by_username", lookup)

    with pytest.raises(FieldValidationError, match="username must be between 3 and 30"):
        workflow.login("ab")


def test_login_returns_none_for_unknown_username(workflow) -> None:
    assert workflow.login("nobody") is None


def test_create_account_rejects_username_and_pnr_with_trailing_newline(db, workflow, make_person) -> None:
    make_person("johndoe")

    with pytest.raises(FieldValidationError) as excinfo:
        workflow.create_account(
            name="John",
            surname="Doe",
            pnr="209001011234",
            email="other@example.com",
            username="johndoe\n",
            password="password123",
        )
    assert excinfo.value.field == "username"

    with pytest.raises(FieldValidationError) as excinfo:
        workflow.create_account(
            name="John",
            surname="Doe",
            pnr="209001011234\n",
            email="other@example.com",
            username="janedoe",
            password="password123",
        )
    assert excinfo.value.field == "pnr"
    assert _count(db, Person) == 1
