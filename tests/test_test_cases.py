"""Tests for case models and the fixture tables."""

import pytest
from pydantic import ValidationError

from hotel_e2e.data.reservation_cases import RESERVATION_TEST_CASES
from hotel_e2e.data.test_data import LOGIN_TEST_CASES, MAIN_PAGES, RESERVATION_DATA, VALID_USER
from hotel_e2e.data.validation_cases import INVALID_STAY_DAYS, REQUIRED_FIELD, VALIDATION_TEST_CASES
from hotel_e2e.models.test_case import (
    LoginTestCase,
    ReservationFlowOptions,
    ReservationStep,
    ValidationTestCase,
)


class TestLoginTestCase:
    """Tests for LoginTestCase."""

    def test_smoke_cases_are_critical(self):
        case = LoginTestCase(test_name="x", email="a", password="b", expected_outcome="success", tags=("smoke",))
        assert case.severity == "critical"

    def test_other_cases_are_high(self):
        case = LoginTestCase(test_name="x", email="a", password="b", expected_outcome="failure")
        assert case.severity == "high"

    def test_frozen(self):
        with pytest.raises(ValidationError):
            LOGIN_TEST_CASES[0].email = "other@example.com"

    def test_rejects_unknown_outcome(self):
        with pytest.raises(ValidationError):
            LoginTestCase(test_name="x", email="a", password="b", expected_outcome="maybe")


class TestValidationTestCase:
    """Tests for ValidationTestCase."""

    def test_expected_errors_stored_read_only(self):
        source = {"username": REQUIRED_FIELD}
        case = ValidationTestCase(name="x", expected_errors=source)
        source["email"] = REQUIRED_FIELD

        assert case.expected_errors == (("username", REQUIRED_FIELD),)
        with pytest.raises(AttributeError):
            case.expected_errors.append(("email", REQUIRED_FIELD))

    def test_shared_rows_are_hashable(self):
        assert len(set(VALIDATION_TEST_CASES)) == len(VALIDATION_TEST_CASES)


class TestReservationData:
    """Tests for reservation data and flow option merging."""

    def test_contact_follows_method(self):
        assert RESERVATION_DATA.contact == "test@example.com"
        tel = RESERVATION_DATA.model_copy(update={"contact_method": "tel", "tel": "03-1234-5678"})
        assert tel.contact == "03-1234-5678"
        assert RESERVATION_DATA.model_copy(update={"contact_method": "no"}).contact == ""

    def test_empty_options_keep_defaults(self):
        assert ReservationFlowOptions().merged_with(RESERVATION_DATA) == RESERVATION_DATA

    def test_overrides_applied(self):
        options = ReservationFlowOptions(guest_name="山田花子", guests="1", skip_steps=(ReservationStep.COMPLETE,))
        data = options.merged_with(RESERVATION_DATA)
        assert data.guest_name == "山田花子"
        assert data.guests == "1"
        assert data.plan_name == RESERVATION_DATA.plan_name

    def test_empty_string_override_is_kept(self):
        data = ReservationFlowOptions(remarks="").merged_with(RESERVATION_DATA)
        assert data.remarks == ""


class TestFixtureTables:
    """Tests for the shipped case tables."""

    def test_login_cases(self):
        assert len(LOGIN_TEST_CASES) == 8
        successes = [c for c in LOGIN_TEST_CASES if c.expected_outcome == "success"]
        assert len(successes) == 1
        assert successes[0].email == VALID_USER["email"]
        assert successes[0].expected_email_error == ""

    def test_failure_cases_expect_some_error(self):
        for case in LOGIN_TEST_CASES:
            if case.expected_outcome == "failure":
                assert case.expected_email_error or case.expected_password_error, case.test_name

    def test_validation_cases(self):
        assert [c.issue_id for c in VALIDATION_TEST_CASES] == [
            "VAL-101", "VAL-102", "VAL-103", "VAL-104", "VAL-105", "VAL-106",
        ]
        positive = [c for c in VALIDATION_TEST_CASES if c.is_positive]
        assert [c.issue_id for c in positive] == ["VAL-105"]
        assert positive[0].expected_errors == ()

    def test_multi_field_case(self):
        case = VALIDATION_TEST_CASES[-1]
        assert case.severity == "high"
        assert dict(case.expected_errors) == {
            "term": INVALID_STAY_DAYS,
            "username": REQUIRED_FIELD,
            "email": REQUIRED_FIELD,
        }

    def test_reservation_case(self):
        (case,) = RESERVATION_TEST_CASES
        assert case.expect_success is True
        assert case.severity == "critical"
        assert "smoke" in case.tags

    def test_main_pages(self):
        assert [path for path, _ in MAIN_PAGES] == ["index", "plans", "login"]
