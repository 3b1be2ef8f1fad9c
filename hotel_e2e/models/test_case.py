"""Fixture record types for the data-driven test tables."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Severity = Literal["blocker", "critical", "high", "normal", "medium", "low", "minor", "trivial"]
ContactMethod = Literal["no", "email", "tel"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class LoginTestCase(_Frozen):
    test_name: str
    email: str
    password: str
    expected_outcome: Literal["success", "failure"]
    expected_email_error: str = ""  # empty = no error expected
    expected_password_error: str = ""
    tags: tuple[str, ...] = ()

    @property
    def severity(self) -> Severity:
        return "critical" if "smoke" in self.tags else "high"


class FormAction(_Frozen):
    action_type: str  # date, stay_days, guests, additional_plans, name, contact, email, tel, remarks
    value: str = ""
    values: tuple[str, ...] = ()


class ValidationTestCase(_Frozen):
    name: str
    description: str = ""
    severity: Severity = "normal"
    issue_id: str = ""
    setup: tuple[FormAction, ...] = ()
    expected_errors: tuple[tuple[str, str], ...] = ()  # (field id, substring) pairs
    is_positive: bool = False
    tags: tuple[str, ...] = ()

    @field_validator("expected_errors", mode="before")
    @classmethod
    def pairs_from_mapping(cls, v: Any) -> Any:
        return tuple(v.items()) if isinstance(v, Mapping) else v


class ReservationStep(str, Enum):
    SELECT_PLAN = "Select plan"
    FILL_FORM = "Fill reservation form"
    CONFIRM = "Confirm reservation details"
    COMPLETE = "Complete reservation"


class ReservationData(_Frozen):
    plan_name: str
    check_in_date: str
    stay_days: str
    guests: str
    additional_plans: tuple[str, ...] = ()
    guest_name: str
    email: str = ""
    remarks: str = ""
    contact_method: ContactMethod = "email"
    tel: str = ""

    @property
    def contact(self) -> str:
        """Contact value expected on the confirmation screen."""
        if self.contact_method == "tel":
            return self.tel
        return self.email if self.contact_method == "email" else ""


class ReservationFlowOptions(_Frozen):
    """Overrides for the default reservation data. ``None`` keeps the default."""
    plan_name: Optional[str] = None
    check_in_date: Optional[str] = None
    stay_days: Optional[str] = None
    guests: Optional[str] = None
    additional_plans: Optional[tuple[str, ...]] = None
    guest_name: Optional[str] = None
    email: Optional[str] = None
    remarks: Optional[str] = None
    contact_method: Optional[ContactMethod] = None
    tel: Optional[str] = None
    skip_steps: tuple[ReservationStep, ...] = ()

    def merged_with(self, defaults: ReservationData) -> ReservationData:
        overrides = self.model_dump(exclude={"skip_steps"}, exclude_none=True)
        return defaults.model_copy(update=overrides)


class ReservationTestCase(_Frozen):
    name: str
    description: str = ""
    options: ReservationFlowOptions = Field(default_factory=ReservationFlowOptions)
    expect_success: bool = True
    expected_error_message: Optional[str] = None
    tags: tuple[str, ...] = ()
    severity: Severity = "normal"
