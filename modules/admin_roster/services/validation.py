"""
Admin Form Validation.

Checks a candidate admin (name, email, phone) before it reaches the
record store. Failures are returned as per-field messages, never raised,
so callers can render them inline.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

FORM_FIELDS = ("name", "email", "phone")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an admin form."""

    valid: bool
    field_errors: dict[str, str] = field(default_factory=dict)


class AdminForm(BaseModel):
    """The validated subset of an admin draft."""

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    name: str = ""
    email: str = ""
    phone: str = ""

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def none_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("required", "Name is required")
        return value

    @field_validator("email")
    @classmethod
    def email_format(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("required", "Email is required")
        if not EMAIL_PATTERN.match(value):
            raise PydanticCustomError("email_format", "Invalid email format")
        return value

    @field_validator("phone")
    @classmethod
    def phone_required(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("required", "Phone is required")
        return value


class FormValidator:
    """
    Validates admin drafts coming from a form submission.

    Accepts a mapping, a pydantic model or any object exposing
    ``name``, ``email`` and ``phone`` attributes. Synchronous and
    free of side effects.
    """

    @staticmethod
    def validate(draft: Mapping[str, Any] | Any) -> ValidationResult:
        if isinstance(draft, BaseModel):
            draft = draft.model_dump()

        try:
            AdminForm.model_validate(draft)
        except ValidationError as e:
            errors: dict[str, str] = {}
            for error in e.errors():
                location = error["loc"][0] if error["loc"] else "__root__"
                errors.setdefault(str(location), error["msg"])
            return ValidationResult(valid=False, field_errors=errors)

        return ValidationResult(valid=True)


def validate_form(draft: Mapping[str, Any] | Any) -> ValidationResult:
    """Shortcut for ``FormValidator.validate``."""
    return FormValidator.validate(draft)
