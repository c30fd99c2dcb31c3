"""Field rules shared by the storage checks and the request payload schema.

Both sides read their limits, enums and custom predicates from ``STUDENT_RULES``
so the two rule sets cannot drift apart. Paths use Python attribute names
(``guardian.father_name``); ``FieldRule.alias`` gives the camelCase wire path.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email
from pydantic.alias_generators import to_camel

from app.models.student import ActiveStatus, BloodGroup, Gender


def is_capitalized(value: str) -> bool:
    return value[:1].upper() + value[1:] == value


def is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


@dataclass(frozen=True)
class FieldRule:
    path: str
    required: bool = True
    # payload schema requirement; defaults to ``required``
    input_required: bool | None = None
    # message used by the storage layer when the value is missing
    required_message: str | None = None
    min_length: int = 1
    max_length: int | None = None
    max_length_message: str | None = None
    choices: type[enum.Enum] | None = None
    check: Callable[[str], bool] | None = None
    # storage message, formatted with the offending value
    check_message: str | None = None
    # message reported by the payload schema
    input_check_message: str | None = None
    default: object = None

    @property
    def required_on_input(self) -> bool:
        return self.required if self.input_required is None else self.input_required

    @property
    def alias(self) -> str:
        return ".".join(to_camel(part) for part in self.path.split("."))

    @property
    def choice_values(self) -> tuple[str, ...]:
        if self.choices is None:
            return ()
        return tuple(member.value for member in self.choices)

    def storage_max_length_message(self, value: str) -> str:
        if self.max_length_message:
            return self.max_length_message
        return (
            f"Path `{self.path}` (`{value}`) is longer than the maximum "
            f"allowed length ({self.max_length})."
        )

    def storage_enum_message(self, value: object) -> str:
        return f"`{value}` is not a valid enum value for path `{self.path}`."


_RULES = [
    FieldRule("id", required_message="Student ID is required.", max_length=100),
    FieldRule(
        "password",
        required_message="Password is required.",
        max_length=20,
        max_length_message="Password can not be more then 20 characters",
    ),
    FieldRule(
        "name.first_name", required_message="First Name is required.", max_length=100
    ),
    FieldRule("name.middle_name", required=False, min_length=0, max_length=100),
    FieldRule(
        "name.last_name", required_message="Last Name is required.", max_length=100
    ),
    FieldRule("gender", required_message="Gender is required.", choices=Gender),
    FieldRule(
        "date_of_birth", required=False, input_required=True, max_length=20
    ),
    FieldRule(
        "email",
        required_message="Email is required.",
        max_length=255,
        check=is_email,
        check_message="{value} is not a valid email type",
        input_check_message="Invalid email address",
    ),
    FieldRule(
        "contact_no", required_message="Contact Number is required.", max_length=15
    ),
    FieldRule(
        "emergency_contact_no",
        required_message="Emergency Contact Number is required.",
        max_length=15,
    ),
    FieldRule("blood_group", required=False, choices=BloodGroup),
    FieldRule(
        "present_address",
        required_message="Present Address is required.",
        max_length=255,
    ),
    FieldRule(
        "permanent_address",
        required_message="Permanent Address is required.",
        max_length=255,
    ),
    FieldRule(
        "guardian.father_name",
        required_message="Father's Name is required.",
        max_length=20,
        max_length_message="First Name can not be more than 20 characters",
        check=is_capitalized,
        check_message="{value} in not capitalize format",
        input_check_message="Father's name should be in capitalized format",
    ),
    FieldRule(
        "guardian.father_occupation",
        required_message="Father's Occupation is required.",
        max_length=100,
    ),
    FieldRule(
        "guardian.father_contact_no",
        required_message="Father's Contact Number is required.",
        max_length=15,
    ),
    FieldRule(
        "guardian.mother_name",
        required_message="Mother's Name is required.",
        max_length=100,
    ),
    FieldRule(
        "guardian.mother_occupation",
        required_message="Mother's Occupation is required.",
        max_length=100,
    ),
    FieldRule(
        "guardian.mother_contact_no",
        required_message="Mother's Contact Number is required.",
        max_length=15,
    ),
    FieldRule(
        "local_guardian.name",
        required_message="Local Guardian's Name is required.",
        max_length=100,
    ),
    FieldRule(
        "local_guardian.occupation",
        required_message="Local Guardian's Occupation is required.",
        max_length=100,
    ),
    FieldRule(
        "local_guardian.contact_no",
        required_message="Local Guardian's Contact Number is required.",
        max_length=15,
    ),
    FieldRule(
        "local_guardian.address",
        required_message="Local Guardian's Address is required.",
        max_length=255,
    ),
    FieldRule("profile_img", required=False, max_length=255),
    FieldRule(
        "is_active", required=False, choices=ActiveStatus, default=ActiveStatus.ACTIVE
    ),
    FieldRule("is_deleted", required=False, default=False),
]

STUDENT_RULES: dict[str, FieldRule] = {rule.path: rule for rule in _RULES}
