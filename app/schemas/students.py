from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    StrictBool,
    StringConstraints,
    ValidationError,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.core.exceptions import InputValidationError
from app.core.logging import get_logger
from app.models.student import (
    ActiveStatus,
    BloodGroup,
    Gender,
    Guardian,
    LocalGuardian,
    Name,
    Student,
)
from app.schemas.rules import STUDENT_RULES, FieldRule

log = get_logger(__name__)


def _format_check(rule: FieldRule):
    def _check(value: str) -> str:
        if not rule.check(value):
            raise PydanticCustomError("value_format", rule.input_check_message)
        return value

    return _check


def _text(path: str):
    rule = STUDENT_RULES[path]
    metadata: list[Any] = [
        StringConstraints(
            strip_whitespace=True,
            min_length=rule.min_length,
            max_length=rule.max_length,
        )
    ]
    if rule.check is not None:
        metadata.append(AfterValidator(_format_check(rule)))
    return Annotated[str, *metadata]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class UserNameIn(_CamelModel):
    first_name: _text("name.first_name")
    middle_name: _text("name.middle_name") = None
    last_name: _text("name.last_name")


class GuardianIn(_CamelModel):
    father_name: _text("guardian.father_name")
    father_occupation: _text("guardian.father_occupation")
    father_contact_no: _text("guardian.father_contact_no")
    mother_name: _text("guardian.mother_name")
    mother_occupation: _text("guardian.mother_occupation")
    mother_contact_no: _text("guardian.mother_contact_no")


class LocalGuardianIn(_CamelModel):
    name: _text("local_guardian.name")
    occupation: _text("local_guardian.occupation")
    contact_no: _text("local_guardian.contact_no")
    address: _text("local_guardian.address")


class StudentCreateIn(_CamelModel):
    id: _text("id")
    password: _text("password")
    name: UserNameIn
    gender: Gender
    date_of_birth: _text("date_of_birth")
    email: _text("email")
    contact_no: _text("contact_no")
    emergency_contact_no: _text("emergency_contact_no")
    blood_group: BloodGroup = None
    present_address: _text("present_address")
    permanent_address: _text("permanent_address")
    guardian: GuardianIn
    local_guardian: LocalGuardianIn
    profile_img: _text("profile_img") = None
    is_active: ActiveStatus = STUDENT_RULES["is_active"].default
    is_deleted: StrictBool = STUDENT_RULES["is_deleted"].default

    def to_model(self) -> Student:
        """Map the validated payload onto a new, unsaved ``Student``."""
        return Student(
            id=self.id,
            password=self.password,
            name=Name(**self.name.model_dump()),
            gender=self.gender,
            date_of_birth=self.date_of_birth,
            email=self.email,
            contact_no=self.contact_no,
            emergency_contact_no=self.emergency_contact_no,
            blood_group=self.blood_group,
            present_address=self.present_address,
            permanent_address=self.permanent_address,
            guardian=Guardian(**self.guardian.model_dump()),
            local_guardian=LocalGuardian(**self.local_guardian.model_dump()),
            profile_img=self.profile_img,
            is_active=self.is_active,
            is_deleted=self.is_deleted,
        )


def validate_student_payload(data: dict[str, Any]) -> StudentCreateIn:
    """Validate a raw create payload, collecting every violation.

    Raises ``InputValidationError`` with one ``{"path", "message"}`` entry per
    failing rule. Paths use the payload's camelCase keys, e.g.
    ``guardian.fatherName``.
    """
    try:
        return StudentCreateIn.model_validate(data)
    except ValidationError as exc:
        errors = [
            {
                "path": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        log.info("student.payload_invalid", error_count=len(errors))
        raise InputValidationError(errors) from exc


class NameOut(_CamelModel):
    first_name: str
    middle_name: str | None = None
    last_name: str


class GuardianOut(_CamelModel):
    father_name: str
    father_occupation: str
    father_contact_no: str
    mother_name: str
    mother_occupation: str
    mother_contact_no: str


class LocalGuardianOut(_CamelModel):
    name: str
    occupation: str
    contact_no: str
    address: str


class StudentOut(_CamelModel):
    """Stored student as returned to callers; ``fullName`` is derived, no password."""

    id: str
    name: NameOut
    full_name: str
    gender: Gender
    date_of_birth: str | None = None
    email: str
    contact_no: str
    emergency_contact_no: str
    blood_group: BloodGroup | None = None
    present_address: str
    permanent_address: str
    guardian: GuardianOut
    local_guardian: LocalGuardianOut
    profile_img: str | None = None
    is_active: ActiveStatus
    is_deleted: bool
