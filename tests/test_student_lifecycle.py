import dataclasses

import pytest

from app.core.exceptions import StorageValidationError
from app.core.security import verify_password
from app.core.settings import settings
from app.models.student import ActiveStatus, Name, Student, format_full_name
from app.services.student_lifecycle import after_save, before_save, validate_record


def test_valid_student_passes_storage_rules(make_student):
    student = make_student()
    assert validate_record(student) is student


def test_lowercase_father_name_fails_storage_rules(make_student):
    student = make_student()
    student.guardian = dataclasses.replace(student.guardian, father_name="john")

    with pytest.raises(StorageValidationError) as exc_info:
        validate_record(student)

    assert exc_info.value.field == "guardian.father_name"
    assert exc_info.value.message == "john in not capitalize format"


def test_capitalized_father_name_passes_storage_rules(make_student):
    student = make_student()
    student.guardian = dataclasses.replace(student.guardian, father_name="John")
    validate_record(student)


def test_missing_father_name_message(make_student):
    student = make_student()
    student.guardian = dataclasses.replace(student.guardian, father_name=None)

    with pytest.raises(StorageValidationError) as exc_info:
        validate_record(student)

    assert exc_info.value.message == "Father's Name is required."


def test_invalid_email_fails_storage_rules(make_student):
    student = make_student()
    student.email = "not-an-email"

    with pytest.raises(StorageValidationError) as exc_info:
        validate_record(student)

    assert exc_info.value.field == "email"
    assert exc_info.value.message == "not-an-email is not a valid email type"


def test_enum_mismatch_fails_storage_rules(make_student):
    student = make_student()
    student.gender = "robot"

    with pytest.raises(StorageValidationError) as exc_info:
        validate_record(student)

    assert exc_info.value.field == "gender"


def test_storage_rules_fail_fast(make_student):
    """Only the first broken rule is reported."""
    student = make_student()
    student.id = ""
    student.email = "not-an-email"

    with pytest.raises(StorageValidationError) as exc_info:
        validate_record(student)

    assert exc_info.value.field == "id"
    assert exc_info.value.message == "Student ID is required."


def test_missing_name_document(make_student):
    student = make_student()
    student.name = None

    with pytest.raises(StorageValidationError) as exc_info:
        validate_record(student)

    assert exc_info.value.message == "First Name is required."


def test_password_longer_than_20_fails(make_student):
    student = make_student()
    student.password = "x" * 21

    with pytest.raises(StorageValidationError) as exc_info:
        validate_record(student)

    assert exc_info.value.message == "Password can not be more then 20 characters"


def test_strings_are_trimmed(make_student):
    student = make_student()
    student.id = "  S-9  "
    student.name = Name(first_name=" Alice ", middle_name=None, last_name="Lima ")

    validate_record(student)

    assert student.id == "S-9"
    assert student.name == Name(first_name="Alice", middle_name=None, last_name="Lima")


def test_defaults_are_applied():
    student = Student(is_active=None, is_deleted=None)
    with pytest.raises(StorageValidationError):
        validate_record(student)

    assert student.is_active == ActiveStatus.ACTIVE
    assert student.is_deleted is False


def test_before_save_hashes_password(make_student):
    student = make_student(password="secret123")

    before_save(student, salt_rounds=4)

    assert student.password != "secret123"
    assert verify_password("secret123", student.password)


def test_before_save_does_not_rehash(make_student):
    student = make_student()
    before_save(student, salt_rounds=4)
    hashed = student.password

    before_save(student, salt_rounds=4)

    assert student.password == hashed


def test_before_save_reads_cost_factor_at_call_time(make_student, monkeypatch):
    monkeypatch.setattr(settings, "BCRYPT_SALT_ROUNDS", 5)
    student = make_student()

    before_save(student)

    assert student.password.startswith("$2b$05$")


def test_before_save_validates_before_hashing(make_student):
    student = make_student()
    student.guardian = dataclasses.replace(student.guardian, father_name="john")

    with pytest.raises(StorageValidationError):
        before_save(student, salt_rounds=4)

    assert student.password == "secret123"


def test_after_save_blanks_password(make_student):
    student = make_student()
    before_save(student, salt_rounds=4)

    assert after_save(student) is student
    assert student.password == ""


@pytest.mark.parametrize(
    "name,expected",
    [
        (Name("Alice", "Maria", "Lima"), "Alice Maria Lima"),
        (Name("Alice", "", "Lima"), "Alice  Lima"),
        (Name("Alice", None, "Lima"), "Alice  Lima"),
    ],
)
def test_full_name(name, expected):
    assert format_full_name(name) == expected


def test_full_name_property(make_student):
    assert make_student().full_name == "Alice Maria Lima"


def test_missing_date_of_birth_passes_storage_rules(make_student):
    student = make_student()
    student.date_of_birth = None
    validate_record(student)


def test_contact_no_longer_than_15_fails(make_student):
    student = make_student()
    student.contact_no = "1" * 16

    with pytest.raises(StorageValidationError) as exc_info:
        validate_record(student)

    assert exc_info.value.field == "contact_no"
    assert exc_info.value.message == (
        "Path `contact_no` (`1111111111111111`) is longer than the maximum "
        "allowed length (15)."
    )


def test_invalid_blood_group_fails(make_student):
    student = make_student()
    student.blood_group = "C+"

    with pytest.raises(StorageValidationError) as exc_info:
        validate_record(student)

    assert exc_info.value.field == "blood_group"
    assert exc_info.value.message == "`C+` is not a valid enum value for path `blood_group`."
