from __future__ import annotations

import dataclasses
import enum

from sqlalchemy import inspect
from sqlalchemy.orm.attributes import set_committed_value

from app.core.exceptions import StorageValidationError
from app.core.logging import get_logger
from app.core.security import hash_password, is_password_hash
from app.core.settings import settings
from app.models.student import Student
from app.schemas.rules import STUDENT_RULES, FieldRule

log = get_logger(__name__)

_COMPOSITES = ("name", "guardian", "local_guardian")


def _trimmed(value):
    if isinstance(value, str) and not isinstance(value, enum.Enum):
        return value.strip()
    return value


def _read(student: Student, path: str):
    head, _, tail = path.partition(".")
    value = getattr(student, head)
    if not tail:
        return value
    return getattr(value, tail, None) if value is not None else None


def _trim_fields(student: Student) -> None:
    for path in STUDENT_RULES:
        if "." in path:
            continue
        value = getattr(student, path)
        trimmed = _trimmed(value)
        if trimmed != value:
            setattr(student, path, trimmed)

    # composites are immutable from the mapper's point of view: reassign them
    for attr in _COMPOSITES:
        value = getattr(student, attr)
        if value is None:
            continue
        changes = {
            f.name: _trimmed(getattr(value, f.name)) for f in dataclasses.fields(value)
        }
        if changes != dataclasses.asdict(value):
            setattr(student, attr, dataclasses.replace(value, **changes))


def _apply_defaults(student: Student) -> None:
    for rule in STUDENT_RULES.values():
        if rule.default is not None and getattr(student, rule.path) is None:
            setattr(student, rule.path, rule.default)


def _check(rule: FieldRule, value) -> None:
    if value is None or value == "":
        if rule.required:
            raise StorageValidationError(rule.path, rule.required_message)
        return
    if rule.choices is not None and value not in rule.choice_values:
        raise StorageValidationError(rule.path, rule.storage_enum_message(value))
    if not isinstance(value, str):
        return
    if rule.max_length is not None and len(value) > rule.max_length:
        raise StorageValidationError(
            rule.path, rule.storage_max_length_message(value)
        )
    if rule.check is not None and not rule.check(value):
        raise StorageValidationError(
            rule.path, rule.check_message.format(value=value)
        )


def validate_record(student: Student, *, check_password: bool = True) -> Student:
    """Trim, default and check a student before it is written.

    Stops at the first violated rule and raises ``StorageValidationError``
    carrying that field's path and message. ``check_password=False`` skips the
    password rule for records whose stored hash is not being replaced.
    """
    _trim_fields(student)
    _apply_defaults(student)
    for rule in STUDENT_RULES.values():
        if rule.path == "password" and not check_password:
            continue
        try:
            _check(rule, _read(student, rule.path))
        except StorageValidationError as exc:
            log.info("student.validation_failed", field=exc.field, reason=exc.message)
            raise
    return student


def _password_pending(student: Student) -> bool:
    if is_password_hash(student.password):
        return False
    state = inspect(student)
    if state.transient or state.pending:
        return True
    return state.attrs.password.history.has_changes()


def before_save(student: Student, salt_rounds: int | None = None) -> Student:
    """Validate ``student`` and hash a new plaintext password in place.

    The cost factor is read from settings at call time unless given. Only a
    plaintext password that is new or was reassigned since the last load is
    hashed, so a stored hash is never hashed twice.
    """
    rounds = settings.BCRYPT_SALT_ROUNDS if salt_rounds is None else salt_rounds
    pending = _password_pending(student)
    validate_record(student, check_password=pending)
    if pending:
        student.password = hash_password(student.password, rounds)
        log.debug("student.password_hashed", rounds=rounds)
    return student


def after_save(student: Student) -> Student:
    # blank the in-memory hash without marking the attribute dirty
    set_committed_value(student, "password", "")
    return student
