"""
Student repository.

Every read is built through ``exclude_deleted`` so soft-deleted students never
come back from ``find``, ``find_one``, ``aggregate`` or ``is_user_exists``.
Writes go through the lifecycle hooks: ``before_save`` validates and hashes
the password, ``after_save`` blanks the hash on the returned object.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import ColumnElement, Select, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.student import Student
from app.services.student_lifecycle import after_save, before_save

log = get_logger(__name__)


def not_deleted() -> ColumnElement[bool]:
    """Predicate matching rows whose ``is_deleted`` flag is not true."""
    return Student.is_deleted.is_not(True)


def exclude_deleted(stmt: Select[Any]) -> Select[Any]:
    """AND the soft-delete predicate into ``stmt``, keeping its other criteria."""
    return stmt.where(not_deleted())


class StudentRepository:
    def __init__(self, db: Session, salt_rounds: int | None = None):
        self.db = db
        self.salt_rounds = salt_rounds

    def create(self, student: Student) -> Student:
        """
        Insert a new student.

        Raises:
            StorageValidationError: a field breaks a storage rule.
            IntegrityError: ``id`` or ``email`` already exists (deleted rows included).
        """
        before_save(student, self.salt_rounds)
        student_id = student.id
        self.db.add(student)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            log.warning("student.duplicate", student_id=student_id)
            raise
        self.db.refresh(student)
        log.info("student.created", student_id=student_id, pk=student.pk)
        return after_save(student)

    def find(self, *criteria: ColumnElement[bool]) -> list[Student]:
        stmt = exclude_deleted(select(Student).where(*criteria)).order_by(Student.pk)
        return list(self.db.scalars(stmt))

    def find_one(self, *criteria: ColumnElement[bool]) -> Student | None:
        stmt = exclude_deleted(select(Student).where(*criteria)).limit(1)
        return self.db.scalars(stmt).first()

    def aggregate(self, stmt: Select[Any]) -> list[Any]:
        """Run a grouping/aggregate select over students, deleted rows excluded.

        The predicate lands in the WHERE clause, so it filters rows before any
        GROUP BY or aggregate function sees them.
        """
        return list(self.db.execute(exclude_deleted(stmt)).all())

    def is_user_exists(self, student_id: str) -> Student | None:
        return self.find_one(Student.id == student_id)

    def soft_delete(self, student_id: str) -> bool:
        """Flag a student as deleted. Returns False if no live student matched."""
        result = self.db.execute(
            update(Student)
            .where(Student.id == student_id, not_deleted())
            .values(is_deleted=True)
            .execution_options(synchronize_session="fetch")
        )
        self.db.commit()
        deleted = result.rowcount > 0
        if deleted:
            log.info("student.soft_deleted", student_id=student_id)
        return deleted
