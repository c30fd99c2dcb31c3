# scripts/seed.py
from __future__ import annotations

import os

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import InputValidationError, StorageValidationError
from app.core.logging import configure_logging, get_logger
from app.core.settings import settings
from app.db import get_db
from app.repositories.student_repository import StudentRepository
from app.schemas.students import validate_student_payload

# ---------------- Configuráveis por ENV ----------------
SEED_PASSWORD = os.getenv("SEED_PASSWORD", "secret123")

# ---------------- Dados de Exemplo ----------------
STUDENTS_DATA = [
    {
        "id": "S-2026-0001",
        "name": {"firstName": "Alice", "middleName": "Maria", "lastName": "Lima"},
        "gender": "female",
        "dateOfBirth": "2008-03-14",
        "email": "alice.lima@example.com",
        "bloodGroup": "O+",
        "fatherName": "Marcos Lima",
        "motherName": "Patricia Lima",
    },
    {
        "id": "S-2026-0002",
        "name": {"firstName": "Bruno", "lastName": "Alves"},
        "gender": "male",
        "dateOfBirth": "2007-11-02",
        "email": "bruno.alves@example.com",
        "bloodGroup": "A-",
        "fatherName": "Carlos Alves",
        "motherName": "Roberta Alves",
    },
    {
        "id": "S-2026-0003",
        "name": {"firstName": "Clara", "lastName": "Dias"},
        "gender": "other",
        "dateOfBirth": "2008-07-21",
        "email": "clara.dias@example.com",
        "bloodGroup": None,
        "fatherName": "Diego Dias",
        "motherName": "Fernanda Dias",
    },
]

log = get_logger("seed")


# ---------------- Helpers ----------------
def get_session() -> Session:
    gen = get_db()
    session: Session = next(gen)
    return session


def build_payload(data: dict) -> dict:
    payload = {
        "id": data["id"],
        "password": SEED_PASSWORD,
        "name": data["name"],
        "gender": data["gender"],
        "dateOfBirth": data["dateOfBirth"],
        "email": data["email"],
        "contactNo": "01700000000",
        "emergencyContactNo": "01800000000",
        "presentAddress": "12 Main Street",
        "permanentAddress": "12 Main Street",
        "guardian": {
            "fatherName": data["fatherName"],
            "fatherOccupation": "Engineer",
            "fatherContactNo": "01711111111",
            "motherName": data["motherName"],
            "motherOccupation": "Teacher",
            "motherContactNo": "01722222222",
        },
        "localGuardian": {
            "name": "Joana Souza",
            "occupation": "Nurse",
            "contactNo": "01733333333",
            "address": "40 Park Avenue",
        },
    }
    if data["bloodGroup"]:
        payload["bloodGroup"] = data["bloodGroup"]
    return payload


# ---------------- Funções de Seed ----------------
def ensure_students(db: Session) -> int:
    repo = StudentRepository(db, salt_rounds=settings.BCRYPT_SALT_ROUNDS)
    created = 0
    for data in STUDENTS_DATA:
        if repo.is_user_exists(data["id"]):
            continue
        try:
            student = validate_student_payload(build_payload(data)).to_model()
            repo.create(student)
        except (InputValidationError, StorageValidationError) as exc:
            log.error("seed.student_invalid", student_id=data["id"], error=str(exc))
            raise
        except IntegrityError:
            # existe (talvez soft-deleted) com o mesmo id/email
            log.warning("seed.student_skipped", student_id=data["id"])
            continue
        created += 1
        print(f"[Seed] Student criado: {student.full_name} ({student.email})")
    return created


def main() -> None:
    configure_logging(json=settings.LOG_JSON, level=settings.LOG_LEVEL)
    db = get_session()
    try:
        created = ensure_students(db)
        print(f"[Seed] {created} student(s) criados.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
