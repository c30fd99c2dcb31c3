from __future__ import annotations

import dataclasses
import enum

from sqlalchemy import Boolean, Enum, Integer, String
from sqlalchemy.orm import Mapped, composite, mapped_column

from app.db.base_class import Base


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class BloodGroup(str, enum.Enum):
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS = "O+"
    O_NEG = "O-"


class ActiveStatus(str, enum.Enum):
    ACTIVE = "active"
    BLOCKED = "blocked"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


@dataclasses.dataclass
class Name:
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None


@dataclasses.dataclass
class Guardian:
    father_name: str | None = None
    father_occupation: str | None = None
    father_contact_no: str | None = None
    mother_name: str | None = None
    mother_occupation: str | None = None
    mother_contact_no: str | None = None


@dataclasses.dataclass
class LocalGuardian:
    name: str | None = None
    occupation: str | None = None
    contact_no: str | None = None
    address: str | None = None


def format_full_name(name: Name) -> str:
    # middle name always takes its slot, so an empty one leaves a double space
    return f"{name.first_name or ''} {name.middle_name or ''} {name.last_name or ''}"


class Student(Base):
    __tablename__ = "students"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(
        String(100), unique=True, index=True, nullable=False
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    name: Mapped[Name] = composite(
        mapped_column("first_name", String(100), nullable=False),
        mapped_column("middle_name", String(100), nullable=True),
        mapped_column("last_name", String(100), nullable=False),
    )
    gender: Mapped[Gender] = mapped_column(
        Enum(
            Gender,
            name="gender_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    date_of_birth: Mapped[str | None] = mapped_column(String(20))
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    contact_no: Mapped[str] = mapped_column(String(15), nullable=False)
    emergency_contact_no: Mapped[str] = mapped_column(String(15), nullable=False)
    blood_group: Mapped[BloodGroup | None] = mapped_column(
        Enum(
            BloodGroup,
            name="blood_group_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=True,
    )
    present_address: Mapped[str] = mapped_column(String(255), nullable=False)
    permanent_address: Mapped[str] = mapped_column(String(255), nullable=False)

    guardian: Mapped[Guardian] = composite(
        mapped_column("guardian_father_name", String(20), nullable=False),
        mapped_column("guardian_father_occupation", String(100), nullable=False),
        mapped_column("guardian_father_contact_no", String(15), nullable=False),
        mapped_column("guardian_mother_name", String(100), nullable=False),
        mapped_column("guardian_mother_occupation", String(100), nullable=False),
        mapped_column("guardian_mother_contact_no", String(15), nullable=False),
    )
    local_guardian: Mapped[LocalGuardian] = composite(
        mapped_column("local_guardian_name", String(100), nullable=False),
        mapped_column("local_guardian_occupation", String(100), nullable=False),
        mapped_column("local_guardian_contact_no", String(15), nullable=False),
        mapped_column("local_guardian_address", String(255), nullable=False),
    )

    profile_img: Mapped[str | None] = mapped_column(String(255))
    is_active: Mapped[ActiveStatus] = mapped_column(
        Enum(
            ActiveStatus,
            name="active_status_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        default=ActiveStatus.ACTIVE,
        nullable=False,
    )
    # soft delete marker; rows are never removed
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, default=False, index=True, nullable=False
    )

    @property
    def full_name(self) -> str:
        return format_full_name(self.name or Name())

    def __repr__(self) -> str:
        return f"<Student id={self.id!r} deleted={self.is_deleted}>"
