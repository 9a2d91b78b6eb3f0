"""테스트 전용 ORM 모델.

Test-only ORM models used by the repository and context tests.

Tables:
    - people: 사람 (Person records with length/required constraints)
    - addresses: 주소 (Addresses owned by a person, for eager-loading tests)
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from generic_repository.database import Base
from generic_repository.models import EntityMixin


class Person(EntityMixin, Base):
    """사람 모델 — Person model."""

    __tablename__ = "people"

    # 이름 — Given name (max 50 chars, required)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    # 성 — Surname (max 50 chars, required)
    surname: Mapped[str] = mapped_column(String(50), nullable=False)
    age: Mapped[int] = mapped_column(Integer, default=0)
    # 이메일 — Unique e-mail address (optional)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    created_on: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)

    addresses: Mapped[list["Address"]] = relationship(
        back_populates="person", cascade="all, delete-orphan"
    )


class Address(EntityMixin, Base):
    """주소 모델 — Address model owned by a Person."""

    __tablename__ = "addresses"

    person_id: Mapped[int] = mapped_column(ForeignKey("people.id"), nullable=False)
    street: Mapped[str] = mapped_column(String(100), nullable=False)

    person: Mapped[Person] = relationship(back_populates="addresses")
