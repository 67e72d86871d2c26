"""
User aggregate and the phones it owns.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.kernel.models.base import Base, generate_uuid


class User(Base):
    """
    User account.

    Phones are owned exclusively by the user: they are created and removed
    only through ``add_phone`` / ``remove_phone``, and a phone dropped from
    the collection is deleted on the next flush.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    last_login_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    phones: Mapped[List["Phone"]] = relationship(
        "Phone",
        back_populates="owner",
        cascade="all, delete-orphan",
        order_by="Phone.id",
        lazy="selectin",
    )

    def add_phone(self, number: int, city_code: int, country_code: str) -> "Phone":
        phone = Phone(number=number, city_code=city_code, country_code=country_code)
        self.phones.append(phone)
        return phone

    def remove_phone(self, phone: "Phone") -> None:
        self.phones.remove(phone)

    def record_login(self, when: datetime) -> None:
        self.last_login_at = when

    def __repr__(self) -> str:
        return f"<User {self.email}>"


class Phone(Base):
    """Phone number attached to a user."""

    __tablename__ = "phones"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    number: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
    )
    city_code: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    country_code: Mapped[str] = mapped_column(
        String(8),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    owner: Mapped[User] = relationship(
        "User",
        back_populates="phones",
    )

    def __repr__(self) -> str:
        return f"<Phone +{self.country_code} {self.city_code} {self.number}>"
