"""Voter ORM model."""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from election_api.models.base import Base, TimestampMixin


class Voter(Base, TimestampMixin):
    """A registered voter. Which elections they voted in is derived from ballots."""

    __tablename__ = "voters"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    national_id: Mapped[str] = mapped_column(String(12), unique=True, nullable=False, index=True)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
