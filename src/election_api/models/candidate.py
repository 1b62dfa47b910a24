"""Candidate ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from election_api.models.base import Base, TimestampMixin


class Candidate(Base, TimestampMixin):
    """A candidate who can be assigned to elections."""

    __tablename__ = "candidates"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    party: Mapped[str] = mapped_column(String(120), nullable=False)
