"""Advocate ORM — persisted directory entries and their ordered specialty tags.

Invariants:
    - id is an autoincrement integer primary key; result sets are ordered by it
    - specialties live one-per-row in advocate_specialties, ordered by position
    - phone_number is BIGINT (10 digits overflow INTEGER)
    - full_name is "first last" both in Python and in SQL

Design Decisions:
    - Child table over a JSON column: "any single specialty contains the query" is an
      EXISTS over rows, portable between PostgreSQL and SQLite and never matches
      across tag boundaries
    - ordering_list keeps position in step with list order on insert
    - selectin loading: one extra query per result set, safe under AsyncSession
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from advocate_directory.core.domain_types import AdvocateId, AdvocateRecord
from advocate_directory.db.base import Base


class Advocate(Base):
    """One directory entry."""
    __tablename__ = "advocates"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True,
    )
    city: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True,
    )
    degree: Mapped[str] = mapped_column(String(20), nullable=False)
    years_of_experience: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    phone_number: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    specialty_rows: Mapped[list["AdvocateSpecialty"]] = relationship(
        "AdvocateSpecialty", back_populates="advocate",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="AdvocateSpecialty.position",
        collection_class=ordering_list("position"),
    )

    @hybrid_property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @full_name.inplace.expression
    @classmethod
    def _full_name_expression(cls):
        return cls.first_name + " " + cls.last_name

    @property
    def specialties(self) -> list[str]:
        return [row.name for row in self.specialty_rows]

    @classmethod
    def from_fixture(cls, data: dict) -> "Advocate":
        """Build an unsaved row from a fixture dict (ids are assigned by the store)."""
        return cls(
            first_name=data["first_name"],
            last_name=data["last_name"],
            city=data["city"],
            degree=data["degree"],
            years_of_experience=data["years_of_experience"],
            phone_number=data["phone_number"],
            specialty_rows=[
                AdvocateSpecialty(position=i, name=name)
                for i, name in enumerate(data["specialties"])
            ],
        )

    def to_record(self) -> AdvocateRecord:
        return AdvocateRecord(
            id=AdvocateId(self.id),
            first_name=self.first_name,
            last_name=self.last_name,
            city=self.city,
            degree=self.degree,
            specialties=tuple(self.specialties),
            years_of_experience=self.years_of_experience,
            phone_number=self.phone_number,
            created_at=self.created_at,
        )


class AdvocateSpecialty(Base):
    """One specialty tag of an advocate, kept in display order."""
    __tablename__ = "advocate_specialties"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    advocate_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("advocates.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    advocate: Mapped["Advocate"] = relationship(
        "Advocate", back_populates="specialty_rows",
    )
