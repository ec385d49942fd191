"""Advocate Schemas — wire contract of the query and seed endpoints.

Invariants:
    - AdvocateListResponse requires `data`; no alternate envelope shapes are accepted
    - Serialized by alias (firstName, yearsOfExperience, ...), parsed by alias or name
    - yearsOfExperience is non-negative

Design Decisions:
    - One schema shared by server (serialization) and client (parsing), so both
      sides of the wire agree by construction
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from advocate_directory.core.domain_types import AdvocateId, AdvocateRecord


class AdvocateOut(BaseModel):
    """One advocate as it appears on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True,
    )

    id: int
    first_name: str
    last_name: str
    city: str
    degree: str
    specialties: list[str] = Field(default_factory=list)
    years_of_experience: int = Field(ge=0)
    phone_number: int
    created_at: datetime | None = None

    @classmethod
    def from_record(cls, record: AdvocateRecord) -> "AdvocateOut":
        return cls(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            city=record.city,
            degree=record.degree,
            specialties=list(record.specialties),
            years_of_experience=record.years_of_experience,
            phone_number=record.phone_number,
            created_at=record.created_at,
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


class AdvocateListResponse(BaseModel):
    """Query endpoint success envelope."""
    data: list[AdvocateOut]


class SeedResponse(BaseModel):
    """Seed endpoint success envelope."""
    advocates: list[AdvocateOut]
