"""Pydantic schemas for the people feature.

Wire names follow the public API (``nome``/``apelido``/``nascimento`` on
input, ``uuid``/``name``/``apelido``/``nascimento`` on output); the English
attribute names are accepted on input as well.
"""

from __future__ import annotations

from datetime import date
import re
from typing import TYPE_CHECKING, Annotated, Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StringConstraints, field_validator

if TYPE_CHECKING:
    from people_service.features.people.models import Person

MAX_STACK_ITEMS = 5

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

StackTag = Annotated[str, StringConstraints(min_length=1, max_length=32)]


class PersonCreate(BaseModel):
    """Payload of ``POST /pessoas``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("nome", "name"),
        description="Full name",
    )
    nickname: str = Field(
        ...,
        min_length=1,
        max_length=32,
        validation_alias=AliasChoices("apelido", "nickname"),
        description="Nickname",
    )
    birthdate: date = Field(
        ...,
        validation_alias=AliasChoices("nascimento", "birthdate"),
        description="Birth date as YYYY-MM-DD",
    )
    stack: list[StackTag] | None = Field(
        default=None,
        max_length=MAX_STACK_ITEMS,
        description="Up to five free-text tags",
    )

    @field_validator("birthdate", mode="before")
    @classmethod
    def strict_calendar_date(cls, v: Any) -> Any:
        """Accept only ``YYYY-MM-DD`` strings holding a real calendar date."""
        if isinstance(v, date):
            return v
        if not isinstance(v, str) or not _ISO_DATE.match(v):
            msg = "birthdate must be a YYYY-MM-DD date"
            raise ValueError(msg)
        return date.fromisoformat(v)


class PersonRecord(BaseModel):
    """Serialized person, as cached and as returned by ``GET /pessoas/{id}``."""

    model_config = ConfigDict(populate_by_name=True)

    uid: UUID = Field(serialization_alias="uuid", validation_alias=AliasChoices("uuid", "uid"))
    name: str
    nickname: str = Field(
        serialization_alias="apelido",
        validation_alias=AliasChoices("apelido", "nickname"),
    )
    birthdate: date = Field(
        serialization_alias="nascimento",
        validation_alias=AliasChoices("nascimento", "birthdate"),
    )
    stack: list[str] = Field(default_factory=list)

    @classmethod
    def from_model(cls, person: Person) -> PersonRecord:
        return cls(
            uid=person.uid,
            name=person.name,
            nickname=person.nickname,
            birthdate=person.birthdate,
            stack=list(person.stack or []),
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class PersonCreated(BaseModel):
    """Body of a successful ``POST /pessoas``."""

    uuid: UUID


class PeoplePage(BaseModel):
    """One page of the people listing with navigation links."""

    resultados: list[PersonRecord]
    anterior: str | None = Field(default=None, description="Link to the previous page")
    proxima: str | None = Field(default=None, description="Link to the next page")


__all__ = [
    "MAX_STACK_ITEMS",
    "PeoplePage",
    "PersonCreate",
    "PersonCreated",
    "PersonRecord",
]
