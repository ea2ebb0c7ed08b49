"""Tests for people payload validation and serialization."""

from __future__ import annotations

from datetime import date
import json
from uuid import UUID

from pydantic import ValidationError
import pytest

from people_service.features.people.schemas import PeoplePage, PersonCreate, PersonRecord


def _payload(**overrides):
    payload = {
        "nome": "John Doe",
        "apelido": "johnd",
        "nascimento": "1990-01-01",
        "stack": ["python", "go"],
    }
    payload.update(overrides)
    return payload


class TestPersonCreate:
    """Tests for PersonCreate."""

    def test_valid_payload(self):
        person = PersonCreate.model_validate(_payload())

        assert person.name == "John Doe"
        assert person.nickname == "johnd"
        assert person.birthdate == date(1990, 1, 1)
        assert person.stack == ["python", "go"]

    def test_english_field_names_accepted(self):
        person = PersonCreate.model_validate(
            {"name": "Ana", "nickname": "ana", "birthdate": "2000-02-29"}
        )

        assert person.birthdate == date(2000, 2, 29)
        assert person.stack is None

    def test_null_stack_allowed(self):
        assert PersonCreate.model_validate(_payload(stack=None)).stack is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"nome": ""},
            {"nome": "x" * 101},
            {"apelido": ""},
            {"apelido": "x" * 33},
            {"nome": None},
            {"nome": 123},
        ],
    )
    def test_invalid_names(self, overrides):
        with pytest.raises(ValidationError):
            PersonCreate.model_validate(_payload(**overrides))

    def test_boundary_lengths_accepted(self):
        person = PersonCreate.model_validate(_payload(nome="x" * 100, apelido="y" * 32))

        assert len(person.name) == 100
        assert len(person.nickname) == 32

    @pytest.mark.parametrize(
        "nascimento",
        ["1990-01-01 00:00:00", "1990-1-1", "01/01/1990", "1990-02-30", "", 19900101, None],
    )
    def test_invalid_birthdates(self, nascimento):
        """Only real YYYY-MM-DD dates are accepted."""
        with pytest.raises(ValidationError):
            PersonCreate.model_validate(_payload(nascimento=nascimento))

    def test_missing_birthdate(self):
        payload = _payload()
        del payload["nascimento"]

        with pytest.raises(ValidationError):
            PersonCreate.model_validate(payload)

    def test_stack_of_five_accepted(self):
        assert len(PersonCreate.model_validate(_payload(stack=["a"] * 5)).stack) == 5

    @pytest.mark.parametrize(
        "stack",
        [["a"] * 6, [""], ["x" * 33], [1], "python"],
    )
    def test_invalid_stacks(self, stack):
        with pytest.raises(ValidationError):
            PersonCreate.model_validate(_payload(stack=stack))


class TestPersonRecord:
    """Tests for PersonRecord."""

    def test_json_uses_public_field_names(self):
        record = PersonRecord(
            uid=UUID("5b8e4f3c-1d2a-4c6b-9e0f-123456789abc"),
            name="John Doe",
            nickname="johnd",
            birthdate=date(1990, 1, 1),
            stack=["python"],
        )

        assert json.loads(record.to_json()) == {
            "uuid": "5b8e4f3c-1d2a-4c6b-9e0f-123456789abc",
            "name": "John Doe",
            "apelido": "johnd",
            "nascimento": "1990-01-01",
            "stack": ["python"],
        }

    def test_from_model(self, make_person):
        person = make_person(stack=None)

        record = PersonRecord.from_model(person)

        assert record.uid == person.uid
        assert record.stack == []

    def test_page_serialization(self, make_person):
        page = PeoplePage(resultados=[PersonRecord.from_model(make_person())])

        body = page.model_dump(mode="json", by_alias=True, exclude_none=True)

        assert set(body) == {"resultados"}
        assert "apelido" in body["resultados"][0]
