"""Tests for PeopleService, including storage and cache failures."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from people_service.core.exceptions import BackendFailureException, NotFoundException
from people_service.features.people.schemas import PersonCreate
from people_service.features.people.service import PeopleService


def _db_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.fixture
def payload() -> PersonCreate:
    return PersonCreate.model_validate(
        {"nome": "John Doe", "apelido": "johnd", "nascimento": "1990-01-01", "stack": ["python"]}
    )


@pytest.fixture
def service(store, record_cache) -> PeopleService:
    return PeopleService(store, record_cache)


# ──────────────────────────────────────────────────────────────
# Create
# ──────────────────────────────────────────────────────────────


class TestCreatePerson:
    """Tests for create_person."""

    async def test_persists_and_caches(self, service, store, fake_redis, payload):
        record = await service.create_person(payload)

        assert await store.count() == 1
        cached = json.loads(fake_redis.data[str(record.uid)])
        assert cached["name"] == "John Doe"
        assert cached["nascimento"] == "1990-01-01"

    async def test_generates_distinct_uids(self, service, payload):
        first = await service.create_person(payload)
        second = await service.create_person(payload)

        assert first.uid != second.uid

    async def test_storage_failure_is_backend_failure(self, record_cache, payload):
        store = AsyncMock()
        store.create.side_effect = _db_error()
        service = PeopleService(store, record_cache)

        with pytest.raises(BackendFailureException) as exc_info:
            await service.create_person(payload)

        assert exc_info.value.backend == "storage"
        assert isinstance(exc_info.value.__cause__, OperationalError)

    async def test_cache_failure_fails_the_write(self, service, fake_redis, payload):
        """The write path is not acknowledged if the cache write fails."""
        fake_redis.fail_writes = True

        with pytest.raises(BackendFailureException) as exc_info:
            await service.create_person(payload)

        assert exc_info.value.backend == "cache"


# ──────────────────────────────────────────────────────────────
# Lookup
# ──────────────────────────────────────────────────────────────


class TestGetPersonJson:
    """Tests for get_person_json."""

    async def test_cache_hit_skips_storage(self, record_cache, fake_redis):
        store = AsyncMock()
        uid = str(uuid4())
        fake_redis.data[uid] = '{"cached": true}'
        service = PeopleService(store, record_cache)

        assert await service.get_person_json(uid) == '{"cached": true}'
        store.get_by_uid.assert_not_awaited()

    async def test_uppercase_uid_hits_entry_written_by_create(
        self, record_cache, fake_redis, payload
    ):
        """Any UUID spelling reads the one canonical cache entry."""
        store = AsyncMock()
        store.create.return_value = 1
        service = PeopleService(store, record_cache)
        record = await service.create_person(payload)

        payload_json = await service.get_person_json(str(record.uid).upper())

        assert payload_json == fake_redis.data[str(record.uid)]
        assert list(fake_redis.data) == [str(record.uid)]
        store.get_by_uid.assert_not_awaited()

    async def test_uppercase_uid_repopulates_canonical_key(
        self, service, store, fake_redis, make_person
    ):
        person = make_person()
        await store.create(person)

        await service.get_person_json(str(person.uid).upper())

        assert list(fake_redis.data) == [str(person.uid)]

    @pytest.mark.parametrize("uid", ["uid-1", "not-a-uuid", "1234", ""])
    async def test_malformed_uid_is_not_found_without_lookup(self, record_cache, uid):
        store = AsyncMock()
        service = PeopleService(store, record_cache)

        with pytest.raises(NotFoundException) as exc_info:
            await service.get_person_json(uid)

        assert exc_info.value.type == "person-not-found"
        store.get_by_uid.assert_not_awaited()

    async def test_miss_loads_from_storage_and_repopulates(
        self, service, store, fake_redis, make_person
    ):
        person = make_person()
        await store.create(person)
        uid = str(person.uid)

        payload = await service.get_person_json(uid)

        assert json.loads(payload)["uuid"] == uid
        assert fake_redis.data[uid] == payload

    async def test_cache_read_error_falls_back_to_storage(
        self, service, store, fake_redis, make_person
    ):
        person = make_person()
        await store.create(person)
        fake_redis.fail_reads = True

        payload = await service.get_person_json(str(person.uid))

        assert json.loads(payload)["name"] == person.name

    async def test_repopulation_failure_is_not_fatal(self, service, store, fake_redis, make_person):
        person = make_person()
        await store.create(person)
        fake_redis.fail_writes = True

        payload = await service.get_person_json(str(person.uid))

        assert json.loads(payload)["apelido"] == person.nickname

    async def test_unknown_uid_is_not_found(self, service):
        uid = str(uuid4())

        with pytest.raises(NotFoundException) as exc_info:
            await service.get_person_json(uid)

        assert exc_info.value.type == "person-not-found"
        assert exc_info.value.instance == f"/pessoas/{uid}"

    async def test_storage_failure_is_backend_failure(self, record_cache):
        store = AsyncMock()
        store.get_by_uid.side_effect = _db_error()
        service = PeopleService(store, record_cache)

        with pytest.raises(BackendFailureException) as exc_info:
            await service.get_person_json(str(uuid4()))

        assert exc_info.value.backend == "storage"

    async def test_cached_payload_matches_storage_payload(self, service, payload, fake_redis):
        """A lookup after a cache eviction returns the same document."""
        record = await service.create_person(payload)
        uid = str(record.uid)
        cached = await service.get_person_json(uid)

        fake_redis.data.clear()

        assert await service.get_person_json(uid) == cached


class TestCountPeople:
    async def test_count(self, service, payload):
        await service.create_person(payload)

        assert await service.count_people() == 1

    async def test_storage_failure(self, record_cache):
        store = AsyncMock()
        store.count.side_effect = _db_error()

        with pytest.raises(BackendFailureException):
            await PeopleService(store, record_cache).count_people()
