"""Service layer for the people feature: write path, point lookup, count.

Handles business logic for:
- registering a person (persist, then write-through to the record cache)
- fetching a person by uid (cache first, storage on a miss)
- counting people

Driver errors from storage or cache are translated here into
``BackendFailureException`` so the HTTP layer answers with a 500 problem
detail; storage misses become ``NotFoundException``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from people_service.core.database import NotFoundError
from people_service.core.exceptions import BackendFailureException, NotFoundException
from people_service.core.services import BaseService
from people_service.features.people.models import Person
from people_service.features.people.schemas import PersonRecord

if TYPE_CHECKING:
    from people_service.features.people.schemas import PersonCreate
    from people_service.infra.cache import RecordCache
    from people_service.infra.database import PersonStore


class PeopleService(BaseService):
    """Person registration and lookup.

    Args:
        store: Durable person storage.
        cache: Record cache keyed by uid.
    """

    def __init__(self, store: PersonStore, cache: RecordCache) -> None:
        super().__init__()
        self.store = store
        self.cache = cache

    async def create_person(self, payload: PersonCreate) -> PersonRecord:
        """Persist a new person and cache its serialized record.

        The record is in the cache before this returns, so an immediate
        lookup by uid is served without touching storage.

        Raises:
            BackendFailureException: If storage or the cache write fails.
        """
        person = Person(
            uid=uuid4(),
            name=payload.name,
            nickname=payload.nickname,
            birthdate=payload.birthdate,
            stack=list(payload.stack or []),
        )

        try:
            sequence_id = await self.store.create(person)
        except SQLAlchemyError as e:
            self.logger.exception("Failed to persist person", extra={"error": str(e)})
            raise BackendFailureException(
                detail="Failed to persist person",
                backend="storage",
            ) from e

        record = PersonRecord.from_model(person)
        uid = str(record.uid)
        try:
            await self.cache.put(uid, record.to_json())
        except RedisError as e:
            self.logger.exception(
                "Failed to cache person",
                extra={"uid": uid, "error": str(e)},
            )
            raise BackendFailureException(
                detail="Failed to cache person",
                backend="cache",
                extra={"uid": uid},
            ) from e

        self.logger.info("Person created", extra={"uid": uid, "sequence_id": sequence_id})
        return record

    async def get_person_json(self, uid: str) -> str:
        """Serialized record of a person, cache first.

        A cache miss, or a cache read error, falls back to storage and
        repopulates the cache on a best-effort basis.

        Any spelling ``UUID`` accepts (upper case, no hyphens, braces) is
        looked up under the canonical form create wrote to the cache.

        Raises:
            NotFoundException: If ``uid`` is not a UUID or no person has it.
            BackendFailureException: If storage fails.
        """
        try:
            uid = str(UUID(uid))
        except ValueError:
            raise self._not_found(uid) from None

        try:
            cached = await self.cache.get(uid)
        except RedisError as e:
            self.logger.warning(
                "Cache read failed, falling back to storage",
                extra={"uid": uid, "error": str(e)},
            )
            cached = None

        if cached is not None:
            self._lazy.debug(lambda: f"service.get_person_json({uid}) -> cache hit")
            return cached

        try:
            person = await self.store.get_by_uid(uid)
        except NotFoundError as e:
            raise self._not_found(uid) from e
        except SQLAlchemyError as e:
            self.logger.exception("Failed to load person", extra={"uid": uid, "error": str(e)})
            raise BackendFailureException(
                detail="Failed to load person",
                backend="storage",
                extra={"uid": uid},
            ) from e

        payload = PersonRecord.from_model(person).to_json()
        try:
            await self.cache.put(uid, payload)
        except RedisError as e:
            self.logger.warning(
                "Cache repopulation failed",
                extra={"uid": uid, "error": str(e)},
            )

        self._lazy.debug(lambda: f"service.get_person_json({uid}) -> loaded from storage")
        return payload

    async def count_people(self) -> int:
        """Total number of registered people.

        Raises:
            BackendFailureException: If storage fails.
        """
        try:
            return await self.store.count()
        except SQLAlchemyError as e:
            self.logger.exception("Failed to count people", extra={"error": str(e)})
            raise BackendFailureException(detail="Failed to count people", backend="storage") from e

    @staticmethod
    def _not_found(uid: str) -> NotFoundException:
        return NotFoundException(
            detail=f"Person {uid} not found",
            type="person-not-found",
            instance=f"/pessoas/{uid}",
            extra={"uid": uid},
        )


__all__ = ["PeopleService"]
