"""People listing: one page of search results plus navigation links.

Pages are walked forward with a cursor (``pagina``). The way back is not
stored server side: every issued link carries the cursors of the pages
already visited in ``paginationStack`` (comma separated), so a "previous"
link pops the last one.

    GET /pessoas?t=ana                               first page
    GET /pessoas?t=ana&pagina=C1                     second page
    GET /pessoas?t=ana&pagina=C2&paginationStack=C1  third page

On the third page the previous link is ``?t=ana&pagina=C1`` and the next
link is ``?t=ana&pagina=C3&paginationStack=C1,C2``. On the second page the
stack is empty, so the previous link is ``?t=ana``: the first page, never a
bare ``/pessoas``, which would answer 400 for the missing term.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError
from starlette.datastructures import URL

from people_service.core.exceptions import BackendFailureException
from people_service.core.pagination import PAGE_SIZE, compose_query, encode_cursor
from people_service.core.services import BaseService
from people_service.features.people.schemas import PeoplePage, PersonRecord

if TYPE_CHECKING:
    from collections.abc import Sequence

    from people_service.infra.database import PersonStore

NavigationStack = tuple[str, ...]

STACK_SEPARATOR = ","


def parse_navigation_stack(raw: str | None) -> NavigationStack:
    """Split a ``paginationStack`` value, dropping empty entries."""
    if not raw:
        return ()
    return tuple(token for token in raw.split(STACK_SEPARATOR) if token)


def join_navigation_stack(stack: Sequence[str]) -> str:
    return STACK_SEPARATOR.join(stack)


class ListingOrchestrator(BaseService):
    """Build listing pages from storage.

    Args:
        store: Durable person storage.
    """

    def __init__(self, store: PersonStore) -> None:
        super().__init__()
        self.store = store

    async def build_page(
        self,
        search_term: str,
        cursor: str | None,
        navigation_stack: Sequence[str],
        url: str | URL,
    ) -> PeoplePage:
        """Fetch one page and derive its previous/next links.

        Args:
            search_term: Non-empty substring matched on name or nickname.
            cursor: Cursor of the requested page (None on the first page).
            navigation_stack: Cursors of the pages visited before this one.
            url: URL of the current request; links keep its scheme, host
                and path.

        Raises:
            BackendFailureException: If storage fails.
        """
        query = compose_query(search_term, cursor)
        try:
            people = await self.store.list(query)
        except SQLAlchemyError as e:
            self.logger.exception(
                "Failed to list people",
                extra={"search_term": search_term, "error": str(e)},
            )
            raise BackendFailureException(detail="Failed to list people", backend="storage") from e

        base = URL(str(url))
        stack = tuple(navigation_stack)
        previous_link: str | None = None
        next_link: str | None = None

        if cursor:
            if stack:
                previous_link = self._link(base, search_term, stack[-1], stack[:-1])
            else:
                previous_link = self._link(base, search_term, None, ())

        if len(people) == PAGE_SIZE:
            next_stack = (*stack, cursor) if cursor else stack
            next_link = self._link(base, search_term, encode_cursor(people), next_stack)

        self._lazy.debug(
            lambda: f"listing.build_page(t={search_term!r}, pagina={cursor!r}) -> "
            f"{len(people)} records, prev={previous_link is not None}, next={next_link is not None}"
        )
        return PeoplePage(
            resultados=[PersonRecord.from_model(person) for person in people],
            anterior=previous_link,
            proxima=next_link,
        )

    @staticmethod
    def _link(
        base: URL,
        search_term: str,
        cursor: str | None,
        stack: Sequence[str],
    ) -> str:
        params: dict[str, str] = {"t": search_term}
        if cursor:
            params["pagina"] = cursor
        if stack:
            params["paginationStack"] = join_navigation_stack(stack)
        return str(base.replace_query_params(**params))


__all__ = [
    "ListingOrchestrator",
    "NavigationStack",
    "join_navigation_stack",
    "parse_navigation_stack",
]
