"""FastAPI dependencies of the people feature."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from people_service.core.dependencies import AppContext, get_app_context
from people_service.features.people.listing import ListingOrchestrator
from people_service.features.people.service import PeopleService


def get_people_service(
    context: Annotated[AppContext, Depends(get_app_context)],
) -> PeopleService:
    return PeopleService(context.store, context.cache)


def get_listing_orchestrator(
    context: Annotated[AppContext, Depends(get_app_context)],
) -> ListingOrchestrator:
    return ListingOrchestrator(context.store)


PeopleServiceDep = Annotated[PeopleService, Depends(get_people_service)]
ListingOrchestratorDep = Annotated[ListingOrchestrator, Depends(get_listing_orchestrator)]

__all__ = [
    "ListingOrchestratorDep",
    "PeopleServiceDep",
    "get_listing_orchestrator",
    "get_people_service",
]
