"""API router for the people feature.

Endpoints:
    POST /pessoas            - Register a person
    GET  /pessoas            - Search people (paginated by cursor)
    GET  /pessoas/{id}       - Fetch a person by uid
    GET  /contagem-pessoas   - Count registered people

Example Usage:
    POST /pessoas
    {"nome": "John Doe", "apelido": "johnd", "nascimento": "1990-01-01", "stack": ["python"]}

    GET /pessoas?t=john
    {"resultados": [...], "proxima": "http://host/pessoas?t=john&pagina=5-1700000000"}
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Request, Response, status
from fastapi.responses import PlainTextResponse

from people_service.core.exceptions import BadRequestException
from people_service.features.people.dependencies import (  # noqa: TC001
    ListingOrchestratorDep,
    PeopleServiceDep,
)
from people_service.features.people.listing import parse_navigation_stack
from people_service.features.people.schemas import PeoplePage, PersonCreate, PersonCreated

router = APIRouter(tags=["people"])
logger = logging.getLogger(__name__)

SEARCH_TERM_REQUIRED = "O parâmetro 't' é obrigatório"


@router.post(
    "/pessoas",
    response_model=PersonCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Register a person",
    responses={
        422: {"description": "Invalid payload"},
        500: {"description": "Storage or cache failure"},
    },
)
async def create_person(
    payload: PersonCreate,
    response: Response,
    service: PeopleServiceDep,
) -> PersonCreated:
    """Persist a person and return its uid; ``Location`` points at the record."""
    record = await service.create_person(payload)
    response.headers["Location"] = f"/pessoas/{record.uid}"
    return PersonCreated(uuid=record.uid)


@router.get(
    "/pessoas",
    response_model=PeoplePage,
    response_model_exclude_none=True,
    summary="Search people",
    description=(
        "Case-insensitive substring search on name or nickname, five records "
        "per page. Follow `proxima`/`anterior` to navigate."
    ),
    responses={400: {"description": "Missing search term"}},
)
async def list_people(
    request: Request,
    listing: ListingOrchestratorDep,
    t: str | None = Query(default=None, description="Search term (required)"),
    pagina: str | None = Query(default=None, description="Cursor of the requested page"),
    pagination_stack: str | None = Query(
        default=None,
        alias="paginationStack",
        description="Comma-separated cursors of the pages visited before",
    ),
) -> PeoplePage:
    if not t:
        raise BadRequestException(
            detail=SEARCH_TERM_REQUIRED,
            type="missing-search-term",
            instance=request.url.path,
        )

    return await listing.build_page(
        search_term=t,
        cursor=pagina,
        navigation_stack=parse_navigation_stack(pagination_stack),
        url=request.url,
    )


@router.get(
    "/pessoas/{uid}",
    summary="Fetch a person",
    responses={
        200: {"description": "Serialized person", "content": {"application/json": {}}},
        404: {"description": "Person not found"},
    },
)
async def get_person(uid: str, service: PeopleServiceDep) -> Response:
    payload = await service.get_person_json(uid)
    return Response(content=payload, media_type="application/json")


@router.get(
    "/contagem-pessoas",
    response_class=PlainTextResponse,
    summary="Count people",
)
async def count_people(service: PeopleServiceDep) -> PlainTextResponse:
    total = await service.count_people()
    return PlainTextResponse(str(total))
