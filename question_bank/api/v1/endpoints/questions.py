"""Past question catalog: search, recent, departments, detail, share link."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from question_bank.api.v1.dependencies import get_catalog_service
from question_bank.application.dtos.question import QuestionFilters
from question_bank.application.use_cases import QuestionCatalogService
from question_bank.schemas.question import QuestionResponse, ShareLinkResponse

router = APIRouter()

Catalog = Annotated[QuestionCatalogService, Depends(get_catalog_service)]


@router.get("", response_model=list[QuestionResponse])
async def search_questions(
    catalog: Catalog,
    q: str | None = Query(None, max_length=200, description="Course title or code"),
    department: str | None = Query(None),
    level: str | None = Query(None),
    session: str | None = Query(None),
    semester: str | None = Query(None),
) -> list[QuestionResponse]:
    """Search by course title/code substring plus equality filters, newest first."""
    filters = QuestionFilters(
        q=q or None,
        department=department or None,
        level=level or None,
        session=session or None,
        semester=semester or None,
    )
    results = await catalog.search(filters)
    return [QuestionResponse.from_result(r) for r in results]


@router.get("/recent", response_model=list[QuestionResponse])
async def recent_questions(catalog: Catalog) -> list[QuestionResponse]:
    return [QuestionResponse.from_result(r) for r in await catalog.recent()]


@router.get("/departments", response_model=list[str])
async def list_departments(catalog: Catalog) -> list[str]:
    return await catalog.departments()


@router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(question_id: UUID, catalog: Catalog) -> QuestionResponse:
    return QuestionResponse.from_result(await catalog.get(str(question_id)))


@router.get("/{question_id}/share", response_model=ShareLinkResponse)
async def share_question(question_id: UUID, catalog: Catalog) -> ShareLinkResponse:
    """Title and public URL for sharing a document."""
    link = await catalog.share_link(str(question_id))
    return ShareLinkResponse(title=link.title, url=link.url)
