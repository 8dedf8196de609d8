"""Download log: record a completed download, list the caller's history."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from question_bank.api.v1.dependencies import CurrentSession, UserSession, get_download_service
from question_bank.application.use_cases import DownloadService
from question_bank.core.limiter import limit_writes
from question_bank.schemas.download import DownloadLogRequest, DownloadLogResponse

router = APIRouter()

Downloads = Annotated[DownloadService, Depends(get_download_service)]


@router.post("", response_model=DownloadLogResponse, status_code=201)
@limit_writes
async def log_download(
    request: Request,
    body: DownloadLogRequest,
    session: CurrentSession,
    downloads: Downloads,
) -> DownloadLogResponse:
    """Log one download; guests get 401 ('Please log in to download')."""
    entry = await downloads.record(
        session,
        question_id=str(body.question_id) if body.question_id else None,
        file_path=body.file_path,
    )
    return DownloadLogResponse.model_validate(entry)


@router.get("", response_model=list[DownloadLogResponse])
async def download_history(
    session: UserSession, downloads: Downloads
) -> list[DownloadLogResponse]:
    entries = await downloads.history(session.user_id or "")
    return [DownloadLogResponse.model_validate(e) for e in entries]
