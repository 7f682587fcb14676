"""API routes — thin controllers that dispatch user actions to the session."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from repo_explorer.interface.dependencies import get_session
from repo_explorer.interface.error_handlers import status_code_for
from repo_explorer.interface.schemas import (
    AnalysisResponse,
    ErrorResponse,
    NoticeSchema,
    OpenFileResponse,
    PathRequest,
    RepositorySchema,
    SearchRequest,
    SearchResponse,
    ToggleResponse,
    TreeResponse,
    TreeRowSchema,
)
from repo_explorer.services.explore_session import ExploreSession, NoticeLevel

router = APIRouter(
    responses={500: {"model": ErrorResponse, "description": "Unexpected server error"}},
)


@router.post(
    "/search",
    response_model=SearchResponse,
    responses={
        422: {"description": "Invalid GitHub URL"},
        429: {"description": "GitHub API rate limit exceeded"},
        502: {"description": "GitHub API error"},
    },
)
async def search(
    body: SearchRequest,
    response: Response,
    session: ExploreSession = Depends(get_session),
) -> SearchResponse:
    """Load a public GitHub repository into the session."""
    notice = await session.search(body.github_url)
    if notice.is_error:
        response.status_code = status_code_for(notice.error)
        return SearchResponse(notice=NoticeSchema.from_notice(notice))
    assert session.metadata is not None
    return SearchResponse(
        notice=NoticeSchema.from_notice(notice),
        repository=RepositorySchema.from_metadata(session.metadata),
    )


@router.get("/repository", response_model=RepositorySchema)
async def repository(session: ExploreSession = Depends(get_session)) -> RepositorySchema:
    if session.metadata is None:
        raise HTTPException(status_code=404, detail="No repository loaded.")
    return RepositorySchema.from_metadata(session.metadata)


@router.get("/tree", response_model=TreeResponse)
async def tree(session: ExploreSession = Depends(get_session)) -> TreeResponse:
    return TreeResponse(
        rows=[TreeRowSchema.from_row(r) for r in session.rows()],
        analyzing=session.analyzing,
    )


@router.post("/tree/folders/toggle", response_model=ToggleResponse)
async def toggle_folder(
    body: PathRequest,
    session: ExploreSession = Depends(get_session),
) -> ToggleResponse:
    return ToggleResponse(path=body.path, expanded=session.toggle_folder(body.path))


@router.post(
    "/tree/files/open",
    response_model=OpenFileResponse,
    responses={
        409: {"description": "Another analysis is in progress"},
        502: {"description": "GitHub or LLM provider error"},
        503: {"description": "LLM API key not configured"},
    },
)
async def open_file(
    body: PathRequest,
    response: Response,
    session: ExploreSession = Depends(get_session),
) -> OpenFileResponse:
    """Analyse a text file, or toggle its explanation if already analysed."""
    notice = await session.open_file(body.path)
    if notice is not None and notice.is_error:
        response.status_code = status_code_for(notice.error)
    elif notice is not None and notice.level is NoticeLevel.WARNING:
        response.status_code = 409
    return OpenFileResponse(
        path=body.path,
        status=session.analysis_status(body.path),
        notice=NoticeSchema.from_notice(notice) if notice else None,
        analysis=session.analyses.get(body.path),
    )


@router.get("/analyses/{path:path}", response_model=AnalysisResponse)
async def analysis(path: str, session: ExploreSession = Depends(get_session)) -> AnalysisResponse:
    return AnalysisResponse(
        path=path,
        status=session.analysis_status(path),
        analysis=session.analyses.get(path),
    )
