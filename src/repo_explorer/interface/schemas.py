"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from repo_explorer.domain.entities import AnalysisStatus, RepoMetadata, TreeRow
from repo_explorer.services.explore_session import Notice


class SearchRequest(BaseModel):
    """Request body for ``POST /search``."""

    github_url: str

    @field_validator("github_url")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "github_url must not be empty."
            raise ValueError(msg)
        return stripped


class PathRequest(BaseModel):
    """Request body naming a single tree path."""

    path: str


class NoticeSchema(BaseModel):
    title: str
    description: str = ""
    level: str = "info"

    @classmethod
    def from_notice(cls, notice: Notice) -> NoticeSchema:
        return cls(
            title=notice.title,
            description=notice.description,
            level=notice.level.value,
        )


class RepositorySchema(BaseModel):
    """Repository metadata as shown in the info panel."""

    name: str
    full_name: str
    description: str | None = None
    stars: int = 0
    forks: int = 0
    watchers: int = 0
    open_issues: int = 0
    created_at: str | None = None
    updated_at: str | None = None
    pushed_at: str | None = None
    default_branch: str
    language: str | None = None
    license: str = "Not specified"
    html_url: str | None = None

    @classmethod
    def from_metadata(cls, meta: RepoMetadata) -> RepositorySchema:
        return cls(
            name=meta.name,
            full_name=meta.full_name,
            description=meta.description,
            stars=meta.stars,
            forks=meta.forks,
            watchers=meta.watchers,
            open_issues=meta.open_issues,
            created_at=meta.created_at,
            updated_at=meta.updated_at,
            pushed_at=meta.pushed_at,
            default_branch=meta.default_branch,
            language=meta.language,
            license=meta.license_name or "Not specified",
            html_url=meta.html_url,
        )


class SearchResponse(BaseModel):
    notice: NoticeSchema
    repository: RepositorySchema | None = None


class TreeRowSchema(BaseModel):
    path: str
    name: str
    depth: int
    is_folder: bool
    expanded: bool
    interactive: bool
    has_analysis: bool

    @classmethod
    def from_row(cls, row: TreeRow) -> TreeRowSchema:
        return cls(
            path=row.path,
            name=row.name,
            depth=row.depth,
            is_folder=row.is_folder,
            expanded=row.expanded,
            interactive=row.interactive,
            has_analysis=row.has_analysis,
        )


class TreeResponse(BaseModel):
    rows: list[TreeRowSchema]
    analyzing: str | None = None


class ToggleResponse(BaseModel):
    path: str
    expanded: bool


class OpenFileResponse(BaseModel):
    path: str
    status: AnalysisStatus
    notice: NoticeSchema | None = None
    analysis: str | None = None


class AnalysisResponse(BaseModel):
    path: str
    status: AnalysisStatus
    analysis: str | None = None


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
