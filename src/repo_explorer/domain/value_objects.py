"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from repo_explorer.domain.exceptions import InvalidGitHubUrlError

_GITHUB_URL_RE = re.compile(
    r"github\.com/(?P<owner>[^/\s?#]+)/(?P<repo>[^/\s?#]+)", re.IGNORECASE
)


@dataclass(frozen=True, slots=True)
class GitHubUrl:
    """Owner/repo pair extracted from a GitHub repository URL.

    Accepts anything that contains ``github.com/<owner>/<repo>``, e.g.
    ``https://github.com/psf/requests/tree/main/src``; everything after the
    repository name is ignored and a trailing ``.git`` is dropped.
    """

    owner: str
    repo: str
    raw: str

    @classmethod
    def from_string(cls, url: str) -> GitHubUrl:
        """Parse a raw URL string."""
        url = url.strip()
        match = _GITHUB_URL_RE.search(url)
        if not match:
            raise InvalidGitHubUrlError(
                "Please enter a valid GitHub repository URL "
                "(e.g. https://github.com/<owner>/<repo>)."
            )
        repo = match["repo"]
        if repo.endswith(".git"):
            repo = repo[: -len(".git")]
        if not repo:
            raise InvalidGitHubUrlError(f"Invalid GitHub URL: '{url}'.")
        return cls(owner=match["owner"], repo=repo, raw=url)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"
