"""Tests for GitHub URL parsing."""

import pytest

from repo_explorer.domain.exceptions import InvalidGitHubUrlError
from repo_explorer.domain.value_objects import GitHubUrl


@pytest.mark.parametrize(
    "raw",
    [
        "https://github.com/acme/widgets",
        "http://github.com/acme/widgets/",
        "github.com/acme/widgets",
        "https://www.github.com/acme/widgets",
        "  https://github.com/acme/widgets  ",
        "https://github.com/acme/widgets.git",
        "https://github.com/acme/widgets/tree/main/src",
        "https://github.com/acme/widgets?tab=readme",
    ],
)
def test_extracts_owner_and_repo(raw):
    url = GitHubUrl.from_string(raw)
    assert (url.owner, url.repo) == ("acme", "widgets")
    assert url.full_name == "acme/widgets"


def test_keeps_raw_url():
    assert GitHubUrl.from_string(" https://github.com/a/b ").raw == "https://github.com/a/b"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "acme/widgets",
        "https://gitlab.com/acme/widgets",
        "https://github.com/acme",
        "https://github.com/acme/",
        "https://github.com/acme/.git",
    ],
)
def test_rejects_invalid(raw):
    with pytest.raises(InvalidGitHubUrlError):
        GitHubUrl.from_string(raw)
