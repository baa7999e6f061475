"""Parsing of ``https://github.com/<owner>/<repo>`` URLs."""

from __future__ import annotations

import re

from spoon.dtos.github import RepoReference
from spoon.services.exceptions import ValidationError

GITHUB_REPO_URL_RE = re.compile(r"https://github\.com/([^/\s]+)/([^/\s]+)")


def parse_repo_url(repo_url: str | None) -> RepoReference:
    """
    Parse a repository URL into owner and name.

    Only ``https://github.com/<owner>/<repo>`` with exactly two path segments
    is accepted.

    Raises:
        ValidationError: missing value, other scheme/host, or wrong number
            of path segments
    """
    if not repo_url or not isinstance(repo_url, str):
        raise ValidationError("Please provide a valid GitHub repository URL")

    match = GITHUB_REPO_URL_RE.fullmatch(repo_url)
    if not match:
        raise ValidationError(
            "Please provide a valid GitHub repository URL "
            "(e.g., https://github.com/username/repo)"
        )
    return RepoReference(owner=match.group(1), repo=match.group(2))
