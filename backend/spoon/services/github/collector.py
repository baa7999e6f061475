"""GitHub repository data collector.

Gathers everything the insights pipeline needs about one repository from the
GitHub REST API: metadata, top contributors, a commit-count estimate, a small
timeline and the contents of a fixed set of configuration/documentation
files. One attempt per call; no retries.
"""

from __future__ import annotations

import base64
import binascii
import logging
import math
import time
from datetime import datetime
from typing import Callable, Dict, List, Optional, Union
from urllib.parse import quote

import httpx

from spoon.dtos.github import (
    CollectedRepoData,
    Contributor,
    ImportantFile,
    TimelineEntry,
)
from spoon.services.github.exceptions import (
    GithubError,
    GithubNotFoundError,
    GithubRateLimitError,
    GithubUnauthorizedError,
    GithubUpstreamError,
)
from spoon.services.github.important_files import IMPORTANT_FILES
from spoon.utils.datetime import parse_github_timestamp, utc_now

logger = logging.getLogger(__name__)

MAX_CONTRIBUTORS = 5
DAYS_PER_YEAR = 365.25
UNKNOWN_COMMITS = "Unknown"
USER_AGENT = "Spoon-AI-Insights"


# ============================================================================
# Pure helpers
# ============================================================================


def avatar_initials(login: str) -> str:
    """First two characters of the login, upper-cased."""
    return (login or "")[:2].upper()


def project_age_label(created_at: Optional[datetime], now: datetime) -> str:
    """Whole years since creation, e.g. "Less than 1 year", "1 year", "3 years"."""
    if created_at is None:
        return "Unknown"
    years = math.floor((now - created_at).total_seconds() / (DAYS_PER_YEAR * 86400))
    if years <= 0:
        return "Less than 1 year"
    return f"{years} year{'s' if years > 1 else ''}"


def build_timeline(
    created_at: Optional[datetime],
    updated_at: Optional[datetime],
    pushed_at: Optional[datetime],
) -> List[TimelineEntry]:
    """
    Build the created/updated/pushed timeline.

    "Last Updated" is only added when it differs from creation and "Last
    Commit" only when it differs from the update. Entries falling in a year
    that is already present are dropped (first one wins); the result is
    sorted by year.
    """
    candidates = []
    if created_at is not None:
        candidates.append((created_at, "Project Created"))
    if updated_at is not None and updated_at != created_at:
        candidates.append((updated_at, "Last Updated"))
    if pushed_at is not None and pushed_at != updated_at:
        candidates.append((pushed_at, "Last Commit"))

    seen_years = set()
    timeline: List[TimelineEntry] = []
    for moment, event in candidates:
        year = f"{moment.year:04d}"
        if year in seen_years:
            continue
        seen_years.add(year)
        timeline.append(TimelineEntry(date=year, event=event))

    return sorted(timeline, key=lambda entry: int(entry.date))


def last_page_from_links(links: Dict[str, Dict[str, str]]) -> Union[int, str]:
    """
    Read the page number of the ``rel="last"`` link.

    With ``per_page=1`` the last page number equals the commit count. The
    value is an estimate tied to that page size; no link means "Unknown".
    """
    last = links.get("last") if links else None
    if not last or not last.get("url"):
        return UNKNOWN_COMMITS
    page = httpx.URL(last["url"]).params.get("page")
    if page is None or not page.isdigit():
        return UNKNOWN_COMMITS
    return int(page)


def repo_api_path(owner: str, repo: str) -> str:
    """``/repos/<owner>/<repo>`` with each segment percent-escaped."""
    return f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"


def decode_content(payload: dict) -> Optional[str]:
    """Decode a base64 ``contents`` API payload; None for non-files or empty content."""
    if not isinstance(payload, dict) or payload.get("type") != "file":
        return None
    encoded = payload.get("content") or ""
    try:
        raw = base64.b64decode(encoded)
    except (binascii.Error, ValueError):
        return None
    text = raw.decode("utf-8", errors="replace")
    return text or None


# ============================================================================
# Collector
# ============================================================================


class GithubRepoCollector:
    """Collects repository data through the GitHub REST API."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._clock = clock

    @classmethod
    def from_settings(cls) -> "GithubRepoCollector":
        from spoon.config import settings

        return cls(
            token=settings.GITHUB_TOKEN,
            base_url=settings.GITHUB_API_URL,
            timeout=settings.GITHUB_TIMEOUT_SECONDS,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers(),
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _get(
        self, client: httpx.AsyncClient, path: str, params: Optional[dict] = None
    ) -> httpx.Response:
        """Issue one GET and translate failures into collector exceptions."""
        try:
            response = await client.get(path, params=params)
        except httpx.TimeoutException as exc:
            raise GithubUpstreamError(f"GitHub request timed out: {path}") from exc
        except httpx.HTTPError as exc:
            raise GithubUpstreamError(f"GitHub request failed: {exc}") from exc

        if response.status_code == 404:
            raise GithubNotFoundError()
        if response.status_code == 403:
            reset = response.headers.get("X-RateLimit-Reset")
            retry_after = None
            if reset and reset.isdigit():
                retry_after = max(0.0, int(reset) - time.time())
            raise GithubRateLimitError(retry_after=retry_after)
        if response.status_code == 401:
            raise GithubUnauthorizedError()
        if response.status_code >= 400:
            raise GithubUpstreamError(
                f"GitHub returned {response.status_code} for {path}"
            )
        return response

    @staticmethod
    def _json(response: httpx.Response):
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise GithubUpstreamError("GitHub returned malformed JSON") from exc

    async def collect(self, owner: str, repo: str) -> CollectedRepoData:
        """
        Collect a snapshot of ``owner/repo``.

        Raises:
            GithubNotFoundError: 404 (missing or private repository)
            GithubRateLimitError: 403
            GithubUnauthorizedError: 401
            GithubUpstreamError: any other failure
        """
        logger.info(f"Fetching GitHub data for {owner}/{repo}")
        # Segments may hold "?" or "#"; escape them so they stay in the path.
        repo_path = repo_api_path(owner, repo)
        async with self._client() as client:
            repo_data = self._json(await self._get(client, repo_path)) or {}
            if not isinstance(repo_data, dict):
                raise GithubUpstreamError("Unexpected repository payload")

            contributors = await self._fetch_contributors(client, repo_path)
            total_commits = await self._estimate_commit_count(client, repo_path)
            important_files = await self._fetch_important_files(client, repo_path)

        created_at = parse_github_timestamp(repo_data.get("created_at"))
        updated_at = parse_github_timestamp(repo_data.get("updated_at"))
        pushed_at = parse_github_timestamp(repo_data.get("pushed_at"))

        return CollectedRepoData(
            contributors=contributors,
            project_age=project_age_label(created_at, self._clock()),
            total_commits=total_commits,
            timeline=build_timeline(created_at, updated_at, pushed_at),
            stars=repo_data.get("stargazers_count") or 0,
            forks=repo_data.get("forks_count") or 0,
            language=repo_data.get("language"),
            description=repo_data.get("description"),
            topics=list(dict.fromkeys(repo_data.get("topics") or [])),
            important_files=important_files,
        )

    async def _fetch_contributors(
        self, client: httpx.AsyncClient, repo_path: str
    ) -> List[Contributor]:
        response = await self._get(
            client,
            f"{repo_path}/contributors",
            params={"per_page": MAX_CONTRIBUTORS},
        )
        payload = self._json(response)
        if not isinstance(payload, list):
            payload = []
        contributors = []
        for item in payload[:MAX_CONTRIBUTORS]:
            login = item.get("login") or item.get("name") or "anonymous"
            contributors.append(
                Contributor(
                    name=login,
                    contributions=max(0, int(item.get("contributions") or 0)),
                    avatar=avatar_initials(login),
                )
            )
        return contributors

    async def _estimate_commit_count(
        self, client: httpx.AsyncClient, repo_path: str
    ) -> Union[int, str]:
        response = await self._get(
            client, f"{repo_path}/commits", params={"per_page": 1}
        )
        return last_page_from_links(response.links)

    async def _fetch_important_files(
        self, client: httpx.AsyncClient, repo_path: str
    ) -> Dict[str, ImportantFile]:
        found: Dict[str, ImportantFile] = {}
        for spec in IMPORTANT_FILES:
            for path in spec.candidates:
                content = await self._fetch_file(client, repo_path, path)
                if content:
                    found[spec.key] = ImportantFile(path=path, content=content)
                    break
        return found

    async def _fetch_file(
        self, client: httpx.AsyncClient, repo_path: str, path: str
    ) -> Optional[str]:
        """Fetch one file; absence and failures both yield None."""
        try:
            response = await self._get(client, f"{repo_path}/contents/{path}")
            return decode_content(self._json(response))
        except GithubNotFoundError:
            return None
        except GithubError as exc:
            logger.warning(f"Could not fetch {path} from {repo_path}: {exc}")
            return None
