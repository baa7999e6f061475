"""Insights pipeline: collect -> analyze -> validate -> assemble."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from spoon.dtos.github import CollectedRepoData, RepoReference
from spoon.dtos.insight import Insight, InsightAnalytics, StructuredAnalysis
from spoon.services.analysis.requester import AnalysisRequester
from spoon.services.github.collector import GithubRepoCollector
from spoon.services.github.repo_url import parse_repo_url

logger = logging.getLogger(__name__)


def assemble(
    repo_url: str,
    ref: RepoReference,
    analysis: StructuredAnalysis,
    collected: CollectedRepoData,
) -> Insight:
    """Merge the validated analysis with the collector analytics."""
    return Insight(
        repo_url=repo_url,
        name=ref.repo,
        summary=analysis.summary,
        key_features=analysis.key_features,
        technologies=analysis.technologies,
        use_cases=analysis.use_cases,
        analytics=InsightAnalytics(
            contributors=collected.contributors,
            project_age=collected.project_age,
            total_commits=collected.total_commits,
            timeline=collected.timeline,
        ),
    )


@dataclass(frozen=True)
class GeneratedInsight:
    """An assembled insight plus the repository facts persisted next to it."""

    insight: Insight
    ref: RepoReference
    stars: int
    forks: int
    degraded: bool = False
    degraded_reason: Optional[str] = None


class InsightsService:
    def __init__(self, collector: GithubRepoCollector, requester: AnalysisRequester):
        self.collector = collector
        self.requester = requester

    @classmethod
    def from_settings(cls) -> "InsightsService":
        return cls(GithubRepoCollector.from_settings(), AnalysisRequester.from_settings())

    async def generate(self, repo_url: str) -> GeneratedInsight:
        """
        Run the whole pipeline for one repository URL.

        Raises:
            ValidationError: malformed URL (before any network call)
            GithubError subclasses: the collector failed; the analysis stage
                never fails the request
        """
        ref = parse_repo_url(repo_url)

        collected = await self.collector.collect(ref.owner, ref.repo)

        outcome = await self.requester.request_analysis(repo_url, collected, ref)
        if outcome.degraded:
            logger.warning(f"Using fallback analysis for {ref.full_name}: {outcome.reason}")

        insight = assemble(repo_url, ref, outcome.analysis, collected)
        logger.info(
            f"Insights generated for {ref.full_name} (commits={collected.total_commits})"
        )
        return GeneratedInsight(
            insight=insight,
            ref=ref,
            stars=collected.stars,
            forks=collected.forks,
            degraded=outcome.degraded,
            degraded_reason=outcome.reason,
        )
