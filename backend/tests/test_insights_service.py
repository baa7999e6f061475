import unittest
from unittest.mock import AsyncMock, MagicMock

from spoon.dtos.github import CollectedRepoData, Contributor, RepoReference, TimelineEntry
from spoon.services.analysis.requester import AnalysisOutcome
from spoon.services.analysis.validator import validate
from spoon.services.exceptions import ValidationError
from spoon.services.github.exceptions import GithubNotFoundError
from spoon.services.insights_service import InsightsService, assemble

REF = RepoReference(owner="octocat", repo="hello")
URL = "https://github.com/octocat/hello"
COLLECTED = CollectedRepoData(
    contributors=[Contributor(name="octocat", contributions=12, avatar="OC")],
    project_age="2 years",
    total_commits=120,
    timeline=[TimelineEntry(date="2022", event="Project Created")],
    stars=9,
    forks=4,
)


class TestAssemble(unittest.TestCase):
    def test_merges_analysis_with_analytics(self):
        analysis = validate({"summary": "Greets people.", "technologies": ["Go"]})
        insight = assemble(URL, REF, analysis, COLLECTED)
        wire = insight.model_dump(mode="json", by_alias=True)

        self.assertEqual(wire["repoUrl"], URL)
        self.assertEqual(wire["name"], "hello")
        self.assertEqual(wire["summary"], "Greets people.")
        self.assertEqual(wire["keyFeatures"], [])
        self.assertEqual(
            wire["analytics"],
            {
                "contributors": [{"name": "octocat", "contributions": 12, "avatar": "OC"}],
                "projectAge": "2 years",
                "totalCommits": 120,
                "timeline": [{"date": "2022", "event": "Project Created"}],
            },
        )


class TestInsightsService(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.collector = MagicMock()
        self.collector.collect = AsyncMock(return_value=COLLECTED)
        self.requester = MagicMock()
        self.service = InsightsService(self.collector, self.requester)

    async def test_generate_runs_the_pipeline(self):
        self.requester.request_analysis = AsyncMock(
            return_value=AnalysisOutcome.ok(validate({"summary": "AI summary"}))
        )
        generated = await self.service.generate(URL)

        self.collector.collect.assert_awaited_once_with("octocat", "hello")
        self.assertEqual(generated.insight.summary, "AI summary")
        self.assertEqual((generated.stars, generated.forks), (9, 4))
        self.assertFalse(generated.degraded)

    async def test_degraded_analysis_still_produces_insight(self):
        self.requester.request_analysis = AsyncMock(
            return_value=AnalysisOutcome.fallback_for(REF, "analysis request timed out")
        )
        generated = await self.service.generate(URL)

        self.assertTrue(generated.degraded)
        self.assertEqual(generated.degraded_reason, "analysis request timed out")
        self.assertIn("octocat/hello", generated.insight.summary)
        self.assertEqual(generated.insight.analytics.total_commits, 120)

    async def test_invalid_url_fails_before_network(self):
        with self.assertRaises(ValidationError):
            await self.service.generate("https://github.com/octocat")
        self.collector.collect.assert_not_called()

    async def test_collector_errors_propagate(self):
        self.collector.collect = AsyncMock(side_effect=GithubNotFoundError())
        self.requester.request_analysis = AsyncMock()
        with self.assertRaises(GithubNotFoundError):
            await self.service.generate(URL)
        self.requester.request_analysis.assert_not_called()


if __name__ == "__main__":
    unittest.main()
