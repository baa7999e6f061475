"""Request/response DTOs"""

from .github import (
    CollectedRepoData,
    Contributor,
    ImportantFile,
    RepoReference,
    TimelineEntry,
)
from .insight import (
    HistoryPage,
    Insight,
    InsightAnalytics,
    InsightRequest,
    PersistedInsight,
    SaveHistoryRequest,
    StructuredAnalysis,
    TitledItem,
)
from .user import CurrentUser, GoogleProfile

__all__ = [
    # GitHub collection
    "RepoReference",
    "Contributor",
    "TimelineEntry",
    "ImportantFile",
    "CollectedRepoData",
    # Insights
    "TitledItem",
    "StructuredAnalysis",
    "InsightAnalytics",
    "Insight",
    "InsightRequest",
    "PersistedInsight",
    "HistoryPage",
    "SaveHistoryRequest",
    # Users
    "CurrentUser",
    "GoogleProfile",
]
