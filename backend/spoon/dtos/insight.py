"""Insight and history DTOs (camelCase on the wire)"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from spoon.dtos.github import Contributor, TimelineEntry


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TitledItem(CamelModel):
    """A key feature or a use case."""

    title: str
    description: str


class StructuredAnalysis(CamelModel):
    summary: str
    key_features: List[TitledItem] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    use_cases: List[TitledItem] = Field(default_factory=list)


class InsightAnalytics(CamelModel):
    contributors: List[Contributor] = Field(default_factory=list)
    project_age: str
    total_commits: Union[int, str] = "Unknown"
    timeline: List[TimelineEntry] = Field(default_factory=list)


class Insight(CamelModel):
    """The result of one repository analysis, as returned and persisted."""

    repo_url: str
    name: str
    summary: str
    key_features: List[TitledItem] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    use_cases: List[TitledItem] = Field(default_factory=list)
    analytics: InsightAnalytics

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class InsightRequest(BaseModel):
    repoUrl: Optional[str] = None


class PersistedInsight(BaseModel):
    """One row of a user's history with its JSON fields decoded."""

    id: str
    user_id: str
    repo_url: str
    repo_name: str
    repo_owner: str
    summary: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    insights: dict = Field(default_factory=dict)
    stars: int = 0
    forks: int = 0
    created_at: datetime


class HistoryPage(BaseModel):
    items: List[PersistedInsight] = Field(default_factory=list)
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next: bool
    has_prev: bool

    def pagination(self) -> dict:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalItems": self.total_items,
            "itemsPerPage": self.items_per_page,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


class SaveHistoryRequest(BaseModel):
    """Body of POST /api/spoons/history."""

    repo_url: str
    repo_name: str
    repo_owner: str
    summary: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    insights: dict = Field(default_factory=dict)
    stars: int = 0
    forks: int = 0
