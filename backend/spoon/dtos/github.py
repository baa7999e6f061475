"""GitHub collection DTOs"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class RepoReference(BaseModel):
    """Owner/name pair parsed from a repository URL."""

    owner: str
    repo: str

    model_config = ConfigDict(frozen=True)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class Contributor(BaseModel):
    name: str
    contributions: int = Field(0, ge=0)
    avatar: str

    model_config = ConfigDict(frozen=True)


class TimelineEntry(BaseModel):
    date: str  # 4-digit year
    event: str

    model_config = ConfigDict(frozen=True)


class ImportantFile(BaseModel):
    path: str
    content: str

    model_config = ConfigDict(frozen=True)


class CollectedRepoData(BaseModel):
    """Snapshot of one repository taken by the collector for a single request."""

    contributors: List[Contributor] = Field(default_factory=list)
    project_age: str
    total_commits: Union[int, str] = "Unknown"
    timeline: List[TimelineEntry] = Field(default_factory=list)
    stars: int = 0
    forks: int = 0
    language: Optional[str] = None
    description: Optional[str] = None
    topics: List[str] = Field(default_factory=list)
    important_files: Dict[str, ImportantFile] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)
