"""Normalization of AI output and the static fallback analysis.

``validate`` is total: whatever the model returned, the result satisfies the
StructuredAnalysis shape (at most 4 features, at most 8 technologies, at
most 4 use cases, no missing titles or descriptions). Lists are truncated,
never padded.
"""

from __future__ import annotations

from typing import Any, List

from spoon.dtos.github import RepoReference
from spoon.dtos.insight import StructuredAnalysis, TitledItem

MAX_FEATURES = 4
MAX_TECHNOLOGIES = 8
MAX_USE_CASES = 4

DEFAULT_SUMMARY = (
    "This project appears to be a software application with various features and capabilities."
)
DEFAULT_FEATURE_TITLE = "Feature"
DEFAULT_FEATURE_DESCRIPTION = "A key feature of this project."
DEFAULT_USE_CASE_TITLE = "Use Case"
DEFAULT_USE_CASE_DESCRIPTION = "A potential application for this project."


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _field(raw: Any, *names: str) -> Any:
    """Read the first present key (camelCase or snake_case)."""
    if not isinstance(raw, dict):
        return None
    for name in names:
        if name in raw:
            return raw[name]
    return None


def _titled_items(
    value: Any, limit: int, default_title: str, default_description: str
) -> List[TitledItem]:
    if not isinstance(value, (list, tuple)):
        return []
    items = []
    for entry in list(value)[:limit]:
        if isinstance(entry, TitledItem):
            entry = entry.model_dump()
        if not isinstance(entry, dict):
            entry = {}
        items.append(
            TitledItem(
                title=_text(entry.get("title")) or default_title,
                description=_text(entry.get("description")) or default_description,
            )
        )
    return items


def _technologies(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    names = []
    for entry in value:
        if entry is None:
            continue
        name = entry.strip() if isinstance(entry, str) else str(entry)
        if name:
            names.append(name)
    return names[:MAX_TECHNOLOGIES]


def validate(raw: Any) -> StructuredAnalysis:
    """Coerce any AI payload (dict, StructuredAnalysis, or junk) into a StructuredAnalysis."""
    if isinstance(raw, StructuredAnalysis):
        raw = raw.model_dump(by_alias=True)

    return StructuredAnalysis(
        summary=_text(_field(raw, "summary")) or DEFAULT_SUMMARY,
        key_features=_titled_items(
            _field(raw, "keyFeatures", "key_features"),
            MAX_FEATURES,
            DEFAULT_FEATURE_TITLE,
            DEFAULT_FEATURE_DESCRIPTION,
        ),
        technologies=_technologies(_field(raw, "technologies")),
        use_cases=_titled_items(
            _field(raw, "useCases", "use_cases"),
            MAX_USE_CASES,
            DEFAULT_USE_CASE_TITLE,
            DEFAULT_USE_CASE_DESCRIPTION,
        ),
    )


def fallback(ref: RepoReference) -> StructuredAnalysis:
    """Static analysis used when no AI response could be obtained at all."""
    return StructuredAnalysis(
        summary=(
            f"This is a GitHub repository ({ref.owner}/{ref.repo}) that contains software "
            "code and documentation. The repository appears to be a software project with "
            "various features and capabilities."
        ),
        key_features=[
            TitledItem(
                title="Source Code Management",
                description="Contains organized source code files and project structure",
            ),
            TitledItem(
                title="Documentation",
                description="Includes README files and project documentation for easy understanding",
            ),
            TitledItem(
                title="Version Control",
                description="Git-based version control for collaborative development",
            ),
            TitledItem(
                title="Project Structure",
                description="Well-organized project structure with configuration files",
            ),
        ],
        technologies=["Git", "Markdown", "Various programming languages", "Configuration files"],
        use_cases=[
            TitledItem(
                title="Software Development",
                description="Source code management and collaborative development workflows",
            ),
            TitledItem(
                title="Project Documentation",
                description="Documentation and project information sharing for teams",
            ),
            TitledItem(
                title="Code Review",
                description="Version control and code review processes",
            ),
            TitledItem(
                title="Collaborative Work",
                description="Team collaboration and code sharing across developers",
            ),
        ],
    )
