"""Renders collected repository files into a bounded prompt context block."""

from __future__ import annotations

from typing import Mapping, Optional

from spoon.dtos.github import ImportantFile
from spoon.services.github.important_files import IMPORTANT_FILES

TRUNCATION_MARKER = "..."


def _excerpt(content: str, budget: int) -> str:
    if len(content) > budget:
        return content[:budget] + TRUNCATION_MARKER
    return content


def build_context(important_files: Optional[Mapping[str, ImportantFile]]) -> str:
    """
    Build the "Additional Repository Files Analysis" block of the prompt.

    Files are rendered in catalogue order, each cut to its character budget,
    followed by a line listing the files that were found.
    """
    important_files = important_files or {}
    parts = ["\nAdditional Repository Files Analysis:\n"]

    found_paths = []
    for spec in IMPORTANT_FILES:
        file = important_files.get(spec.key)
        if file is None:
            continue
        found_paths.append(file.path)
        parts.append(f"\n{spec.label} ({file.path}):\n{_excerpt(file.content, spec.budget)}\n")

    if found_paths:
        parts.append(f"\nFound Configuration Files: {', '.join(found_paths)}\n")
    else:
        parts.append("\nNo additional configuration files found.\n")

    return "".join(parts)
