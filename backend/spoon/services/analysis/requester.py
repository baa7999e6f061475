"""Structured analysis requests against the Gemini ``generateContent`` API.

The request declares a strict response schema, but the response is still
treated as untrusted input: it is parsed leniently and always passed
through the validator. Any failure degrades to the static fallback analysis
instead of propagating.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from spoon.dtos.github import CollectedRepoData, RepoReference
from spoon.dtos.insight import StructuredAnalysis
from spoon.services.analysis.context_builder import build_context
from spoon.services.analysis.validator import fallback, validate

logger = logging.getLogger(__name__)


def _titled_item_schema(title_description: str, description_description: str) -> dict:
    return {
        "type": "OBJECT",
        "properties": {
            "title": {"type": "STRING", "description": title_description},
            "description": {"type": "STRING", "description": description_description},
        },
        "required": ["title", "description"],
        "propertyOrdering": ["title", "description"],
    }


RESPONSE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "summary": {
            "type": "STRING",
            "description": (
                "A comprehensive 3-4 sentence summary of the repository's purpose, main "
                "functionality, and key characteristics based on all available information "
                "including README, configuration files, and project structure"
            ),
        },
        "keyFeatures": {
            "type": "ARRAY",
            "items": _titled_item_schema("Feature name or title", "Brief description of the feature"),
            "minItems": 4,
            "maxItems": 4,
            "description": "List of exactly 4 main features or capabilities",
        },
        "technologies": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": (
                "List of main technologies, frameworks, and tools used based on "
                "configuration files and project structure"
            ),
        },
        "useCases": {
            "type": "ARRAY",
            "items": _titled_item_schema("Use case title", "Description of the use case"),
            "minItems": 4,
            "maxItems": 4,
            "description": "List of exactly 4 potential real-world use cases",
        },
    },
    "required": ["summary", "keyFeatures", "technologies", "useCases"],
    "propertyOrdering": ["summary", "keyFeatures", "technologies", "useCases"],
}


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of one analysis request: either ``ok`` or degraded to the fallback."""

    analysis: StructuredAnalysis
    degraded: bool = False
    reason: Optional[str] = None

    @classmethod
    def ok(cls, analysis: StructuredAnalysis) -> "AnalysisOutcome":
        return cls(analysis=analysis)

    @classmethod
    def fallback_for(cls, ref: RepoReference, reason: str) -> "AnalysisOutcome":
        return cls(analysis=fallback(ref), degraded=True, reason=reason)


class AnalysisUnavailable(Exception):
    """Internal signal: the model produced nothing usable."""


def build_prompt(repo_url: str, collected: CollectedRepoData, ref: RepoReference) -> str:
    topics = ", ".join(collected.topics) or "None"
    return f"""You are an expert software analyst. Analyze this GitHub repository and provide comprehensive insights based on ALL available information including README files, configuration files, and project structure.

Repository URL: {repo_url}
Repository: {ref.owner}/{ref.repo}

GitHub Data:
- Language: {collected.language or 'Unknown'}
- Stars: {collected.stars}
- Forks: {collected.forks}
- Project Age: {collected.project_age}
- Total Commits: {collected.total_commits}
- Topics: {topics}

{build_context(collected.important_files)}

Please provide:
- A comprehensive summary of the repo's purpose, main functionality, and key characteristics based on all available information
- List exactly 4 main key features with descriptions
- Main technologies and frameworks used (extracted from configuration files when available)
- Exactly 4 potential real-world use cases for this code

Be specific, accurate, and focus on the most important aspects. Use information from README files, package.json, requirements.txt, pom.xml, and other configuration files to provide more accurate insights."""


def extract_response_json(body: Any) -> dict:
    """Pull the JSON object out of a generateContent response body."""
    if not isinstance(body, dict):
        raise AnalysisUnavailable("response body is not an object")
    candidates = body.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        raise AnalysisUnavailable("response has no candidates")
    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
    if not text.strip():
        raise AnalysisUnavailable("response has no text")
    try:
        parsed = json.loads(text)
    except ValueError as exc:
        raise AnalysisUnavailable("response text is not valid JSON") from exc
    if not isinstance(parsed, dict):
        raise AnalysisUnavailable("response JSON is not an object")
    return parsed


class AnalysisRequester:
    """Sends one schema-constrained generation request per analysis."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "AnalysisRequester":
        from spoon.config import settings

        return cls(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_API_URL,
            timeout=settings.AI_TIMEOUT_SECONDS,
        )

    def _payload(self, prompt: str) -> dict:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
                "thinkingConfig": {"thinkingBudget": 0},
            },
        }

    async def _generate(self, prompt: str) -> dict:
        url = f"{self._base_url}/models/{self._model}:generateContent"
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(
                url,
                headers={"x-goog-api-key": self._api_key, "Content-Type": "application/json"},
                json=self._payload(prompt),
            )
        response.raise_for_status()
        try:
            body = response.json()
        except ValueError as exc:
            raise AnalysisUnavailable("response body is not JSON") from exc
        return extract_response_json(body)

    async def request_analysis(
        self, repo_url: str, collected: CollectedRepoData, ref: RepoReference
    ) -> AnalysisOutcome:
        """
        Ask the model for a structured analysis of ``ref``.

        Never raises: missing credentials, transport errors, timeouts, HTTP
        errors and unusable payloads all yield a degraded outcome carrying
        the fallback analysis.
        """
        if not self._api_key:
            return AnalysisOutcome.fallback_for(ref, "GEMINI_API_KEY is not configured")

        logger.info(f"Requesting structured analysis for {ref.full_name}")
        try:
            raw = await self._generate(build_prompt(repo_url, collected, ref))
        except httpx.TimeoutException:
            return AnalysisOutcome.fallback_for(ref, "analysis request timed out")
        except httpx.HTTPStatusError as exc:
            return AnalysisOutcome.fallback_for(
                ref, f"analysis request failed with HTTP {exc.response.status_code}"
            )
        except httpx.HTTPError as exc:
            return AnalysisOutcome.fallback_for(ref, f"analysis request failed: {exc}")
        except AnalysisUnavailable as exc:
            return AnalysisOutcome.fallback_for(ref, str(exc))
        except Exception as exc:  # never raises
            logger.exception(f"Unexpected analysis failure for {ref.full_name}")
            return AnalysisOutcome.fallback_for(ref, f"unexpected error: {exc}")

        return AnalysisOutcome.ok(validate(raw))
