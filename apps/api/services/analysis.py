"""Competitor analysis stage: page text -> model -> structured idea record."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from services.collaborators import get_completion_client
from services.errors import MissingRequiredFieldError
from services.ports import CompletionClient, IdeaStore, Message, PageSource
from services.scraper import extract_page_text
from services.structured_response import extract_json

logger = logging.getLogger(__name__)

ANALYSIS_SYSTEM_PROMPT = (
    "Identify competitor name and 3 weaknesses. Output valid JSON: "
    '{ "competitor_name": "Name", "weaknesses": ["Point 1", "Point 2", "Point 3"] }'
)


@dataclass
class AnalysisResult:
    id: str
    competitor_name: str
    weaknesses: List[str] = field(default_factory=list)

    def as_response(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "competitor_name": self.competitor_name,
            "weaknesses": list(self.weaknesses),
        }


def build_analysis_messages(url: str, text: str) -> List[Message]:
    return [
        {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
        {"role": "user", "content": f"URL: {url}\nContent: {text}"},
    ]


def validate_analysis_payload(payload: Any) -> tuple[str, List[str]]:
    """Return ``(competitor_name, weaknesses)`` or raise ``MissingRequiredFieldError``."""
    if not isinstance(payload, dict):
        raise MissingRequiredFieldError("Model output is not a JSON object")

    name = payload.get("competitor_name")
    if not isinstance(name, str) or not name.strip():
        raise MissingRequiredFieldError("competitor_name is missing or empty")

    weaknesses = payload.get("weaknesses")
    if not isinstance(weaknesses, list) or not weaknesses:
        raise MissingRequiredFieldError("weaknesses is missing or empty")
    if not all(isinstance(item, str) for item in weaknesses):
        raise MissingRequiredFieldError("weaknesses must be a list of strings")

    return name.strip(), list(weaknesses)


async def analyze_competitor(
    url: str,
    *,
    store: IdeaStore,
    page_source: Optional[PageSource] = None,
    completion: Optional[CompletionClient] = None,
) -> AnalysisResult:
    """
    Scan ``url`` and persist a new idea record.

    The insert is the final step, so any fetch, model, parse or validation
    failure propagates unchanged with nothing written.
    """
    text = await extract_page_text(url, page_source=page_source)
    client = completion or get_completion_client()
    raw = await client.complete(build_analysis_messages(url, text))
    competitor_name, weaknesses = validate_analysis_payload(extract_json(raw, mode="object"))

    idea_id = await store.insert(
        source_url=url,
        competitor_name=competitor_name,
        weaknesses=weaknesses,
    )
    logger.info("Saved idea %s for %s (%s)", idea_id, competitor_name, url)
    return AnalysisResult(id=idea_id, competitor_name=competitor_name, weaknesses=weaknesses)
