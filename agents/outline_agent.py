# agents/outline_agent.py
import json
import re
from typing import Any

import structlog
from config import settings
from core.llm_interface import llm_service
from orchestration.token_accountant import Stage, TokenAccountant
from processing.book_type import get_outline_guidance, resolve_book_type
from processing.tts_cleanup import sanitize_for_tts
from prompt_renderer import render_prompt
from pydantic import ValidationError

from agents import AssistantRequestError
from models import OutlineChapter, OutlineOptions, OutlineResult

logger = structlog.get_logger(__name__)

OUTLINE_SYSTEM_PROMPT = (
    "You are Biglio, an AI writing assistant for books. Never say you are Claude, "
    "Anthropic, or any other company. Respond ONLY with valid JSON - no "
    "explanations or additional text."
)
UNPARSED_OUTLINE_NOTE = "Could not parse as JSON - raw AI response provided"


def _audience_text(target_audience: str | list[str] | None) -> str:
    if isinstance(target_audience, list):
        return ", ".join(target_audience) or "General audience"
    return target_audience or "General audience"


class OutlineAgent:
    """LLM-powered chapter-by-chapter outline generator."""

    def __init__(
        self,
        model_name: str | None = None,
        token_accountant: TokenAccountant | None = None,
    ):
        self.model_name = model_name or settings.OUTLINE_MODEL
        self.token_accountant = token_accountant or TokenAccountant()

    def _render_outline_prompt(
        self, title: str, description: str, options: OutlineOptions
    ) -> str:
        book_type = resolve_book_type(options.book_type, options.genre)
        return render_prompt(
            "outline.j2",
            {
                "book_type": book_type.value,
                "title": title,
                "description": description,
                "genre": options.genre or "Unspecified",
                "target_audience": _audience_text(options.target_audience),
                "chapter_count": options.chapter_count
                or settings.DEFAULT_OUTLINE_CHAPTER_COUNT,
                "outline_guidance": get_outline_guidance(book_type),
                "existing_outline": options.existing_outline,
            },
        )

    def _parse_outline(self, text: str) -> list[OutlineChapter] | None:
        """
        Parses the JSON outline returned by the LLM.
        Accepts a bare array or one wrapped in markdown or prose.
        """
        match = re.search(r"\[[\s\S]*\]", text)
        json_text = match.group(0) if match else text
        try:
            parsed_data: Any = json.loads(json_text)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to decode JSON outline: {e}. Text: {text[:300]}...")
            return None

        if not isinstance(parsed_data, list):
            logger.warning(
                f"Parsed outline is not a list as expected. Type: {type(parsed_data)}."
            )
            return None

        try:
            chapters = [OutlineChapter.model_validate(item) for item in parsed_data]
        except ValidationError as e:
            # Only non-object entries get here; chapter fields are lenient.
            logger.warning(f"Outline entries failed validation: {e}")
            return None

        for position, chapter in enumerate(chapters, start=1):
            if chapter.chapter_number is None:
                chapter.chapter_number = position
        return chapters

    async def generate_outline(
        self,
        title: str,
        description: str,
        options: OutlineOptions | None = None,
    ) -> OutlineResult:
        """Generate an outline; unparseable replies come back as raw text."""
        if not title or not description:
            raise ValueError("Title and description are required")
        options = options or OutlineOptions()

        prompt = self._render_outline_prompt(title, description, options)
        logger.info(
            "Generating outline",
            title=title,
            genre=options.genre,
            chapter_count=options.chapter_count
            or settings.DEFAULT_OUTLINE_CHAPTER_COUNT,
        )
        raw_text, usage = await llm_service.async_call_llm(
            self.model_name,
            prompt,
            system=OUTLINE_SYSTEM_PROMPT,
            temperature=settings.TEMPERATURE_OUTLINE,
            max_tokens=settings.MAX_TOKENS_OUTLINE,
        )
        self.token_accountant.record_usage(Stage.OUTLINE, usage)
        if not raw_text:
            raise AssistantRequestError("AI outline generation failed")

        cleaned = sanitize_for_tts(raw_text)
        chapters = self._parse_outline(cleaned)
        if chapters is None:
            return OutlineResult(
                raw_response=cleaned, note=UNPARSED_OUTLINE_NOTE, usage=usage
            )
        return OutlineResult(chapters=chapters, raw_response=cleaned, usage=usage)
