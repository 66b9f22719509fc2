# agents/summary_agent.py
import structlog
from config import settings
from core.llm_interface import llm_service
from orchestration.token_accountant import Stage, TokenAccountant
from processing.book_type import resolve_book_type
from prompt_renderer import render_prompt

from agents import AssistantRequestError
from models import ChapterSummaryRequest, ChapterSummaryResult

logger = structlog.get_logger(__name__)

SUMMARY_SYSTEM_PROMPT = (
    "You are Biglio, an AI writing assistant specialized in creating detailed "
    "chapter summaries for book development. Provide comprehensive, context-rich "
    "summaries that will enhance future AI writing assistance."
)


class SummaryAgent:
    """Summarises drafted chapters so later chat turns can use them."""

    def __init__(
        self,
        model_name: str | None = None,
        token_accountant: TokenAccountant | None = None,
    ):
        self.model_name = model_name or settings.SUMMARY_MODEL
        self.token_accountant = token_accountant or TokenAccountant()

    async def generate_chapter_summary(
        self, request: ChapterSummaryRequest
    ) -> ChapterSummaryResult:
        content = request.chapter_content.strip()
        if len(content) < settings.MIN_SUMMARY_CONTENT_CHARS:
            raise ValueError("Chapter content too short for summary generation")

        word_count = len(content.split())
        book_type = resolve_book_type(request.book_type, request.book_genre)
        prompt = render_prompt(
            "chapter_summary.j2",
            {
                "book_title": request.book_title,
                "book_genre": request.book_genre,
                "book_type": book_type.value,
                "target_audience": request.target_audience,
                "chapter_order": request.chapter_order,
                "chapter_title": request.chapter_title,
                "chapter_content": request.chapter_content,
                "word_count": word_count,
            },
        )

        summary, usage = await llm_service.async_call_llm(
            self.model_name,
            prompt,
            system=SUMMARY_SYSTEM_PROMPT,
            temperature=settings.TEMPERATURE_SUMMARY,
            max_tokens=settings.MAX_TOKENS_SUMMARY,
        )
        self.token_accountant.record_usage(Stage.CHAPTER_SUMMARY, usage)
        summary = summary.strip()
        if not summary:
            raise AssistantRequestError("Failed to generate chapter summary")

        logger.info(
            f"Generated summary for Chapter {request.chapter_order}: "
            f"'{request.chapter_title}' ({len(summary)} characters)"
        )
        return ChapterSummaryResult(
            summary=summary,
            chapter_order=request.chapter_order,
            chapter_title=request.chapter_title,
            word_count=word_count,
        )
