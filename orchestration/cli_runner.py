# orchestration/cli_runner.py
"""Command-line runner for the Biglio writing assistant."""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
from typing import Any

import structlog
from agents import AssistantRequestError
from agents.outline_agent import OutlineAgent
from agents.summary_agent import SummaryAgent
from agents.writing_assistant_agent import WritingAssistant
from context_budgeting import compose_full_book_content
from core.llm_interface import llm_service
from utils.logging import setup_logging

from models import (
    BookChapter,
    ChapterSummaryRequest,
    ConversationContext,
    OutlineOptions,
)
from orchestration.token_accountant import TokenAccountant

logger = structlog.get_logger(__name__)


def _read_json(path: str | None) -> Any:
    if not path:
        return None
    return json.loads(Path(path).read_text(encoding="utf-8"))


def load_context(
    context_path: str | None,
    chapters_path: str | None = None,
    focus_chapter: int | None = None,
) -> ConversationContext | None:
    """Load a camelCase context file, optionally composing full-book text.

    When ``chapters_path`` is given and the context has no
    ``fullBookContent`` yet, the chapters are concatenated into it.
    """
    data = _read_json(context_path)
    context = ConversationContext.model_validate(data) if data else None

    raw_chapters = _read_json(chapters_path)
    if raw_chapters:
        chapters = [BookChapter.model_validate(item) for item in raw_chapters]
        if context is None:
            context = ConversationContext()
        if not context.full_book_content:
            context.full_book_content = compose_full_book_content(
                chapters,
                book=context,
                focus_chapter=focus_chapter or context.current_chapter_number,
            )
    return context


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


async def _run_command(args: argparse.Namespace, accountant: TokenAccountant) -> None:
    if args.command in ("prompt", "chat"):
        context = load_context(args.context, args.chapters, args.focus)
        assistant = WritingAssistant(
            context_mode=args.mode, token_accountant=accountant
        )
        if args.command == "prompt":
            print(assistant.build_contextual_message(args.question, context))
            return
        print(await assistant.send_message(args.question, context))
        return

    if args.command == "outline":
        options = OutlineOptions(
            chapter_count=args.chapters,
            genre=args.genre,
            target_audience=args.audience,
            book_type=args.book_type,
            existing_outline=_read_json(args.existing),
        )
        result = await OutlineAgent(token_accountant=accountant).generate_outline(
            args.title, args.description, options
        )
        if result.parsed:
            _print_json([c.model_dump(by_alias=True) for c in result.chapters])
        else:
            logger.warning(result.note)
            print(result.raw_response)
        return

    if args.command == "summary":
        request = ChapterSummaryRequest.model_validate(_read_json(args.request))
        result = await SummaryAgent(
            token_accountant=accountant
        ).generate_chapter_summary(request)
        _print_json(result.model_dump(by_alias=True))


async def _run(args: argparse.Namespace, accountant: TokenAccountant) -> None:
    try:
        await _run_command(args, accountant)
    finally:
        await llm_service.aclose()


def run(args: argparse.Namespace) -> int:
    """Execute one CLI command and return the process exit code."""
    setup_logging()
    accountant = TokenAccountant()
    exit_code = 0
    try:
        asyncio.run(_run(args, accountant))
    except KeyboardInterrupt:
        logger.info("Biglio assistant interrupted by user.")
        exit_code = 130
    except (AssistantRequestError, ValueError, OSError) as err:
        logger.error("Command failed", command=args.command, error=str(err))
        exit_code = 1
    finally:
        if accountant.total:
            logger.info(
                "Session token usage",
                output_tokens=accountant.total,
                by_stage=accountant.stage_totals,
                usage=accountant.usage.get_if_used(),
                llm_requests=llm_service.request_count,
            )
    return exit_code
