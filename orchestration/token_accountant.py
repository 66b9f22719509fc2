from __future__ import annotations

import logging
from enum import Enum

from core.usage import TokenUsage

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    """Stages for token accounting."""

    CHAT = "Chat"
    OUTLINE = "Outline"
    CHAPTER_SUMMARY = "ChapterSummary"


class TokenAccountant:
    """Accumulate and log token usage across stages."""

    def __init__(self) -> None:
        self.total: int = 0
        self.stage_totals: dict[str, int] = {}
        self.usage = TokenUsage()

    def record_usage(
        self, stage: Stage | str, usage: dict[str, int] | TokenUsage | None
    ) -> None:
        """Record output-token usage for a stage."""
        stage_name = stage.value if isinstance(stage, Stage) else stage

        usage_dict: dict[str, int]
        if isinstance(usage, TokenUsage):
            usage_dict = {
                "input_tokens": usage.input_tokens,
                "output_tokens": usage.output_tokens,
            }
        else:
            usage_dict = usage or {}

        if usage_dict and isinstance(usage_dict.get("output_tokens"), int):
            output_tokens = usage_dict["output_tokens"]
            self.total += output_tokens
            self.stage_totals[stage_name] = (
                self.stage_totals.get(stage_name, 0) + output_tokens
            )
            self.usage.add(usage_dict)
            logger.info(
                "Assistant Activity: Tokens from '%s': %s. Total generated this session: %s",
                stage_name,
                output_tokens,
                self.total,
            )
        elif usage_dict:
            logger.warning(
                "Assistant Activity: '%s' - 'output_tokens' missing or not int in usage data. Tokens not added. Usage: %s",
                stage_name,
                usage_dict,
            )

    def get_stage_total(self, stage: Stage | str) -> int:
        """Return accumulated output tokens for a stage."""
        stage_name = stage.value if isinstance(stage, Stage) else stage
        return self.stage_totals.get(stage_name, 0)
