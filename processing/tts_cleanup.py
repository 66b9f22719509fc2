# processing/tts_cleanup.py
"""Make generated text read naturally when narrated by a TTS voice."""

from __future__ import annotations

import re
from collections.abc import Callable

import structlog

logger = structlog.get_logger(__name__)

_ONES = ["", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine"]
_TEENS = [
    "ten",
    "eleven",
    "twelve",
    "thirteen",
    "fourteen",
    "fifteen",
    "sixteen",
    "seventeen",
    "eighteen",
    "nineteen",
]
_TENS = [
    "",
    "",
    "twenty",
    "thirty",
    "forty",
    "fifty",
    "sixty",
    "seventy",
    "eighty",
    "ninety",
]


def number_to_words(num: int) -> str:
    """Spell out 0-999; larger numbers are returned as digits."""
    if num == 0:
        return "zero"
    if num < 10:
        return _ONES[num]
    if num < 20:
        return _TEENS[num - 10]
    if num < 100:
        tens, ones = divmod(num, 10)
        return _TENS[tens] + (f"-{_ONES[ones]}" if ones else "")
    if num < 1000:
        hundreds, remainder = divmod(num, 100)
        words = f"{_ONES[hundreds]} hundred"
        return words + (f" {number_to_words(remainder)}" if remainder else "")
    return str(num)


def _unit(singular: str, plural: str | None = None) -> Callable[[re.Match[str]], str]:
    def replace(match: re.Match[str]) -> str:
        number = int(match.group(1))
        if plural is None:
            return f"{number_to_words(number)} {singular}"
        return f"{number_to_words(number)} {singular if number == 1 else plural}"

    return replace


MEASUREMENT_RULES: list[tuple[re.Pattern[str], Callable[[re.Match[str]], str]]] = [
    (re.compile(r"(\d+)°?f\b", re.IGNORECASE), _unit("degrees Fahrenheit")),
    (re.compile(r"(\d+)°?c\b", re.IGNORECASE), _unit("degrees Celsius")),
    (re.compile(r"(\d+)\s*oz\b", re.IGNORECASE), _unit("ounce", "ounces")),
    (re.compile(r"(\d+)\s*g\b", re.IGNORECASE), _unit("gram", "grams")),
    (re.compile(r"(\d+)\s*lbs?\b", re.IGNORECASE), _unit("pound", "pounds")),
]

BUZZWORD_REPLACEMENTS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bdelve into\b", re.IGNORECASE), "explore"),
    (re.compile(r"\bdelve deeper\b", re.IGNORECASE), "explore further"),
    (re.compile(r"\butilize\b", re.IGNORECASE), "use"),
    (re.compile(r"\bcommence\b", re.IGNORECASE), "begin"),
    (re.compile(r"\bunveil\b", re.IGNORECASE), "reveal"),
    (re.compile(r"\bcomprehensive\b", re.IGNORECASE), "complete"),
]


def spell_out_measurements(text: str) -> str:
    for pattern, replacement in MEASUREMENT_RULES:
        text = pattern.sub(replacement, text)
    return text


def replace_buzzwords(text: str) -> str:
    for pattern, replacement in BUZZWORD_REPLACEMENTS:
        text = pattern.sub(replacement, text)
    return text


def sanitize_for_tts(text: str) -> str:
    """Spell out measurement abbreviations and tone down stock AI phrasing."""
    cleaned = replace_buzzwords(spell_out_measurements(text))
    if cleaned != text:
        logger.debug(
            "Sanitized text for narration",
            length_before=len(text),
            length_after=len(cleaned),
        )
    return cleaned
