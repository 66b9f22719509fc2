import pytest
from processing.tts_cleanup import (
    number_to_words,
    replace_buzzwords,
    sanitize_for_tts,
    spell_out_measurements,
)


@pytest.mark.parametrize(
    "num,words",
    [
        (0, "zero"),
        (7, "seven"),
        (13, "thirteen"),
        (40, "forty"),
        (42, "forty-two"),
        (100, "one hundred"),
        (215, "two hundred fifteen"),
        (999, "nine hundred ninety-nine"),
        (1500, "1500"),
    ],
)
def test_number_to_words(num, words):
    assert number_to_words(num) == words


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Bake at 350F", "Bake at three hundred fifty degrees Fahrenheit"),
        ("Cool to 20°c", "Cool to twenty degrees Celsius"),
        ("Add 1 oz", "Add one ounce"),
        ("Add 8oz", "Add eight ounces"),
        ("Use 500 g flour", "Use five hundred grams flour"),
        ("Lift 1 lb", "Lift one pound"),
        ("Lift 3 lbs", "Lift three pounds"),
        ("Weigh 2000 g", "Weigh 2000 grams"),
    ],
)
def test_spell_out_measurements(text, expected):
    assert spell_out_measurements(text) == expected


def test_replace_buzzwords():
    text = "Let's delve into the comprehensive plan, utilize it and unveil it."
    assert replace_buzzwords(text) == (
        "Let's explore the complete plan, use it and reveal it."
    )


def test_sanitize_combines_rules():
    text = "We delve deeper at 72F and commence."
    assert sanitize_for_tts(text) == (
        "We explore further at seventy-two degrees Fahrenheit and begin."
    )


def test_sanitize_leaves_plain_text_alone():
    text = '[{"chapterNumber": 1, "title": "Arrival"}]'
    assert sanitize_for_tts(text) == text
