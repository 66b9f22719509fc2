import pytest
from context_budgeting import estimate_tokens, is_over_budget


@pytest.mark.parametrize(
    "text,expected",
    [("", 0), ("a", 1), ("abcd", 1), ("abcde", 2), ("x" * 48000, 12000)],
)
def test_estimate_tokens_rounds_up(text, expected):
    assert estimate_tokens(text) == expected


def test_budget_boundary_is_exclusive():
    assert not is_over_budget("x" * 48000)
    assert is_over_budget("x" * 48001)


def test_empty_text_is_never_over_budget():
    assert not is_over_budget("")


def test_custom_token_limit():
    assert is_over_budget("abcdefghi", token_limit=2)
    assert not is_over_budget("abcdefgh", token_limit=2)
