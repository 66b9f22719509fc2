import pytest
from processing.book_type import (
    detect_book_type,
    get_audience_considerations,
    get_outline_guidance,
    get_writing_style_guidance,
    resolve_book_type,
)

from models import BookType


@pytest.mark.parametrize(
    "genre,expected",
    [
        (None, BookType.FICTION),
        ("", BookType.FICTION),
        ("Epic Fantasy", BookType.FICTION),
        ("Cozy Mystery", BookType.FICTION),
        ("Self-Help", BookType.NON_FICTION),
        ("Business Leadership", BookType.NON_FICTION),
        ("Poetry", BookType.FICTION),
        # non-fiction keywords win, so "science" claims science fiction
        ("Science Fiction", BookType.NON_FICTION),
    ],
)
def test_detect_book_type(genre, expected):
    assert detect_book_type(genre) is expected


def test_resolve_prefers_explicit_type():
    assert resolve_book_type("non-fiction", "Fantasy") is BookType.NON_FICTION
    assert resolve_book_type(BookType.FICTION, "Memoir") is BookType.FICTION
    assert resolve_book_type(None, "Memoir") is BookType.NON_FICTION


def test_resolve_rejects_unknown_type():
    with pytest.raises(ValueError):
        resolve_book_type("poetry", None)


def test_guidance_differs_by_type():
    assert "conversational" in get_writing_style_guidance(BookType.NON_FICTION)
    assert "storytelling" in get_writing_style_guidance(BookType.FICTION)
    assert "narrative arc" in get_outline_guidance(BookType.FICTION)
    assert "practical applications" in get_outline_guidance(BookType.NON_FICTION)


def test_audience_considerations_prefix():
    text = get_audience_considerations(BookType.FICTION, ["Teens", "Adults"])
    assert text.startswith("Target audience: Teens, Adults. Consider")
    assert get_audience_considerations(BookType.NON_FICTION).startswith(" Consider")
