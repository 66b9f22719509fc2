from context_budgeting import estimate_tokens, is_over_budget, optimize_context
from context_budgeting.optimizer import ABBREVIATION_NOTE, TRUNCATION_NOTICE

METADATA = "Book Metadata:\nTitle: The Lighthouse\nTotal Chapters: 2"
FOCUS = 'Currently focused on: Chapter 2 - "Storm"'


def _section(number: int, title: str, outline: str, content: str) -> str:
    return f"===== CHAPTER {number}: {title}\nOUTLINE: {outline}\n\nCONTENT: {content}"


def _book(long_text: str, first: int = 1, second: int = 2) -> str:
    return "\n\n".join(
        [
            METADATA,
            FOCUS,
            _section(first, "Arrival", "Keeper arrives", long_text),
            _section(second, "Storm", "The storm hits", long_text),
        ]
    )


def test_under_budget_returned_unchanged():
    text = _section(1, "Arrival", "Keeper arrives", "Short chapter.")
    assert optimize_context(text, "Q") == text


def test_over_budget_keeps_headers_and_note(long_chapter_text):
    full = _book(long_chapter_text)
    assert is_over_budget(full)

    result = optimize_context(full, "How is the pacing?")

    assert result.startswith(f"{METADATA}\n\n{FOCUS}\n\n{ABBREVIATION_NOTE}\n\n")
    assert result.count("Book Metadata:") == 1
    assert result.split("\n")[-1] == "User question: How is the pacing?"
    assert estimate_tokens(result) < estimate_tokens(full)
    assert not is_over_budget(result)


def test_sections_truncated_to_150_words(long_chapter_text):
    result = optimize_context(_book(long_chapter_text), "Q")
    words = long_chapter_text.split()

    assert result.count(TRUNCATION_NOTICE) == 2
    assert "===== CHAPTER 1:  Arrival\nOUTLINE: Keeper arrives\nCONTENT: " in result
    assert "===== CHAPTER 2:  Storm\nOUTLINE: The storm hits\nCONTENT: " in result
    preview = " ".join(words[:150])
    assert f"CONTENT: {preview}...\n{TRUNCATION_NOTICE}\n" in result
    assert words[150] not in result


def test_chapters_renumbered_by_position(long_chapter_text):
    result = optimize_context(_book(long_chapter_text, first=5, second=9), "Q")
    assert "===== CHAPTER 1:  Arrival" in result
    assert "===== CHAPTER 2:  Storm" in result
    assert "CHAPTER 5" not in result
    assert "CHAPTER 9" not in result


def test_preamble_is_not_emitted_as_chapter(long_chapter_text):
    result = optimize_context(_book(long_chapter_text), "Q")
    assert "===== CHAPTER 0" not in result
    assert result.count("===== CHAPTER") == 2


def test_unstructured_section_kept_verbatim(long_chapter_text):
    raw = f"===== CHAPTER 1: Notes\n{long_chapter_text}"
    full = "\n\n".join([raw, _section(2, "Storm", "The storm hits", long_chapter_text)])

    result = optimize_context(full, "Q")

    assert long_chapter_text in result
    assert result.count(TRUNCATION_NOTICE) == 1


def test_marker_split_is_case_insensitive(long_chapter_text):
    full = "\n\n".join(
        [
            _section(1, "Arrival", "Keeper arrives", long_chapter_text),
            _section(2, "Storm", "The storm hits", long_chapter_text).replace(
                "===== CHAPTER", "=====chapter"
            ),
        ]
    )
    result = optimize_context(full, "Q")
    assert result.count(TRUNCATION_NOTICE) == 2
    assert result.startswith(f"{ABBREVIATION_NOTE}\n\n")


def test_non_ascii_digit_marker_is_not_a_chapter(long_chapter_text):
    full = "\n\n".join(
        [
            _section(1, "Arrival", "Keeper arrives", long_chapter_text),
            f"===== CHAPTER ٣: Storm\n{long_chapter_text}",
        ]
    )
    result = optimize_context(full, "Q")

    assert result.count("===== CHAPTER") == 1
    assert result.count(TRUNCATION_NOTICE) == 1
    assert "٣" not in result


def test_no_markers_over_budget():
    result = optimize_context("x" * 50000, "Q")
    assert result == f"{ABBREVIATION_NOTE}\n\n\nUser question: Q"


def test_custom_word_limit(long_chapter_text):
    result = optimize_context(_book(long_chapter_text), "Q", max_words=3)
    preview = " ".join(long_chapter_text.split()[:3])
    assert f"CONTENT: {preview}...\n{TRUNCATION_NOTICE}" in result
