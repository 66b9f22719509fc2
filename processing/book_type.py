# processing/book_type.py
"""Fiction / non-fiction classification and the guidance that follows from it."""

from __future__ import annotations

from models import BookType

FICTION_GENRES = [
    "science fiction",
    "sci-fi",
    "fantasy",
    "mystery",
    "thriller",
    "suspense",
    "romance",
    "horror",
    "historical fiction",
    "young adult",
    "ya",
    "children's",
    "adventure",
    "drama",
    "literary fiction",
    "crime fiction",
    "dystopian",
    "utopian",
    "steampunk",
    "cyberpunk",
    "urban fantasy",
    "paranormal",
    "magical realism",
    "western",
    "cozy mystery",
    "psychological thriller",
    "action",
    "espionage",
    "war fiction",
    "coming of age",
    "family saga",
    "gothic",
    "noir",
    "comedy",
    "satire",
    "alternate history",
    "space opera",
    "epic fantasy",
    "contemporary fiction",
    "women's fiction",
    "lgbtq fiction",
]

NON_FICTION_GENRES = [
    "biography",
    "autobiography",
    "memoir",
    "history",
    "true crime",
    "business",
    "self-help",
    "health",
    "fitness",
    "cooking",
    "travel",
    "science",
    "technology",
    "philosophy",
    "religion",
    "spirituality",
    "politics",
    "current events",
    "economics",
    "psychology",
    "sociology",
    "education",
    "parenting",
    "relationships",
    "personal development",
    "how-to",
    "guide",
    "reference",
    "textbook",
    "academic",
    "journalism",
    "essay",
    "nature",
    "environment",
    "sports",
    "music",
    "art",
    "culture",
    "language",
    "communication",
    "leadership",
    "management",
    "investing",
    "finance",
    "career",
    "productivity",
    "motivation",
    "mindfulness",
    "meditation",
    "nutrition",
    "medicine",
    "wellness",
    "lifestyle",
]


def detect_book_type(genre: str | None) -> BookType:
    """Classify a free-text genre.

    Non-fiction keywords are checked first, so "science fiction" is caught
    by "science". Unknown or missing genres count as fiction.
    """
    if not genre:
        return BookType.FICTION

    genre_lower = genre.lower()
    if any(keyword in genre_lower for keyword in NON_FICTION_GENRES):
        return BookType.NON_FICTION
    if any(keyword in genre_lower for keyword in FICTION_GENRES):
        return BookType.FICTION
    return BookType.FICTION


def resolve_book_type(
    book_type: BookType | str | None, genre: str | None
) -> BookType:
    """Use an explicit book type when given, otherwise detect it from genre."""
    if book_type:
        return BookType(book_type)
    return detect_book_type(genre)


def get_writing_style_guidance(book_type: BookType) -> str:
    if book_type is BookType.NON_FICTION:
        return (
            'Write in a conversational, engaging tone. Use "you" to address readers '
            "personally. Share insights like you're having a friendly conversation. "
            "Break complex concepts into simple language. Ask rhetorical questions. "
            "Use analogies and metaphors. Avoid academic jargon - keep it human and "
            "approachable. AUDIOBOOK RULES: Spell out ALL numbers and dates (forty "
            "percent not 40%, twenty twenty-three not 2023). Never use bullet points "
            '- write in flowing paragraphs with spoken transitions like "First," '
            '"Next," "Additionally." Only provide examples when specifically '
            "requested. Keep sentences under 800 characters for audio compatibility."
        )
    return (
        "Focus on storytelling, character development, plot progression, emotional "
        "engagement, and narrative flow. Create immersive scenes and compelling "
        "dialogue. AUDIOBOOK RULES: Spell out ALL numbers and dates in dialogue and "
        "narration. Avoid list-like formatting - keep prose flowing naturally. Write "
        "for the ear, not the eye. Keep sentences under 800 characters for audio "
        "compatibility - use natural breaks and pauses in your narrative."
    )


def get_outline_guidance(book_type: BookType) -> str:
    if book_type is BookType.NON_FICTION:
        return (
            "Structure should be logical and progressive, with each chapter building "
            "on the previous one. Focus on teaching concepts, providing frameworks, "
            "and offering practical applications."
        )
    return (
        "Structure should follow a narrative arc with clear beginning, middle, and "
        "end. Introduce characters and conflict early, build tension through the "
        "middle, and provide satisfying resolution."
    )


def get_audience_considerations(
    book_type: BookType, target_audience: list[str] | None = None
) -> str:
    audience_text = (
        f"Target audience: {', '.join(target_audience)}." if target_audience else ""
    )
    if book_type is BookType.NON_FICTION:
        return (
            f"{audience_text} Consider the reader's knowledge level and provide "
            "appropriate context. Use examples and case studies that resonate with "
            "your audience."
        )
    return (
        f"{audience_text} Consider age-appropriate themes, complexity, and emotional "
        "content. Develop relatable characters and situations for your audience."
    )
