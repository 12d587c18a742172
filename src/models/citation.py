from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class BookCitation:
    """A book shorthand such as ``Lad, p. 42`` and the attribution it expands to."""

    abbreviation: str
    attribution: str

    @property
    def pattern(self) -> re.Pattern[str]:
        return re.compile(
            re.escape(self.abbreviation) + r",\s*p\.\s*([0-9]+)",
            re.IGNORECASE,
        )

    @property
    def replacement(self) -> str:
        # Attribution text is literal; only the page number is substituted
        escaped = self.attribution.replace("\\", "\\\\")
        return escaped + r" (Page \1)"

    def to_dict(self) -> dict:
        return {"abbreviation": self.abbreviation, "attribution": self.attribution}


DEFAULT_BOOK_CITATIONS: tuple[BookCitation, ...] = (
    BookCitation("Lad", "The Complete Book of Ayurvedic Home Remedies, Vasant Lad"),
    BookCitation("CCRAS", "CCRA, Ministry of Health"),
)
