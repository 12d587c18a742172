"""Detailed-view expansion of medicinal notes into an HTML fragment.

Stage order matters: research citations are reduced to bare ``PMCID:`` /
``PMID:`` identifiers before the link stages look for them, and rating codes
are expanded before anything else can read ``Sci:`` or ``Ayur:`` tokens.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from src.formatting.config import FormattingConfigError, load_formatting_config
from src.formatting.stages import RewriteStage, literal, run_stages
from src.models.citation import DEFAULT_BOOK_CITATIONS, BookCitation
from src.models.rating import DEFAULT_RATING_RULES, RatingRule

logger = logging.getLogger(__name__)

PIN = "\U0001F4CC"
MICROSCOPE = "\U0001F52C"
_GLYPH = f"(?:{PIN}|{MICROSCOPE})"

PMC_ARTICLE_URL = "https://www.ncbi.nlm.nih.gov/pmc/articles/{id}/"
PUBMED_URL = "https://pubmed.ncbi.nlm.nih.gov/{id}/"
LINK_CLASS = "text-indigo-600 hover:underline"

RESEARCH_CITATION = re.compile(
    r"\[" + _GLYPH + r'\s*"?(?:[^"]*?)?((?:PMCID:\s*PMC[0-9]+)|(?:PMID:\s*[0-9]+))"?.?\]',
    re.IGNORECASE,
)
CITATION_GLYPH = re.compile(r"\[" + _GLYPH + r"\s*")
CLOSING_BRACKET = re.compile(r"\]")

# Identifiers already inside an anchor are left alone
PMCID = re.compile(r"(PMCID:\s*)(PMC[0-9]+)(?![0-9]|</a>)", re.IGNORECASE)
PMID = re.compile(r"(PMID:\s*)([0-9]+)(?![0-9]|</a>)", re.IGNORECASE)


def _anchor(url_template: str):
    def replace(match: re.Match) -> str:
        href = url_template.format(id=match.group(2))
        return (
            f'<a href="{href}" target="_blank" class="{LINK_CLASS}">'
            f"{match.group(1)}{match.group(2)}</a>"
        )
    return replace


def build_medicinal_stages(
    expand_books: bool = True,
    ratings: Iterable[RatingRule] | None = None,
    books: Iterable[BookCitation] | None = None,
) -> list[RewriteStage]:
    if ratings is None or books is None:
        try:
            config = load_formatting_config()
            default_ratings, default_books = config.ratings, config.books
        except FormattingConfigError as e:
            logger.warning("Formatting config unusable, using built-in tables: %s", e)
            default_ratings, default_books = DEFAULT_RATING_RULES, DEFAULT_BOOK_CITATIONS
        ratings = default_ratings if ratings is None else ratings
        books = default_books if books is None else books

    stages: list[RewriteStage] = []
    if expand_books:
        for book in books:
            stages.append(RewriteStage(f"book:{book.abbreviation}", book.pattern, book.replacement))

    stages.append(RewriteStage("research_citation", RESEARCH_CITATION, r"Paper: \1"))
    # Leftover wrappers degrade to inline text; every "]" goes, not only the wrapper's
    stages.append(RewriteStage("citation_glyph", CITATION_GLYPH, ""))
    stages.append(RewriteStage("closing_brackets", CLOSING_BRACKET, ""))

    for rule in ratings:
        stages.append(RewriteStage(f"rating:{rule.key}", rule.pattern, literal(rule.markup)))

    stages.append(RewriteStage("pmcid_link", PMCID, _anchor(PMC_ARTICLE_URL)))
    stages.append(RewriteStage("pmid_link", PMID, _anchor(PUBMED_URL)))
    stages.append(RewriteStage("line_breaks", re.compile(r"\n"), "<br />"))
    return stages


def process_medicinal_text(text: str | None, expand_books: bool = True) -> str:
    if not text:
        return ""
    return run_stages(text, build_medicinal_stages(expand_books))
