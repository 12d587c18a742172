"""Concise-mode truncation of annotated herb text.

Editorial annotations are removed in a fixed order; each stage relies on the
ones before it having run:

1. "More info" pointers in parentheses or brackets.
2. Any remaining square-bracket span (citation numbers, notes, internal codes).
3. Everything from the first basis marker (``G:``, ``B:`` or ``R:``, for
   General, Book, Research) that starts the text or follows whitespace.
4. Punctuation and whitespace left dangling at either end.

Pointers go first so that a marker inside ``(More info R: ...)`` cannot cut
off the text around it.
"""

from __future__ import annotations

import re

from src.formatting.stages import RewriteStage, run_stages

TRUNCATION_STAGES: tuple[RewriteStage, ...] = (
    RewriteStage(
        "more_info",
        re.compile(r"[(\[]\s*More info.*?[)\]]", re.IGNORECASE),
        "",
    ),
    RewriteStage("brackets", re.compile(r"\[[^\]]*\]"), ""),
    RewriteStage(
        "basis_cutoff",
        re.compile(r"(?:\s+|^)[GBR]:.*", re.IGNORECASE | re.DOTALL),
        "",
        count=1,
    ),
    RewriteStage("artifacts", re.compile(r"^[\s.,;:\-]+|[\s.,;:\-]+\Z"), ""),
)


def truncate_text(text: str | None) -> str:
    if not text:
        return ""
    return run_stages(text, TRUNCATION_STAGES).strip()
