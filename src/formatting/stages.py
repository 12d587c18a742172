from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Union

logger = logging.getLogger(__name__)

Replacement = Union[str, Callable[[re.Match], str]]


@dataclass(frozen=True)
class RewriteStage:
    """One ordered regex substitution in a text rewrite pipeline.

    ``count`` follows ``re.sub``: 0 replaces every match, 1 only the first.
    """

    name: str
    pattern: re.Pattern[str]
    replacement: Replacement
    count: int = 0

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text, count=self.count)


def literal(text: str) -> Callable[[re.Match], str]:
    """Replacement that inserts ``text`` verbatim, ignoring backslash escapes."""
    return lambda _match: text


def run_stages(text: str, stages: Iterable[RewriteStage]) -> str:
    for stage in stages:
        rewritten = stage.apply(text)
        if rewritten != text:
            logger.debug("stage %s rewrote %d -> %d chars", stage.name, len(text), len(rewritten))
        text = rewritten
    return text
