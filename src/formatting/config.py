from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml

from src.models.citation import DEFAULT_BOOK_CITATIONS, BookCitation
from src.models.rating import DEFAULT_RATING_RULES, RatingRule

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "data" / "formatting.yaml"
RENDERERS = ("passthrough", "soup")


class FormattingConfigError(Exception):
    pass


@dataclass
class FormattingConfig:
    html_renderer: str = "passthrough"
    ratings: list[RatingRule] = field(default_factory=lambda: list(DEFAULT_RATING_RULES))
    books: list[BookCitation] = field(default_factory=lambda: list(DEFAULT_BOOK_CITATIONS))

    def to_dict(self) -> dict:
        return {
            "html_renderer": self.html_renderer,
            "ratings": [r.to_dict() for r in self.ratings],
            "books": [b.to_dict() for b in self.books],
        }

    @classmethod
    def from_dict(cls, data: dict) -> FormattingConfig:
        config = cls()
        if "html_renderer" in data:
            renderer = str(data["html_renderer"]).strip().lower()
            if renderer not in RENDERERS:
                raise FormattingConfigError(
                    f"Unknown html_renderer: {renderer!r}. Use one of {', '.join(RENDERERS)}."
                )
            config.html_renderer = renderer
        if "ratings" in data:
            config.ratings = _parse_entries(data["ratings"], RatingRule, ("key", "label", "value"))
            seen: set[str] = set()
            for rule in config.ratings:
                if rule.key.lower() in seen:
                    raise FormattingConfigError(f"Duplicate rating key: {rule.key}")
                if ":" not in rule.key:
                    raise FormattingConfigError(f"Rating key must contain a colon: {rule.key}")
                seen.add(rule.key.lower())
        if "books" in data:
            config.books = _parse_entries(data["books"], BookCitation, ("abbreviation", "attribution"))
        return config


def _parse_entries(raw, cls, fields: tuple[str, ...]) -> list:
    if not isinstance(raw, list):
        raise FormattingConfigError(f"Expected a list of {cls.__name__} entries")
    entries = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise FormattingConfigError(f"{cls.__name__} entry {i} is not a mapping")
        missing = [f for f in fields if not str(item.get(f) or "").strip()]
        if missing:
            raise FormattingConfigError(
                f"{cls.__name__} entry {i} is missing: {', '.join(missing)}"
            )
        entries.append(cls(**{f: str(item[f]).strip() for f in fields}))
    return entries


def _read_config(path: Path) -> FormattingConfig:
    if not path.exists():
        logger.warning("Formatting config %s not found, using built-in defaults", path)
        return FormattingConfig()
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise FormattingConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return FormattingConfig()
    if not isinstance(data, dict):
        raise FormattingConfigError(f"{path} must contain a mapping at the top level")
    return FormattingConfig.from_dict(data)


@lru_cache(maxsize=1)
def _default_config() -> FormattingConfig:
    return _read_config(DEFAULT_CONFIG_PATH)


def load_formatting_config(path: Path | str | None = None) -> FormattingConfig:
    if path is None:
        return _default_config()
    return _read_config(Path(path))
