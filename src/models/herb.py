from __future__ import annotations

from dataclasses import dataclass, field

from src.formatting.medicinal import process_medicinal_text
from src.formatting.truncate import truncate_text
from src.utils.text import collapse_whitespace


@dataclass
class Herb:
    name: str
    summary: str = ""  # annotated text, may carry [refs], More info pointers and G:/B:/R: notes
    medicinal_notes: str = ""  # shorthand citations and rating codes
    tags: list[str] = field(default_factory=list)

    @property
    def concise_summary(self) -> str:
        return truncate_text(self.summary)

    def detailed_notes_html(self, expand_books: bool = True) -> str:
        return process_medicinal_text(self.medicinal_notes, expand_books=expand_books)

    def matches(self, query: str) -> bool:
        q = query.strip().lower()
        if not q:
            return True
        if q in self.name.lower():
            return True
        return any(q in t.lower() for t in self.tags)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "summary": self.summary,
            "medicinal_notes": self.medicinal_notes,
            "tags": self.tags,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Herb:
        d = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        d["name"] = collapse_whitespace(str(d.get("name") or ""))
        d["tags"] = [str(t) for t in d.get("tags") or []]
        for key in ("summary", "medicinal_notes"):
            if d.get(key) is None:
                d.pop(key, None)
        return cls(**d)
