from __future__ import annotations

import re
from dataclasses import dataclass

# ASCII word characters, so "Sci:S" never matches inside "Sci:Strong"
_WORD = "A-Za-z0-9_"


@dataclass(frozen=True)
class RatingRule:
    key: str  # shorthand code, e.g. "Ayur:E"
    label: str  # category name shown in bold
    value: str  # human-readable rating

    @property
    def pattern(self) -> re.Pattern[str]:
        prefix, _, code = self.key.partition(":")
        body = re.escape(prefix) + r":\s*" + re.escape(code)
        return re.compile(rf"(?<![{_WORD}]){body}(?![{_WORD}])", re.IGNORECASE)

    @property
    def markup(self) -> str:
        return (
            f"<strong>{self.label}:</strong> "
            f'<span class="font-bold italic">{self.value}</span>'
        )

    def to_dict(self) -> dict:
        return {"key": self.key, "label": self.label, "value": self.value}


DEFAULT_RATING_RULES: tuple[RatingRule, ...] = (
    RatingRule("Ayur:E", "Ayurvedic", "Excellent"),
    RatingRule("Ayur:G", "Ayurvedic", "Good"),
    RatingRule("Ayur:N", "Ayurvedic", "Nominal"),
    RatingRule("Sci:S", "Scientific studies", "Strong Clinical Support"),
    RatingRule("Sci:M", "Scientific studies", "Moderate Clinical Support"),
    RatingRule("Sci:L", "Scientific studies", "Limited"),
    RatingRule("Sci:N", "Scientific studies", "None or Contraindicated"),
)
