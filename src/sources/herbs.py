from __future__ import annotations

from pathlib import Path

import yaml

from src.models.herb import Herb

DEFAULT_HERBS_PATH = Path(__file__).resolve().parent.parent.parent / "data" / "herbs.yaml"


class HerbDataError(Exception):
    pass


def load_herbs(path: Path | str | None = None) -> list[Herb]:
    config_path = Path(path) if path is not None else DEFAULT_HERBS_PATH
    if not config_path.exists():
        return []
    with open(config_path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise HerbDataError(f"Invalid YAML in {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise HerbDataError(f"{config_path} must contain a 'herbs' mapping at the top level")
    herbs = [Herb.from_dict(item) for item in data.get("herbs") or [] if isinstance(item, dict)]
    return [h for h in herbs if h.name]
