"""Runtime configuration loader."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .models.config import ParserConfig, collapsed_layout_map, literal_layout_map

LAYOUT_POLICIES: Dict[str, Callable[[], Dict[str, Optional[str]]]] = {
    "literal": literal_layout_map,
    "collapsed": collapsed_layout_map,
}


def _require_file(path: Path, label: str) -> None:
    if not path.exists():
        raise FileNotFoundError(f"Missing {label}: {path}")


def load_config(config_path: Optional[Path] = None) -> ParserConfig:
    """Load parser configuration, falling back to defaults when no file is given.

    The JSON file may name a ``layout_policy`` preset (``literal`` or
    ``collapsed``); an explicit ``layout_type_map`` is merged over the preset.
    """
    if config_path is None:
        return ParserConfig()

    _require_file(config_path, "parser_config")
    data: Dict[str, Any] = json.loads(config_path.read_text(encoding="utf-8"))

    policy = data.pop("layout_policy", None)
    if policy is not None:
        if policy not in LAYOUT_POLICIES:
            raise ValueError(f"Unknown layout_policy: {policy}")
        layout_map = LAYOUT_POLICIES[policy]()
        layout_map.update(data.get("layout_type_map", {}))
        data["layout_type_map"] = layout_map

    return ParserConfig.model_validate(data)
