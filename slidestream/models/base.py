"""Shared Pydantic base model helpers."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict


class SlideBaseModel(BaseModel):
    """Base model enforcing strict, immutable fields and stable JSON output."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    def to_dict(self, exclude_none: bool = True) -> dict[str, Any]:
        """Return a deterministic dict representation."""
        return self.model_dump(by_alias=True, exclude_none=exclude_none)

    def to_json(self) -> str:
        """Return deterministic JSON with sorted keys."""
        return json.dumps(self.to_dict(), sort_keys=True, ensure_ascii=False)
