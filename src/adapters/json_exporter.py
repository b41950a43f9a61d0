"""JSON export of portal results.

Why JSON:
- Interoperability with scripts and other tooling (`jq`, pipelines).
- Stable key order so successive exports diff cleanly.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from pydantic import BaseModel


def to_jsonable(value: BaseModel | Sequence[BaseModel] | Any) -> Any:
    """Dump models (or lists of models) with the portal's field names."""

    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def dumps(value: BaseModel | Sequence[BaseModel] | Any) -> str:
    return json.dumps(to_jsonable(value), ensure_ascii=False, indent=2, sort_keys=True) + "\n"
