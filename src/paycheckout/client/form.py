from __future__ import annotations

from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple


FormPairs = List[Tuple[str, str]]


def _scalar(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _encode(prefix: str, value: Any, out: FormPairs) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _encode(f"{prefix}[{key}]", item, out)
        return
    if isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _encode(f"{prefix}[{index}]", item, out)
        return
    out.append((prefix, _scalar(value)))


def encode_form(params: Optional[Mapping[str, Any]]) -> FormPairs:
    """Flatten nested params into form pairs using bracket keys.

    >>> encode_form({"line_items": [{"quantity": 1}], "mode": None})
    [('line_items[0][quantity]', '1')]
    """
    out: FormPairs = []
    for key, value in (params or {}).items():
        _encode(str(key), value, out)
    return out
