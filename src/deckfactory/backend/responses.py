"""Decode the JSON shapes `nlm` has been seen to return.

Each decoder walks an explicit, ordered list of accepted shapes and returns
either a result or an explicit "unparsable" value. Callers branch on the
type; nothing here returns an empty string to mean "not found".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

SOURCE_ID_KEYS = ("source_id", "id")
WRAPPER_KEYS = ("source", "item", "data", "result")
NOTEBOOK_LIST_KEYS = ("items", "notebooks")


# region source id
@dataclass(frozen=True)
class SourceIdFound:
    source_id: str
    shape: str  # Which accepted shape matched, for debug logging


@dataclass(frozen=True)
class SourceIdUnparsable:
    reason: str


SourceIdResult = Union[SourceIdFound, SourceIdUnparsable]


def _id_value(obj: dict[str, Any], key: str) -> Optional[str]:
    if key not in obj or obj[key] is None:
        return None
    value = str(obj[key]).strip()
    return value or None


def _flat(key: str) -> Callable[[dict[str, Any]], Optional[str]]:
    return lambda payload: _id_value(payload, key)


def _nested(wrapper: str, key: str) -> Callable[[dict[str, Any]], Optional[str]]:
    def extract(payload: dict[str, Any]) -> Optional[str]:
        inner = payload.get(wrapper)
        if not isinstance(inner, dict):
            return None
        return _id_value(inner, key)

    return extract


# Order matters: flat keys win over wrapped ones, source_id wins over id.
SOURCE_ID_SHAPES: list[tuple[str, Callable[[dict[str, Any]], Optional[str]]]] = [
    *((key, _flat(key)) for key in SOURCE_ID_KEYS),
    *(
        (f"{wrapper}.{key}", _nested(wrapper, key))
        for wrapper in WRAPPER_KEYS
        for key in SOURCE_ID_KEYS
    ),
]


def decode_source_id(payload: Any) -> SourceIdResult:
    """Pull the source identifier out of a `source add --json` response."""
    if not isinstance(payload, dict):
        return SourceIdUnparsable(
            f"expected a JSON object, got {type(payload).__name__}"
        )

    for shape, extract in SOURCE_ID_SHAPES:
        source_id = extract(payload)
        if source_id is not None:
            return SourceIdFound(source_id=source_id, shape=shape)

    return SourceIdUnparsable(
        f"no id in any accepted shape (top-level keys: {sorted(payload)})"
    )


# endregion


# region notebook list
@dataclass(frozen=True)
class NotebookList:
    items: list[dict[str, Any]] = field(default_factory=list)

    def has_alias(self, alias: str) -> bool:
        return any((item.get("alias") or "") == alias for item in self.items)


@dataclass(frozen=True)
class NotebookListUnparsable:
    reason: str


NotebookListResult = Union[NotebookList, NotebookListUnparsable]


def decode_notebook_list(payload: Any) -> NotebookListResult:
    """Normalise a `notebook list --json` response: a bare list, or a list wrapped under items/notebooks."""
    if isinstance(payload, list):
        raw = payload
    elif isinstance(payload, dict):
        raw = next(
            (payload[key] for key in NOTEBOOK_LIST_KEYS if payload.get(key)), []
        )
        if not isinstance(raw, list):
            return NotebookListUnparsable(
                f"notebook list wrapper holds {type(raw).__name__}, not a list"
            )
    else:
        return NotebookListUnparsable(
            f"expected a JSON list or object, got {type(payload).__name__}"
        )

    return NotebookList(items=[item for item in raw if isinstance(item, dict)])


# endregion
