"""Deterministic ordering for type records and JSON artifacts."""

from __future__ import annotations

from typing import Any, Iterable, List, Tuple

from schemagen.models import Shape, TypeRecord

_SHAPE_ORDER = {Shape.ENUM: 0, Shape.READ: 0, Shape.INSERT: 1}


def record_sort_key(record: TypeRecord) -> Tuple[int, str, str, int]:
    """Enums first, then alphabetical by base name, read before insert."""
    return (
        record.sort_rank,
        record.base_name.lower(),
        record.base_name,
        _SHAPE_ORDER[record.shape],
    )


def sort_records(records: Iterable[TypeRecord]) -> List[TypeRecord]:
    return sorted(records, key=record_sort_key)


def _is_nested(value: Any) -> bool:
    return isinstance(value, (dict, list))


def _key_rank(item: Tuple[str, Any]) -> Tuple[int, str]:
    key, value = item
    if key == "name":
        return (0, key)
    return (2 if _is_nested(value) else 1, key)


def _is_named_record(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("name"), str)


def sort_json_value(value: Any) -> Any:
    """Recursively order a JSON value.

    Object keys: `name` first, then scalar-valued keys, then nested values,
    alphabetical within each group. Arrays whose items are all objects with a
    string `name` are sorted by that name; other arrays keep their order.
    """
    if isinstance(value, dict):
        return {key: sort_json_value(item) for key, item in sorted(value.items(), key=_key_rank)}
    if isinstance(value, list):
        items = [sort_json_value(item) for item in value]
        if items and all(_is_named_record(item) for item in items):
            items.sort(key=lambda item: item["name"])
        return items
    return value
