"""Tests for deterministic ordering of records and JSON values."""

from schemagen.models import Shape, TypeDef, TypeKind, TypeRecord
from schemagen.sorting import sort_json_value, sort_records


def _record(name, base_name, shape):
    kind = TypeKind.ENUM if shape is Shape.ENUM else TypeKind.TABLE
    return TypeRecord(type_def=TypeDef(name=name, kind=kind), base_name=base_name, shape=shape)


def test_sort_records_is_independent_of_input_order():
    """Any permutation of the same records sorts to the same sequence."""
    records = [
        _record("ZetaInsertion", "Zeta", Shape.INSERT),
        _record("Zeta", "Zeta", Shape.READ),
        _record("Status", "Status", Shape.ENUM),
        _record("alpha", "alpha", Shape.READ),
        _record("Beta", "Beta", Shape.READ),
    ]
    expected = ["Status", "alpha", "Beta", "Zeta", "ZetaInsertion"]

    assert [r.name for r in sort_records(records)] == expected
    assert [r.name for r in sort_records(reversed(records))] == expected


def test_sort_json_value_orders_keys_by_group():
    """`name` leads, scalars follow, nested values come last."""
    value = {"props": [], "kind": "table", "name": "A", "description": "d", "meta": {}}
    assert list(sort_json_value(value)) == ["name", "description", "kind", "meta", "props"]


def test_sort_json_value_sorts_named_records():
    """Arrays of named objects are ordered by name, recursively."""
    value = [{"name": "b", "z": 1, "a": 2}, {"name": "a"}]
    result = sort_json_value(value)

    assert [item["name"] for item in result] == ["a", "b"]
    assert list(result[1]) == ["name", "a", "z"]


def test_sort_json_value_keeps_other_arrays():
    """Arrays of plain values keep their order."""
    assert sort_json_value({"props": ["b", "a"]}) == {"props": ["b", "a"]}
    assert sort_json_value([{"name": "b"}, {"other": 1}]) == [{"name": "b"}, {"other": 1}]
