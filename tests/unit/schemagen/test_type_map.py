"""Tests for type-mapping resolution and override merging."""

import json

import pytest

from schemagen.errors import ConfigurationError, InputReadError
from schemagen.type_map import (
    DEFAULT_KEY,
    TypeMappingResolver,
    canonical_type_name,
    load_type_map_resolver,
    read_type_map_file,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("INT4", "int"),
        ("integer", "int"),
        ("int8", "bigint"),
        ("Bool", "boolean"),
        ("double   precision", "double"),
        ("timestamp with time zone", "timestamptz"),
        ("numeric", "decimal"),
        ("mood", "mood"),
    ],
)
def test_canonical_type_name_folds_aliases(raw, expected):
    """Postgres spellings should fold onto one canonical key."""
    assert canonical_type_name(raw) == expected


def test_builtin_integers_render_with_integer_validator():
    """Integer types should carry an explicit-integer Zod constraint."""
    resolver = TypeMappingResolver.from_config()
    for type_name in ("int", "int4", "bigint", "smallint", "serial"):
        mapping = resolver.resolve(type_name)
        assert mapping.name == "number"
        assert mapping.zod_type() == "z.number().int()"


def test_json_types_render_as_open_mapping():
    """JSON-like types should render as string-keyed records."""
    mapping = TypeMappingResolver.from_config().resolve("JSONB")
    assert mapping.ts_type() == "Record<string,any>"
    assert mapping.zod_type() == "z.record(z.string(),z.any())"
    assert mapping.convo_type() == "map"


def test_unknown_type_falls_back_to_default_entry():
    """Types missing from the table should resolve to `_default`."""
    resolver = TypeMappingResolver.from_config(overrides=[{DEFAULT_KEY: {"name": "unknown"}}])
    assert resolver.resolve("uuid").name == "unknown"


def test_cleared_table_falls_back_to_string():
    """Without even a `_default` entry the hard-coded string mapping applies."""
    resolver = TypeMappingResolver.from_config(clear_defaults=True)
    mapping = resolver.resolve("int")
    assert mapping.name == "string"
    assert mapping.zod_type() == "z.string()"
    assert resolver.snapshot() == {}


def test_override_merges_fields_instead_of_replacing():
    """Overrides should be shallow-merged per type key."""
    resolver = TypeMappingResolver.from_config(overrides=[{"int4": {"ts": "Int"}}])
    mapping = resolver.resolve("integer")
    assert mapping.ts_type() == "Int"
    assert mapping.name == "number"
    assert mapping.zod == "z.number().int()"


def test_later_overrides_win():
    """Override tables should apply in the order given."""
    resolver = TypeMappingResolver.from_config(
        overrides=[{"uuid": {"ts": "First", "convo": "uuid"}}, {"uuid": {"ts": "Second"}}]
    )
    mapping = resolver.resolve("uuid")
    assert mapping.ts == "Second"
    assert mapping.convo == "uuid"


def test_unknown_override_fields_are_echoed():
    """Extra keys in override files should survive into the computed map."""
    resolver = TypeMappingResolver.from_config(overrides=[{"uuid": {"format": "uuid"}}])
    dumped = resolver.snapshot()["uuid"].model_dump(exclude_none=True)
    assert dumped == {"name": "string", "format": "uuid"}


def test_override_entry_must_be_object():
    """A non-object mapping entry should be a configuration error."""
    resolver = TypeMappingResolver()
    with pytest.raises(ConfigurationError, match="must be a JSON object"):
        resolver.merge({"uuid": "string"})


def test_override_entry_with_invalid_field_type():
    """Field values must have the documented types."""
    with pytest.raises(ConfigurationError, match="Invalid type mapping for 'uuid'"):
        TypeMappingResolver().merge({"uuid": {"name": 5}})


def test_register_enum_points_validator_at_enum_schema():
    """Enum registration should let columns resolve to the generated enum."""
    resolver = TypeMappingResolver.from_config()
    resolver.register_enum("Mood", "Mood")
    mapping = resolver.resolve("mood")
    assert mapping.name == "Mood"
    assert mapping.zod_type() == "MoodSchema"
    assert "MOOD" in resolver


def test_snapshot_is_sorted_by_key():
    """The computed type map should not depend on insertion order."""
    resolver = TypeMappingResolver({"zeta": {"name": "z"}, "alpha": {"name": "a"}})
    assert list(resolver.snapshot()) == ["alpha", "zeta"]


def test_read_type_map_file_rejects_non_object(tmp_path):
    """A file holding a JSON array is a configuration error."""
    path = tmp_path / "types.json"
    path.write_text(json.dumps([1, 2, 3]))
    with pytest.raises(ConfigurationError, match="should contain a JSON object"):
        read_type_map_file(path)


def test_read_type_map_file_rejects_invalid_json(tmp_path):
    """Unparseable JSON names the offending path."""
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError, match="broken.json"):
        read_type_map_file(path)


def test_read_type_map_file_missing(tmp_path):
    """A missing file is an input read error."""
    with pytest.raises(InputReadError, match="missing.json"):
        read_type_map_file(tmp_path / "missing.json")


def test_load_type_map_resolver_applies_files_in_order(fixtures_dir, tmp_path):
    """Files should be merged in argument order over the defaults."""
    second = tmp_path / "second.json"
    second.write_text(json.dumps({"uuid": {"ts": "string"}}))

    resolver = load_type_map_resolver([fixtures_dir / "type-map-override.json", second])

    uuid = resolver.resolve("uuid")
    assert uuid.ts == "string"
    assert uuid.zod == "z.string().uuid()"
    assert resolver.resolve("int").ts == "Int"


def test_alias_override_key_is_stored_canonically():
    """An override keyed by an alias is reported under the canonical key."""
    resolver = TypeMappingResolver.from_config(overrides=[{"int4": {"ts": "Int"}}])
    snapshot = resolver.snapshot()

    assert "int4" not in snapshot
    assert snapshot["int"].ts == "Int"
