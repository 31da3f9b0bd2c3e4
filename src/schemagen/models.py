"""Canonical type model produced from table and enum declarations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_serializer


class TypeKind(str, Enum):
    """Kind of declaration a type was generated from."""

    TABLE = "table"
    ENUM = "enum"


class Shape(str, Enum):
    """Which variant of a declaration a type record represents."""

    READ = "read"
    INSERT = "insert"
    ENUM = "enum"


class TypeMapping(BaseModel):
    """Rendering rules for one declaration type name.

    Unset target spellings fall back to `name` when rendered. Unknown keys from
    override files are kept so they are echoed into the computed type map.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = Field("string", description="Default rendered name for every target")
    ts: Optional[str] = Field(None, description="TypeScript spelling")
    zod: Optional[str] = Field(None, description="Zod validator expression")
    convo: Optional[str] = Field(None, description="Convo-Lang struct spelling")
    sql: Optional[str] = Field(None, description="Canonical declaration type echo")

    def ts_type(self) -> str:
        return self.ts if self.ts is not None else self.name

    def zod_type(self) -> str:
        return self.zod if self.zod is not None else f"z.{self.name}()"

    def convo_type(self) -> str:
        return self.convo if self.convo is not None else self.name


# Flags omitted from JSON artifacts when unset.
_FALSY_OMITTED = (
    "primary",
    "optional",
    "hasDefault",
    "has_default",
    "isArray",
    "is_array",
    "arrayDimensions",
    "array_dimensions",
)


class PropDef(BaseModel):
    """One property of a generated type, derived from a column."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    type: TypeMapping
    primary: bool = False
    description: Optional[str] = None
    sql_def: Optional[str] = Field(None, alias="sqlDef")
    optional: bool = False
    has_default: bool = Field(False, alias="hasDefault")
    is_array: bool = Field(False, alias="isArray")
    array_dimensions: int = Field(0, ge=0, alias="arrayDimensions")

    @model_serializer(mode="wrap")
    def _omit_unset_flags(self, handler: Any) -> Dict[str, Any]:
        data = handler(self)
        for key in _FALSY_OMITTED:
            if key in data and not data[key]:
                del data[key]
        return data


class TypeDef(BaseModel):
    """A generated type: one table shape or one enum."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: Optional[str] = None
    kind: TypeKind
    primary_key: Optional[str] = Field(None, alias="primaryKey")
    insert_for: Optional[str] = Field(
        None, alias="insertFor", description="Base type name when this is an insertion shape"
    )
    sql_table: Optional[str] = Field(None, alias="sqlTable")
    sql_schema: Optional[str] = Field(None, alias="sqlSchema")
    props: List[PropDef] = Field(default_factory=list)

    def to_json_dict(self, *, short: bool = False) -> Dict[str, Any]:
        """Dump with JSON aliases, optionally flattening props to bare names."""
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if not self.props:
            data.pop("props", None)
        elif short:
            data["props"] = [prop.name for prop in self.props]
        return data


class TableMap(BaseModel):
    """Bidirectional mapping between storage tables and generated type names."""

    model_config = ConfigDict(populate_by_name=True)

    to_name: Dict[str, str] = Field(default_factory=dict, alias="toName")
    to_table: Dict[str, str] = Field(default_factory=dict, alias="toTable")


@dataclass(frozen=True)
class TypeRecord:
    """A TypeDef plus the data emitters need but the TypeDef does not carry."""

    type_def: TypeDef
    base_name: str
    shape: Shape
    enum_values: Tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.type_def.name

    @property
    def sort_rank(self) -> int:
        # Enums render before the table types that may reference them.
        return 1 if self.shape is Shape.ENUM else 2


@dataclass(frozen=True)
class TypeModel:
    """Output of a build: every type record plus the derived lookup tables."""

    records: Tuple[TypeRecord, ...]
    type_map: Dict[str, TypeMapping]
    table_map: TableMap

    @property
    def type_defs(self) -> List[TypeDef]:
        return [record.type_def for record in self.records]
