"""Record Field Resolution

Records are dataclass instances or pydantic models. Their rule tags live
in per-field metadata:

    @dataclass
    class Signup:
        username: str = field(metadata={"validate": "min?3,max?40", "json": "user"})

    class Signup(BaseModel):
        username: str = Field(json_schema_extra={"validate": "min?3,max?40"}, alias="user")

Field lists are introspected once per record type and cached.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Iterator

from pydantic import BaseModel

_CONTAINERS = (list, tuple, set, frozenset)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One declared field of a record type."""
    name: str
    metadata: Mapping[str, Any]
    alias: str | None = None

    def tag(self, key: str) -> str:
        """Raw rule tag stored under key, or "" when the field has none."""
        value = self.metadata.get(key)
        return value if isinstance(value, str) else ""

    def alternate_name(self, key: str) -> str | None:
        value = self.metadata.get(key)
        if isinstance(value, str) and value:
            return value
        return self.alias


@dataclass(frozen=True, slots=True)
class ResolvedField:
    """A field of a live record, ready for rule evaluation."""
    key: str
    value: Any
    tag: str
    recursable: bool


def is_record(value: Any) -> bool:
    """Whether value is a record instance (not a record class)."""
    if isinstance(value, type):
        return False
    return dataclasses.is_dataclass(value) or isinstance(value, BaseModel)


def _model_descriptors(model: type[BaseModel]) -> Iterator[FieldDescriptor]:
    for name, info in model.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        yield FieldDescriptor(
            name=name,
            metadata=MappingProxyType(dict(extra)),
            alias=info.serialization_alias or info.alias,
        )


@lru_cache(maxsize=None)
def describe(record_type: type) -> tuple[FieldDescriptor, ...]:
    """Public fields of a record type in declaration order."""
    if dataclasses.is_dataclass(record_type):
        found = (FieldDescriptor(name=f.name, metadata=f.metadata) for f in dataclasses.fields(record_type))
    elif issubclass(record_type, BaseModel):
        found = _model_descriptors(record_type)
    else:
        return ()
    return tuple(d for d in found if not d.name.startswith("_"))


def record_field_names(record_type: type) -> tuple[str, ...]:
    return tuple(d.name for d in describe(record_type))


def iter_records(value: Any) -> Iterator[Any]:
    """Records held by value: itself, or the elements of a container (mapping values)."""
    if is_record(value):
        yield value
        return
    if isinstance(value, Mapping):
        items = value.values()
    elif isinstance(value, _CONTAINERS):
        items = value
    else:
        return
    for item in items:
        if is_record(item):
            yield item


def is_recursable(value: Any) -> bool:
    return next(iter_records(value), None) is not None


_MISSING = object()


def resolve(
    record: Any,
    descriptor: FieldDescriptor,
    *,
    tag: str,
    name_tag: str,
    read_name_tag: bool,
) -> ResolvedField | None:
    """Read one field of record; None when the attribute cannot be read."""
    value = getattr(record, descriptor.name, _MISSING)
    if value is _MISSING:
        return None
    key = descriptor.name
    if read_name_tag:
        key = descriptor.alternate_name(name_tag) or key
    return ResolvedField(
        key=key,
        value=value,
        tag=descriptor.tag(tag),
        recursable=is_recursable(value),
    )
