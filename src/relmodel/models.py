"""Compile annotated aggregates into relational model descriptors."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator
from pydantic import Field as PydanticField

from .annotations import DEFAULT_KEYS, AnnotationKeys, lookup
from .base import Aggregate
from .exceptions import (
    InvalidCacheDuration,
    InvalidEntityName,
    UnsupportedAggregateShape,
)
from .fields import Field, compile_field
from .naming import model_identifier
from .relations import RelationshipNames

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


class Model(BaseModel):
    """
    Compiled descriptor for one aggregate: a table-like entity.

    Attributes:
        name: Normalized entity name.
        table_name: Table name override, if any.
        alias: Alias override for the rendered entity, if any.
        cached: Whether the entity is cached.
        cache_duration: Cache lifetime in seconds; set whenever `cached` is.
        sql_tag: Raw storage tag declared on the aggregate itself.
        dynamic_table_name: Whether the table name is chosen at runtime.
        role_based: Whether the entity carries role information.
        exclude_media: Whether the entity is left out of media types.
        fields: Compiled fields keyed by member name.
        primary_keys: Primary-key fields in sorted member-name order.
        relationship_names: Referenced entity names grouped by kind.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    table_name: str | None = None
    alias: str | None = None
    cached: bool = False
    cache_duration: int | None = None
    sql_tag: str | None = None
    dynamic_table_name: bool = False
    role_based: bool = False
    exclude_media: bool = False
    fields: Mapping[str, Field] = PydanticField(default_factory=dict)
    primary_keys: tuple[Field, ...] = ()
    relationship_names: RelationshipNames = PydanticField(
        default_factory=RelationshipNames
    )

    @field_validator("fields", mode="after")
    @classmethod
    def _freeze_fields(cls, fields: Mapping[str, Field]) -> Mapping[str, Field]:
        return MappingProxyType(dict(fields))

    @field_serializer("fields")
    def _dump_fields(self, fields: Mapping[str, Field]) -> dict[str, Field]:
        return dict(fields)

    def __hash__(self) -> int:
        return hash(
            (
                self.name,
                self.table_name,
                self.alias,
                self.cache_duration,
                tuple(sorted(self.fields.items())),
                self.primary_keys,
                self.relationship_names,
            )
        )

    @property
    def primary_key_columns(self) -> tuple[str, ...]:
        """Column names of the primary keys, in `primary_keys` order."""
        return tuple(pk.column_name for pk in self.primary_keys)

    def iter_fields(self) -> Iterator[Field]:
        """
        Yield fields in canonical rendering order.

        Primary keys come first, then every other field sorted by member
        name, then timestamp fields sorted by member name. A primary key
        that is also a timestamp is yielded with the primary keys.

        Examples:
            >>> from relmodel import Aggregate, Member
            >>> members = {"name": Member(type="string"), "id": Member(type="int")}
            >>> model = compile_model("Tag", Aggregate(name="Tag", type=members))
            >>> [f.name for f in model.iter_fields()]
            ['ID', 'Name']
        """
        plain = []
        dates = []
        for member_name in sorted(self.fields):
            field = self.fields[member_name]
            if field.is_primary_key:
                continue
            if field.is_timestamp:
                dates.append(field)
            else:
                plain.append(field)

        yield from self.primary_keys
        yield from plain
        yield from dates


def compile_model(
    name: str, aggregate: Aggregate, keys: AnnotationKeys = DEFAULT_KEYS
) -> Model:
    """
    Compile an annotated aggregate into a `Model`.

    Members are compiled in sorted name order so that the primary-key list
    and relationship names come out identical on every run.

    Args:
        name: Entity name; normalized into `Model.name`.
        aggregate: The aggregate whose members become fields.
        keys: Annotation vocabulary to read.

    Returns:
        Model: The compiled, immutable descriptor.

    Raises:
        UnsupportedAggregateShape: If the aggregate is not a member mapping.
        InvalidEntityName: If `name` has no alphanumeric characters.
        InvalidCacheDuration: If a cache duration is not an integer.
        FieldCompileError: If any member fails to compile.

    Examples:
        >>> from relmodel import Aggregate, Member
        >>> aggregate = Aggregate(name="User", type={"id": Member(type="int")})
        >>> user = compile_model("User", aggregate)
        >>> [pk.name for pk in user.primary_keys]
        ['ID']
    """
    members = aggregate.type
    if not isinstance(members, Mapping):
        raise UnsupportedAggregateShape(name, _describe_shape(members))

    try:
        attrs = {"name": model_identifier(name)}
    except ValueError as e:
        raise InvalidEntityName(name) from e
    attrs.update(_parse_options(name, aggregate, keys))

    fields: dict[str, Field] = {}
    primary_keys: list[Field] = []
    relationships = []
    for member_name in sorted(members):
        field = compile_field(member_name, members[member_name], keys)
        if aggregate.is_required(member_name):
            field = field.model_copy(update={"nullable": False})
        fields[member_name] = field
        if field.is_primary_key:
            primary_keys.append(field)
        if field.relationship is not None:
            relationships.append(field.relationship)

    model = Model(
        **attrs,
        fields=fields,
        primary_keys=tuple(primary_keys),
        relationship_names=RelationshipNames.collect(relationships),
    )
    logger.debug(
        "Compiled model '%s' with %d fields and primary keys %s",
        model.name,
        len(fields),
        model.primary_key_columns,
    )
    return model


def _parse_options(name: str, aggregate: Aggregate, keys: AnnotationKeys) -> dict:
    """Read the table-level options from the aggregate's own annotations."""
    notes = aggregate.annotations
    options = {}

    duration = lookup(notes, keys.cached)
    if duration is not None:
        if not _INTEGER.fullmatch(duration):
            raise InvalidCacheDuration(name, duration)
        options["cached"] = True
        options["cache_duration"] = int(duration)

    sql_tag = lookup(notes, keys.sql_tag)
    if sql_tag is not None:
        options["sql_tag"] = sql_tag
    if lookup(notes, keys.dynamic_table_name) is not None:
        options["dynamic_table_name"] = True
    if lookup(notes, keys.roler) is not None:
        options["role_based"] = True
    if lookup(notes, keys.no_media) is not None:
        options["exclude_media"] = True

    table_name = lookup(notes, keys.table_name)
    if table_name is not None:
        options["table_name"] = table_name
    alias = lookup(notes, keys.alias)
    if alias is not None:
        options["alias"] = alias

    return options


def _describe_shape(definition) -> str:
    if isinstance(definition, str):
        return f"primitive type {definition!r}"
    if isinstance(definition, list):
        return "an array"
    return type(definition).__name__


__all__ = ["Model", "compile_model"]
