"""Compile annotated members into relational field descriptors."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

from .annotations import DEFAULT_KEYS, AnnotationKeys, lookup
from .base import Member
from .exceptions import FieldCompileError
from .naming import to_identifier
from .relations import RelationKind, Relationship

logger = logging.getLogger(__name__)


class Datatype(str, Enum):
    """Semantic column types a member's primitive type translates to."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    DATETIME = "datetime"
    UUID = "uuid"
    BYTES = "bytes"
    ANY = "any"


# Common spellings of the primitive tags
TYPE_ALIASES = {
    "bool": Datatype.BOOLEAN,
    "int": Datatype.INTEGER,
    "float": Datatype.NUMBER,
    "double": Datatype.NUMBER,
    "str": Datatype.STRING,
    "text": Datatype.STRING,
    "date-time": Datatype.DATETIME,
    "timestamp": Datatype.DATETIME,
}


def datatype_for(type_tag: str) -> Datatype:
    """
    Translate a primitive type tag into its `Datatype`.

    Tags are matched case-insensitively, ignoring surrounding whitespace.
    The spellings in `TYPE_ALIASES` are accepted as well.

    Raises:
        ValueError: If the tag is not a known primitive type.
    """
    tag = type_tag.strip().lower()
    if tag in TYPE_ALIASES:
        return TYPE_ALIASES[tag]
    try:
        return Datatype(tag)
    except ValueError:
        raise ValueError(f"unsupported primitive type {type_tag!r}") from None


class Field(BaseModel):
    """
    Compiled descriptor for one member of an aggregate.

    Attributes:
        name: Normalized identifier, e.g. ``UserID`` for member ``userId``.
        column_name: Storage column name; equals `name` unless aliased.
        datatype: Semantic type of the column.
        nullable: Whether the column accepts nulls.
        is_primary_key: Whether the column is part of the primary key.
        is_timestamp: Whether the column is a created/updated/deleted stamp.
        raw_type_override: Literal storage type to use instead of `datatype`.
        is_aliased: Whether `column_name` came from an alias annotation.
        relationship: Reference to another entity, if any.
        description: Free-form description.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    column_name: str
    datatype: Datatype
    nullable: bool = True
    is_primary_key: bool = False
    is_timestamp: bool = False
    raw_type_override: str | None = None
    is_aliased: bool = False
    relationship: Relationship | None = None
    description: str | None = None


def compile_field(
    name: str, member: Member, keys: AnnotationKeys = DEFAULT_KEYS
) -> Field:
    """
    Compile one annotated member into a `Field`.

    Args:
        name: Member name as declared in the aggregate.
        member: The annotated member.
        keys: Annotation vocabulary to read.

    Returns:
        Field: The compiled, immutable descriptor.

    Raises:
        FieldCompileError: If the member's name or type cannot be translated.

    Examples:
        >>> field = compile_field("userId", Member(type="integer"))
        >>> field.name, field.nullable
        ('UserID', True)
    """
    try:
        identifier = to_identifier(name)
        datatype = datatype_for(member.type)
    except ValueError as e:
        raise FieldCompileError(name, str(e)) from e

    attrs = {
        "name": identifier,
        "column_name": identifier,
        "datatype": datatype,
        "nullable": not member.required,
    }
    notes = member.annotations
    _parse_primary_key(attrs, notes, keys)
    _parse_sql_tag(attrs, notes, keys)
    _parse_timestamps(attrs, notes, keys)
    _parse_alias(attrs, notes, keys)
    _parse_relationships(attrs, name, notes, keys)
    if member.description:
        attrs["description"] = member.description

    field = Field(**attrs)
    logger.debug("Compiled member '%s' into field %r", name, field)
    return field


def _parse_primary_key(attrs: dict, notes: dict, keys: AnnotationKeys) -> None:
    # Explicit marker and implicit "id" name are independent triggers
    value = lookup(notes, keys.primary_key)
    if value is not None and keys.primary_key_token in value:
        attrs["is_primary_key"] = True
    if attrs["name"].lower() == "id":
        attrs["is_primary_key"] = True


def _parse_sql_tag(attrs: dict, notes: dict, keys: AnnotationKeys) -> None:
    value = lookup(notes, keys.sql_tag)
    if value is not None:
        attrs["raw_type_override"] = value


def _parse_timestamps(attrs: dict, notes: dict, keys: AnnotationKeys) -> None:
    """Apply created, updated, then deleted; the last match sets nullability."""
    for key, nullable in (
        (keys.timestamp_created, False),
        (keys.timestamp_updated, False),
        (keys.timestamp_deleted, True),
    ):
        if lookup(notes, key) is not None:
            attrs["is_timestamp"] = True
            attrs["datatype"] = Datatype.DATETIME
            attrs["nullable"] = nullable


def _parse_alias(attrs: dict, notes: dict, keys: AnnotationKeys) -> None:
    value = lookup(notes, keys.alias)
    if value is not None:
        attrs["is_aliased"] = True
        attrs["column_name"] = value


def _parse_relationships(
    attrs: dict, name: str, notes: dict, keys: AnnotationKeys
) -> None:
    """Apply relationship annotations in kind order; the last one found wins."""
    found = []
    for kind in RelationKind:
        target = lookup(notes, getattr(keys, kind.value))
        if target is not None:
            found.append(Relationship(kind=kind, target=target))

    if not found:
        return
    if len(found) > 1:
        logger.warning(
            "Member '%s' declares %d relationships (%s); keeping %s",
            name,
            len(found),
            ", ".join(rel.kind.value for rel in found),
            found[-1].kind.value,
        )
    attrs["relationship"] = found[-1]


__all__ = ["Datatype", "Field", "compile_field", "datatype_for"]
