"""Recognized annotation keys and the lookup accessor used by the compilers."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

DEFAULT_PREFIX = "relmodel"
PRIMARY_KEY_TOKEN = "primary_key"


class AnnotationKeys(BaseModel):
    """
    The annotation vocabulary understood by the field and model compilers.

    Every attribute holds the full key looked up in a member's or aggregate's
    annotations. The defaults live under the ``relmodel:`` namespace; use
    `with_prefix` to read annotations written for another namespace.

    Attributes:
        primary_key: Member key whose value must contain `primary_key_token`.
        primary_key_token: Marker that flags a member as a primary key.
        sql_tag: Raw storage type, copied verbatim (member and aggregate).
        timestamp_created: Marks a creation timestamp (never null).
        timestamp_updated: Marks an update timestamp (never null).
        timestamp_deleted: Marks a soft-delete timestamp (always nullable).
        alias: Column alias on members, model alias on aggregates.
        belongs_to: Names the entity this member belongs to.
        has_one: Names the entity this member has one of.
        has_many: Names the entity this member has many of.
        many_to_many: Names the entity joined many-to-many.
        cached: Aggregate key whose value is the cache duration in seconds.
        table_name: Aggregate table name override.
        dynamic_table_name: Aggregate flag for runtime table names.
        roler: Aggregate flag for role-based models.
        no_media: Aggregate flag excluding the model from media types.
    """

    model_config = ConfigDict(frozen=True)

    primary_key: str = f"{DEFAULT_PREFIX}:primarykey"
    primary_key_token: str = PRIMARY_KEY_TOKEN
    sql_tag: str = f"{DEFAULT_PREFIX}:sqltag"
    timestamp_created: str = f"{DEFAULT_PREFIX}:timestampcreated"
    timestamp_updated: str = f"{DEFAULT_PREFIX}:timestampupdated"
    timestamp_deleted: str = f"{DEFAULT_PREFIX}:timestampdeleted"
    alias: str = f"{DEFAULT_PREFIX}:alias"
    belongs_to: str = f"{DEFAULT_PREFIX}:belongsto"
    has_one: str = f"{DEFAULT_PREFIX}:hasone"
    has_many: str = f"{DEFAULT_PREFIX}:hasmany"
    many_to_many: str = f"{DEFAULT_PREFIX}:manytomany"
    cached: str = f"{DEFAULT_PREFIX}:cached"
    table_name: str = f"{DEFAULT_PREFIX}:tablename"
    dynamic_table_name: str = f"{DEFAULT_PREFIX}:dynamictablename"
    roler: str = f"{DEFAULT_PREFIX}:roler"
    no_media: str = f"{DEFAULT_PREFIX}:nomedia"

    @classmethod
    def with_prefix(cls, prefix: str) -> AnnotationKeys:
        """
        Build a vocabulary with every key moved under another namespace.

        Args:
            prefix: Namespace placed before the ``:`` of each key.

        Returns:
            AnnotationKeys: A new vocabulary, e.g. ``gorma:primarykey``.
        """
        updates = {}
        for name, info in cls.model_fields.items():
            if name == "primary_key_token":
                continue
            _, _, suffix = info.default.partition(":")
            updates[name] = f"{prefix}:{suffix}"
        return cls(**updates)


DEFAULT_KEYS = AnnotationKeys()


def lookup(annotations: Mapping[str, str] | None, key: str) -> str | None:
    """
    Return the value stored under `key`, or None when the key is absent.

    A key that is present with an empty value counts as present and yields
    ``""``, so flag-style annotations can be tested with ``is not None``.
    """
    if not annotations:
        return None
    return annotations.get(key)
