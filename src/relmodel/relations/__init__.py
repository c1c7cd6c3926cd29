"""Relationship references carried by compiled fields and models.

Relationships are recorded by target name only. Resolving a name to a
compiled model is left to a linking pass over the full set of models, since
entities may reference each other in any declaration order.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class RelationKind(str, Enum):
    """The four relationship kinds, in the order they are parsed."""

    BELONGS_TO = "belongs_to"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    MANY_TO_MANY = "many_to_many"


class Relationship(BaseModel):
    """
    A reference from a field to another entity, by name.

    Attributes:
        kind: Which relationship the field declares.
        target: Name of the referenced entity, not yet resolved.

    Examples:
        >>> Relationship.belongs_to("User")
        Relationship(kind=<RelationKind.BELONGS_TO: 'belongs_to'>, target='User')
    """

    model_config = ConfigDict(frozen=True)

    kind: RelationKind
    target: str

    @classmethod
    def belongs_to(cls, target: str) -> "Relationship":
        return cls(kind=RelationKind.BELONGS_TO, target=target)

    @classmethod
    def has_one(cls, target: str) -> "Relationship":
        return cls(kind=RelationKind.HAS_ONE, target=target)

    @classmethod
    def has_many(cls, target: str) -> "Relationship":
        return cls(kind=RelationKind.HAS_MANY, target=target)

    @classmethod
    def many_to_many(cls, target: str) -> "Relationship":
        return cls(kind=RelationKind.MANY_TO_MANY, target=target)


class RelationshipNames(BaseModel):
    """
    Target names referenced by a model's fields, grouped by kind.

    Each group keeps unique names in the order they were first collected.
    """

    model_config = ConfigDict(frozen=True)

    belongs_to: tuple[str, ...] = ()
    has_one: tuple[str, ...] = ()
    has_many: tuple[str, ...] = ()
    many_to_many: tuple[str, ...] = ()

    def for_kind(self, kind: RelationKind) -> tuple[str, ...]:
        """Return the names collected for one relationship kind."""
        return getattr(self, kind.value)

    @classmethod
    def collect(cls, relationships) -> "RelationshipNames":
        """
        Group relationships by kind, dropping repeated targets.

        Args:
            relationships: Iterable of `Relationship` in collection order.
        """
        groups: dict[str, list[str]] = {kind.value: [] for kind in RelationKind}
        for rel in relationships:
            names = groups[rel.kind.value]
            if rel.target not in names:
                names.append(rel.target)
        return cls(**{kind: tuple(names) for kind, names in groups.items()})


__all__ = ["RelationKind", "Relationship", "RelationshipNames"]
