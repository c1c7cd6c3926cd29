from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField


class Member(BaseModel):
    """
    One named, typed, annotated slot inside an aggregate.

    Members are supplied by the annotation source and are never mutated by
    the compilers. The member's name is the key it is stored under in its
    aggregate.

    Attributes:
        type: Primitive type tag such as ``"integer"`` or ``"datetime"``.
        required: Whether the member was declared required.
        description: Free-form description copied to the compiled field.
        annotations: Free-form key/value metadata driving classification.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    required: bool = False
    description: str | None = None
    annotations: dict[str, str] = PydanticField(default_factory=dict)


class Aggregate(BaseModel):
    """
    An annotated object whose members become the fields of one entity.

    Only a mapping of member name to `Member` is a flat object. A string
    (a primitive alias) or a list (an array definition) is accepted here so
    that readers can hand over whatever the design declared; the model
    compiler rejects those shapes.

    Attributes:
        name: Declared aggregate name.
        type: Member mapping, primitive alias, or array definition.
        required: Names of members the aggregate marks required.
        annotations: Aggregate-level metadata (table options).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: dict[str, Member] | str | list[Any]
    required: list[str] = PydanticField(default_factory=list)
    annotations: dict[str, str] = PydanticField(default_factory=dict)

    def is_required(self, member_name: str) -> bool:
        """Return True if the aggregate marks `member_name` as required."""
        return member_name in self.required
