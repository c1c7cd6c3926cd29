"""
relmodel: Compile annotated type declarations into relational models.

An aggregate's members and their annotations become typed columns, a primary
key set, relationship references and table options that any renderer can
walk in a stable order.
"""

import logging

from .annotations import DEFAULT_KEYS, AnnotationKeys, lookup
from .base import Aggregate, Member
from .exceptions import (
    FieldCompileError,
    InvalidCacheDuration,
    InvalidEntityName,
    RelModelError,
    UnsupportedAggregateShape,
)
from .fields import Datatype, Field, compile_field
from .models import Model, compile_model
from .relations import RelationKind, Relationship, RelationshipNames

# Set up the relmodel logger
_logger = logging.getLogger("relmodel")
# Only add a handler if none exists (to avoid duplicate logs)
if not _logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("%(name)s: %(levelname)s: %(message)s"))
    _logger.addHandler(_handler)
    _logger.setLevel(logging.INFO)
    # Prevent propagation to root logger to avoid duplicate messages
    _logger.propagate = False


__all__ = [
    "compile_field",
    "compile_model",
    "Aggregate",
    "Member",
    "Field",
    "Model",
    "Datatype",
    "Relationship",
    "RelationKind",
    "RelationshipNames",
    "AnnotationKeys",
    "DEFAULT_KEYS",
    "lookup",
    "RelModelError",
    "FieldCompileError",
    "InvalidCacheDuration",
    "InvalidEntityName",
    "UnsupportedAggregateShape",
]
