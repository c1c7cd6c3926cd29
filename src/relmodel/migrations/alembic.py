from collections.abc import Iterable

try:
    import sqlalchemy as sa
except ImportError:
    sa = None

from ..fields import Datatype, Field
from ..models import Model
from ..relations import RelationKind

# Relationship kinds that live on the other table or a join table
_NON_COLUMN_KINDS = frozenset(
    {RelationKind.HAS_ONE, RelationKind.HAS_MANY, RelationKind.MANY_TO_MANY}
)


def get_metadata(
    models: Iterable[Model], metadata: "sa.MetaData | None" = None
) -> "sa.MetaData":
    """
    Generate a SQLAlchemy MetaData object representing compiled models.
    This is intended to be used in alembic's env.py for autogenerate support.

    Relationship names are not resolved here, so no foreign keys are emitted.
    """
    if sa is None:
        raise ImportError(
            "SQLAlchemy is required to use the alembic bridge. "
            "Install it via 'pip install relmodel[alembic]'."
        )

    if metadata is None:
        metadata = sa.MetaData()

    for model in models:
        _build_sa_table(metadata, table_name_for(model), model)

    return metadata


def table_name_for(model: Model) -> str:
    """Return the table name override, else the lowercased model name."""
    return model.table_name or model.name.lower()


def is_column(field: Field) -> bool:
    """Return False for fields that reference rows held in another table."""
    rel = field.relationship
    return rel is None or rel.kind not in _NON_COLUMN_KINDS


def _build_sa_table(metadata: "sa.MetaData", table_name: str, model: Model):
    """Build a SQLAlchemy Table object from a compiled model."""
    columns = []

    for field in model.iter_fields():
        if not is_column(field):
            continue

        info = {}
        if field.raw_type_override is not None:
            info["raw_type"] = field.raw_type_override

        columns.append(
            sa.Column(
                field.column_name,
                _map_to_sa_type(field.datatype),
                primary_key=field.is_primary_key,
                # For primary keys, we want nullable=False explicitly
                nullable=False if field.is_primary_key else field.nullable,
                comment=field.description,
                info=info,
            )
        )

    return sa.Table(table_name, metadata, *columns)


def _map_to_sa_type(datatype: Datatype) -> "sa.types.TypeEngine":
    """Map compiled datatypes to SQLAlchemy types."""
    if datatype is Datatype.BOOLEAN:
        return sa.Boolean()
    elif datatype is Datatype.INTEGER:
        return sa.Integer()
    elif datatype is Datatype.NUMBER:
        return sa.Float()
    elif datatype is Datatype.DATETIME:
        return sa.DateTime()
    elif datatype is Datatype.UUID:
        return sa.Uuid()
    elif datatype is Datatype.BYTES:
        return sa.LargeBinary()
    elif datatype is Datatype.ANY:
        return sa.JSON()

    return sa.String()  # Fallback
