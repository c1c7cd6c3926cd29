from .alembic import get_metadata

__all__ = ["get_metadata"]
