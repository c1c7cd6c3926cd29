"""Errors raised while compiling aggregates into relational models."""


class RelModelError(Exception):
    """Base class for every relmodel compilation error."""


class UnsupportedAggregateShape(RelModelError, TypeError):
    """
    Raised when an aggregate is not a flat object of named members.

    Args:
        aggregate_name: Name of the aggregate that failed to compile.
        shape: Short description of the shape that was found instead.
    """

    def __init__(self, aggregate_name: str, shape: str):
        self.aggregate_name = aggregate_name
        self.shape = shape
        super().__init__(
            f"Aggregate '{aggregate_name}' must be an object of named members, "
            f"got {shape}."
        )


class InvalidEntityName(RelModelError, ValueError):
    """
    Raised when an entity name cannot be normalized into an identifier.

    The underlying failure is chained as ``__cause__``.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot derive an entity name from {name!r}.")


class InvalidCacheDuration(RelModelError, ValueError):
    """
    Raised when a cached aggregate carries a duration that is not an integer.
    """

    def __init__(self, aggregate_name: str, value: str):
        self.aggregate_name = aggregate_name
        self.value = value
        super().__init__(
            f"Cache duration for '{aggregate_name}' must be a string that can be "
            f"parsed as an integer, got {value!r}."
        )


class FieldCompileError(RelModelError):
    """
    Raised when a member's name or declared type cannot be translated.

    The underlying failure is chained as ``__cause__``.
    """

    def __init__(self, member_name: str, reason: str):
        self.member_name = member_name
        self.reason = reason
        super().__init__(f"Failed to compile member '{member_name}': {reason}")
