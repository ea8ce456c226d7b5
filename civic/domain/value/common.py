"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for all value objects.

    Value objects are immutable and compared by value, so two references
    to the same target (or two identical tallies) are interchangeable.
    """

    model_config = ConfigDict(frozen=True)
