"""Base classes for domain records and value objects."""

from abc import ABC

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class StoreRecord(BaseModel):
    """
    Base class for records read from the external schedule store.

    Store snapshots arrive with camelCase keys; both camelCase and
    snake_case names are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    id: int

    def __eq__(self, other: object) -> bool:
        """Records are equal if they have the same ID and type."""
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.id))


class DomainService(ABC):
    """Base class for domain services (business logic that doesn't belong to a single record)."""

    pass
