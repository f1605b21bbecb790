"""Value object bases (pydantic, frozen)."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel

T = TypeVar("T")


class ValueObject(BaseModel):
    """Immutable record compared by its field values."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class RootValueObject(RootModel[T], Generic[T]):
    """Immutable wrapper around one validated primitive (``.root``).

    Serializes as the bare primitive, so ``Username("manuela")`` dumps to
    ``"manuela"``.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
