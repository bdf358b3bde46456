"""Base model for all domain entities."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Models are frozen; changes produce a new instance through evolve().
    """

    model_config = ConfigDict(frozen=True)

    def evolve(self, **changes: Any) -> Self:
        """Copy with ``changes`` applied, re-running field validation.

        Unlike ``model_copy(update=...)`` this rejects values the model
        would not accept on construction.
        """
        return self.model_validate({**self.model_dump(), **changes})
