"""Base type for explicit update commands.

Each entity declares one command per allowed combination of changed fields
instead of accepting arbitrary partial dictionaries.
"""

from typing import Any, ClassVar, FrozenSet

from pydantic import BaseModel, ConfigDict, model_validator


class UpdateCommand(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Fields that may be explicitly cleared with None.
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def _require_changes(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Only the fields the caller actually set."""
        return self.model_dump(exclude_unset=True)
