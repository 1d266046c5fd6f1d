# backend/farmsync/schemas/base.py
import re
from typing import Any, Annotated, ClassVar, Tuple

from pydantic import BaseModel, ConfigDict, StringConstraints, model_validator

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

# required free-text fields: trimmed, must not be empty
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def to_snake(key: str) -> str:
    """``farmId`` / ``FarmId`` / ``Id`` / ``ID`` -> ``farm_id`` / ``farm_id`` / ``id`` / ``id``."""
    if key.isupper():
        return key.lower()
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def normalize_keys(data: Any) -> Any:
    """
    Map backend/client field casing onto the canonical snake_case shape.
    Non-dict input (ORM rows, models) passes through untouched.
    """
    if not isinstance(data, dict):
        return data
    return {to_snake(k) if isinstance(k, str) else k: v for k, v in data.items()}


class RecordModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True, validate_default=True)

    # fields that may be omitted from a partial update but never sent as null
    not_null: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def _normalize_field_names(cls, data: Any) -> Any:
        return normalize_keys(data)

    @model_validator(mode="after")
    def _reject_explicit_nulls(self):
        nulled = [f for f in self.not_null if f in self.model_fields_set and getattr(self, f) is None]
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self
