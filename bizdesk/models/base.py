"""
Shared base for the validated input schemas.

Payloads arrive from the UI as loosely typed JSON objects. Every schema is a
pydantic model; ``from_payload`` validates one and re-raises pydantic's
errors as ``bizdesk.errors.ValidationError`` naming the offending field.
"""

from enum import Enum
from typing import Annotated, Any, ClassVar, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    TypeAdapter,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from bizdesk.errors import ValidationError


class LabelEnum(str, Enum):
    """String enum whose labels match case-insensitively ("expense" -> EXPENSE)."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        return None


# Unsigned amounts; inf and NaN are rejected
Money = Annotated[float, Field(ge=0, allow_inf_nan=False)]

_record_id = TypeAdapter(PositiveInt)


def validation_error(exc: PydanticValidationError, field: Optional[str] = None) -> ValidationError:
    """Convert the first pydantic error into a ValidationError."""
    error = exc.errors()[0]
    names = [part for part in error["loc"] if isinstance(part, str)]
    if names:
        field = names[-1]
    message = error["msg"]
    return ValidationError(f"{field}: {message}" if field else message, field=field)


def record_id(value: Any, name: str = "id") -> int:
    """Validate a single positive record id."""
    if value is None or value == "":
        raise ValidationError(f"{name} is required", field=name)
    try:
        return _record_id.validate_python(value)
    except PydanticValidationError as exc:
        raise validation_error(exc, field=name) from exc


class InputModel(BaseModel):
    """
    Base for payload schemas.

    Blank values (None or whitespace-only strings) count as absent, so they
    fall back to the field default. ``required_on_create`` and
    ``required_on_update`` name fields that are optional in the model but
    needed depending on which path the payload takes.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    required_on_create: ClassVar[tuple[str, ...]] = ()
    required_on_update: ClassVar[tuple[str, ...]] = ("id",)
    label: ClassVar[str] = "record"

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if value is not None and not (isinstance(value, str) and not value.strip())
            }
        return data

    @classmethod
    def from_payload(cls, payload: Any, require_id: bool = False):
        if not isinstance(payload, dict):
            raise ValidationError(f"{cls.label} payload must be an object")
        try:
            model = cls.model_validate(payload)
        except PydanticValidationError as exc:
            raise validation_error(exc) from exc

        for name in cls.required_on_update if require_id else cls.required_on_create:
            if getattr(model, name) is None:
                raise ValidationError(f"{name} is required", field=name)
        return model

    @classmethod
    def from_options(cls, payload: Any):
        """Validate optional settings that ride along with a bare-id payload."""
        if isinstance(payload, dict):
            return cls.from_payload(payload)
        return cls()
