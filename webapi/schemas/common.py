"""
Common helpers used across schema modules.
"""

from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.errors import ValidationError


class RequestSchema(BaseModel):
    """Base for request bodies.

    Subclasses name the error summary returned when validation fails.
    """
    missing_error: ClassVar[str] = "Missing required fields"

    @classmethod
    def required_fields(cls) -> list[str]:
        return [name for name, f in cls.model_fields.items() if f.is_required()]


M = TypeVar("M", bound=RequestSchema)


def parse_body(schema: type[M], data: Any) -> M:
    """Validate a JSON body against schema.

    Raises:
        ValidationError: body is not an object, or a field is missing or invalid
    """
    if not isinstance(data, dict):
        data = {}
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ValidationError(
            schema.missing_error,
            message=f"{field}: {first['msg']}" if field else first["msg"],
            details={"required": schema.required_fields()},
        ) from e
