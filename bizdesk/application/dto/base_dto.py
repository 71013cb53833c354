"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from typing import Any, ClassVar, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar, get_args
from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict, ValidationInfo, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from bizdesk.domain.models.base import ValidationError


def blank_to_none(value: Any) -> Any:
    """Treat blank strings as missing values."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class FieldNormalizer:
    """
    Maps request bodies that mix snake_case and camelCase keys onto the
    canonical snake_case field names.
    """

    @staticmethod
    def normalize(data: Dict[str, Any], field_names: Iterable[str]) -> Dict[str, Any]:
        """
        Return only the fields present under either spelling.

        The camelCase value is used when present, otherwise the snake_case
        one. An explicit None counts as present. Both spellings carrying
        different values is rejected.
        """
        normalized: Dict[str, Any] = {}
        for name in field_names:
            camel = to_camel(name)
            has_snake = name in data
            has_camel = camel != name and camel in data

            if has_snake and has_camel and data[name] != data[camel]:
                raise ValidationError(
                    f"Conflicting values for '{name}' and '{camel}'",
                    name
                )

            if has_camel:
                normalized[name] = data[camel]
            elif has_snake:
                normalized[name] = data[name]
        return normalized


def validation_error_from_pydantic(
    exc: PydanticValidationError,
    skip_prefix: Tuple[str, ...] = ()
) -> ValidationError:
    """Convert pydantic errors into a single domain ValidationError."""
    errors: List[Dict[str, str]] = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in skip_prefix]
        errors.append({
            "field": ".".join(location),
            "message": error.get("msg", "Invalid value"),
        })

    if len(errors) == 1:
        message = f"{errors[0]['field'] or 'request'}: {errors[0]['message']}"
    else:
        message = f"{len(errors)} validation errors"
    first_field = errors[0]["field"] if errors else None
    return ValidationError(message, first_field or None, errors)


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Convert enum values to their values
        use_enum_values=True,
    )


class RequestDTO(BaseDTO):
    """
    Base class for request DTOs.

    Every field may be sent in snake_case or camelCase; the body is
    normalised before field validation runs.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        allow_inf_nan=False,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def normalize_field_names(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return FieldNormalizer.normalize(data, cls.model_fields.keys())

    @classmethod
    def _numeric_fields(cls) -> Tuple[str, ...]:
        names = []
        for name, field in cls.model_fields.items():
            types = get_args(field.annotation) or (field.annotation,)
            if int in types or float in types:
                names.append(name)
        return tuple(names)

    @field_validator("*", mode="before")
    @classmethod
    def reject_boolean_numbers(cls, value: Any, info: ValidationInfo) -> Any:
        """JSON booleans are not numbers."""
        if isinstance(value, bool) and info.field_name in cls._numeric_fields():
            raise ValidationError(f"{info.field_name} must be a number", info.field_name)
        return value

    @field_validator("*", mode="after")
    @classmethod
    def naive_utc_datetimes(cls, value: Any) -> Any:
        """Store timezone-aware datetimes as naive UTC."""
        if isinstance(value, datetime) and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @classmethod
    def build(cls, data: Optional[Dict[str, Any]]):
        """
        Validate a raw request body.
        Raises the domain ValidationError instead of pydantic's.
        """
        try:
            return cls.model_validate(data if data is not None else {})
        except PydanticValidationError as exc:
            raise validation_error_from_pydantic(exc) from exc


class CreateRequestDTO(RequestDTO):
    """Base class for creation request DTOs."""

    def to_domain_dict(self) -> Dict[str, Any]:
        """Canonical field dict for entity construction."""
        return self.model_dump()


class UpdateRequestDTO(RequestDTO):
    """
    Base class for update request DTOs.
    Only fields the caller supplied are applied.
    """

    # Fields that may be changed but not cleared
    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_cleared_fields(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValidationError(f"{name} cannot be null", name)
        return self

    def to_patch(self) -> Dict[str, Any]:
        """Fields the caller supplied, keyed by canonical name."""
        return self.model_dump(exclude_unset=True)


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""

    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def _domain_values(cls, entity: Any) -> Dict[str, Any]:
        return {
            name: getattr(entity, name)
            for name in cls.model_fields
            if hasattr(entity, name)
        }

    @classmethod
    def from_domain(cls, entity: Any):
        """Build the response from a domain entity without modifying it."""
        return cls(**cls._domain_values(entity))


T = TypeVar('T')


class ListResponseDTO(BaseDTO, Generic[T]):
    """Paginated list response."""

    items: List[T] = Field(description="List of items")
    total: int = Field(description="Total number of items")
    limit: int = Field(description="Maximum items returned")
    offset: int = Field(description="Number of items skipped")


class HealthCheckResponseDTO(BaseDTO):
    """Health check response DTO."""

    status: str = Field(description="Service status")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    version: Optional[str] = Field(default=None, description="Application version")
    environment: Optional[str] = Field(default=None, description="Deployment environment")


class ErrorResponseDTO(BaseDTO):
    """Error response DTO."""

    error: str = Field(description="Error type")
    message: str = Field(description="Error message")
    code: Optional[str] = Field(default=None, description="Machine-readable error code")
    details: Optional[Any] = Field(default=None, description="Additional error details")
    status_code: int = Field(description="HTTP status code")
    request_id: Optional[str] = Field(default=None, description="Request ID for tracing")
