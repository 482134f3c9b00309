"""
Shared pydantic building blocks for request and response payloads.

Monnify speaks camelCase JSON; models use snake_case attributes with camelCase
aliases and accept either spelling on input.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from monnify.core.errors import MonnifyException, ValidationError

T = TypeVar("T")
RequestT = TypeVar("RequestT", bound="RequestModel")
EnvelopeT = TypeVar("EnvelopeT", bound="MonnifyResponse[Any]")


def _nested_model(annotation: Any) -> Optional[type[BaseModel]]:
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    for arg in get_args(annotation):
        model = _nested_model(arg)
        if model is not None:
            return model
    return None


def _wire_location(model: Optional[type[BaseModel]], loc: Sequence[Any]) -> str:
    """Spell an error location with Monnify's JSON keys, however the input was keyed."""
    parts: List[str] = []
    current = model
    for part in loc:
        field = None
        if isinstance(part, str) and current is not None:
            field = current.model_fields.get(part) or next(
                (info for info in current.model_fields.values() if info.alias == part), None
            )
        if field is None:
            parts.append(str(part))
            continue
        parts.append(field.alias or part)
        current = _nested_model(field.annotation)
    return ".".join(parts)


def _to_validation_error(
    exc: PydanticValidationError, model: Optional[type[BaseModel]] = None
) -> ValidationError:
    error = exc.errors()[0]
    field = _wire_location(model, error.get("loc", ())) or "payload"
    message = error.get("msg", "invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, ") :]
    return ValidationError(message, field)


def require_value(value: Optional[str], field: str, label: str) -> str:
    """Reject empty identifiers before they are interpolated into a request."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{label} is required", field)
    return str(value).strip()


class MonnifyModel(BaseModel):
    """Base model mapping snake_case attributes to Monnify's camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class RequestModel(MonnifyModel):
    """
    Outgoing payload validated locally before any network call.

    Construction failures surface as :class:`monnify.core.errors.ValidationError`
    naming the offending field.
    """

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            raise _to_validation_error(exc, type(self)) from exc

    @classmethod
    def from_dict(cls: type[RequestT], data: Mapping[str, Any]) -> RequestT:
        """Build the request from loosely-structured input such as decoded JSON."""
        if not isinstance(data, Mapping):
            raise ValidationError(f"expected an object, got {type(data).__name__}", "payload")
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as exc:
            raise _to_validation_error(exc, cls) from exc

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ListFilter(RequestModel):
    """Paging and date-range filters shared by the listing endpoints."""

    page: Optional[int] = Field(None, ge=0)
    size: Optional[int] = Field(None, ge=1)
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    status: Optional[str] = None

    def to_query(self) -> Dict[str, Any]:
        return self.to_payload()


class MonnifyResponse(MonnifyModel, Generic[T]):
    """The standard response envelope."""

    request_successful: bool
    response_message: str
    response_code: str
    response_body: Optional[T] = None

    @property
    def is_successful(self) -> bool:
        return self.request_successful

    @classmethod
    def from_payload(cls: type[EnvelopeT], payload: Mapping[str, Any]) -> EnvelopeT:
        """
        Parse an envelope returned by :class:`monnify.clients.http.HttpClient`.

        Unsuccessful envelopes (the 404 fall-through) often carry a body that does
        not match the success shape; it is dropped rather than rejected.
        """
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as exc:
            if not payload.get("requestSuccessful"):
                return cls.model_validate({**payload, "responseBody": None})
            raise MonnifyException(
                f"Unexpected response body: {_to_validation_error(exc, cls).message}",
                0,
                "INVALID_RESPONSE",
            ) from exc


class Sort(MonnifyModel):
    sorted: bool = False
    unsorted: bool = True
    empty: bool = True


class Pageable(MonnifyModel):
    sort: Optional[Sort] = None
    page_size: int = 0
    page_number: int = 0
    offset: int = 0
    unpaged: bool = False
    paged: bool = True


class Page(MonnifyModel, Generic[T]):
    """Spring-style page returned by Monnify's listing endpoints."""

    content: List[T] = Field(default_factory=list)
    pageable: Optional[Pageable] = None
    total_pages: int = 0
    last: bool = True
    total_elements: int = 0
    sort: Optional[Sort] = None
    first: bool = True
    number_of_elements: int = 0
    size: int = 0
    number: int = 0
    empty: bool = True

    @property
    def has_next_page(self) -> bool:
        return not self.last

    @property
    def has_previous_page(self) -> bool:
        return not self.first


__all__ = [
    "ListFilter",
    "MonnifyModel",
    "MonnifyResponse",
    "Page",
    "Pageable",
    "RequestModel",
    "Sort",
    "require_value",
]
