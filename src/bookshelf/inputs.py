"""
Validated shapes for mutation input.

GraphQL declares every input field nullable, so required fields are enforced
here before anything reaches the database.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .dbmodels import BOOK_FIELDS
from .errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class NewUser(BaseModel):
    """Fields needed to register an account."""

    username: str
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        return _not_blank(value).strip()

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class SavedBook(BaseModel):
    """A book as embedded in a user's saved list."""

    model_config = ConfigDict(populate_by_name=True)

    book_id: str = Field(alias="bookId")
    title: str
    authors: list[str | None] = Field(default_factory=list)
    description: str | None = None
    image: str | None = None
    link: str | None = None

    @field_validator("book_id", "title")
    @classmethod
    def required_text(cls, value: str) -> str:
        return _not_blank(value)

    def to_document(self) -> dict[str, Any]:
        """Render the stored form: every field present, in schema order."""
        document = self.model_dump(by_alias=True)
        return {key: document[key] for key in BOOK_FIELDS}


def describe_errors(exc: PydanticValidationError) -> str:
    """Flatten pydantic errors into one readable message."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def parse_input(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate raw GraphQL input against ``model``.

    Null values are treated as absent so a missing required field reports
    "Field required".

    Raises:
        ValidationError: If any field is missing or invalid
    """
    present = {key: value for key, value in data.items() if value is not None}
    try:
        return model.model_validate(present)
    except PydanticValidationError as e:
        raise ValidationError(describe_errors(e)) from e
