"""Pydantic schemas and validation rules for bookmark endpoints."""
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict

from services.exceptions import (
    BookmarkValidationError,
    EmptyUpdateError,
    InvalidRatingError,
    InvalidUrlError,
    MissingFieldError,
)
from services.sanitizer import sanitize_html

MIN_RATING = 0
MAX_RATING = 5

REQUIRED_CREATE_FIELDS = ("title", "url", "rating")
UPDATABLE_FIELDS = ("title", "url", "rating", "description")

_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")


class BookmarkCreate(BaseModel):
    """Normalized payload for creating a bookmark."""

    title: str
    url: str
    rating: int
    description: str | None = None


class BookmarkUpdate(BaseModel):
    """
    Normalized partial update.

    Only fields that survived validation are set, so
    `model_dump(exclude_unset=True)` yields exactly the delta to merge.
    """

    title: str | None = None
    url: str | None = None
    rating: int | None = None
    description: str | None = None


class StoredBookmark(BaseModel):
    """A bookmark as held by a store, including its assigned id."""

    model_config = ConfigDict(from_attributes=True)

    id: int | str
    title: str
    url: str
    # Numeric strings are tolerated here; the response coerces them.
    rating: int | str
    description: str | None = None


class BookmarkResponse(BaseModel):
    """Client-safe representation of a bookmark."""

    id: int | str
    title: str
    url: str
    description: str | None
    rating: int

    @classmethod
    def from_record(cls, record: StoredBookmark) -> "BookmarkResponse":
        """
        Serialize a stored record for output.

        `title` and `description` are sanitized here and only here; stored
        values keep whatever markup the client sent.
        """
        return cls(
            id=record.id,
            title=sanitize_html(record.title),
            url=record.url,
            description=sanitize_html(record.description),
            rating=int(record.rating),
        )


def parse_rating(value: Any) -> int:
    """
    Parse a rating into an int in [0, 5].

    Accepts ints, integral floats and integer strings ("4"). Rejects
    booleans, decimal strings ("4.5") and anything else.

    Raises:
        InvalidRatingError: If the value is not an integer in range.
    """
    if isinstance(value, bool):
        raise InvalidRatingError()
    if isinstance(value, int):
        rating = value
    elif isinstance(value, float) and value.is_integer():
        rating = int(value)
    elif isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()):
        try:
            rating = int(value.strip())
        except ValueError:
            # past the interpreter's int string-conversion limit
            raise InvalidRatingError() from None
    else:
        raise InvalidRatingError()

    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRatingError()
    return rating


def is_valid_url(url: str) -> bool:
    """Return True for absolute http(s) URLs with a host."""
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _as_text(field: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    raise BookmarkValidationError(f"'{field}' must be a string")


def _as_payload(payload: Any) -> Mapping[str, Any]:
    # Arrays and scalars carry no fields.
    if isinstance(payload, Mapping):
        return payload
    return {}


def validate_create(payload: Any, *, check_url: bool = False) -> BookmarkCreate:
    """
    Validate a create payload.

    `title`, `url` and `rating` must be present and truthy, checked in that
    order. `description` is optional and taken as-is.

    Raises:
        MissingFieldError: If a required field is absent or falsy.
        InvalidRatingError: If rating is not an integer between 0 and 5.
        InvalidUrlError: If check_url is set and url is not an http(s) URL.
    """
    data = _as_payload(payload)
    for field in REQUIRED_CREATE_FIELDS:
        if not data.get(field):
            raise MissingFieldError(field)

    url = _as_text("url", data["url"])
    if check_url and not is_valid_url(url):
        raise InvalidUrlError()

    description = data.get("description")
    return BookmarkCreate(
        title=_as_text("title", data["title"]),
        url=url,
        rating=parse_rating(data["rating"]),
        description=_as_text("description", description) if description is not None else None,
    )


def validate_update(payload: Any, *, check_url: bool = False) -> BookmarkUpdate:
    """
    Validate a partial update payload.

    Falsy values ("", 0, null, false) count as absent, so an update cannot
    set rating to 0 or clear a description. Unknown fields are ignored.

    Raises:
        EmptyUpdateError: If no updatable field carries a truthy value.
        InvalidRatingError: If a supplied rating is not an integer between 0 and 5.
        InvalidUrlError: If check_url is set and a supplied url is not an http(s) URL.
    """
    data = _as_payload(payload)
    supplied = {field: data[field] for field in UPDATABLE_FIELDS if data.get(field)}
    if not supplied:
        raise EmptyUpdateError()

    delta: dict[str, Any] = {}
    for field, value in supplied.items():
        if field == "rating":
            delta[field] = parse_rating(value)
        else:
            delta[field] = _as_text(field, value)

    if check_url and "url" in delta and not is_valid_url(delta["url"]):
        raise InvalidUrlError()

    return BookmarkUpdate(**delta)
