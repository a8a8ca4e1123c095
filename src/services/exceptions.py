"""Shared exceptions for bookmark validation and store operations."""


class BookmarkError(Exception):
    """
    Base exception for errors that map directly onto an HTTP response.

    Subclasses set `status_code`; the message is returned to the client as
    `{"error": {"message": ...}}`.
    """

    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BookmarkValidationError(BookmarkError):
    """Raised when a create or update payload is rejected."""

    status_code = 400


class MissingFieldError(BookmarkValidationError):
    """Raised when a required field is absent or falsy on create."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing '{field}' in request body")


class InvalidRatingError(BookmarkValidationError):
    """Raised when rating is not an integer between 0 and 5."""

    def __init__(self) -> None:
        super().__init__("'rating' must be a number between 0 and 5")


class InvalidUrlError(BookmarkValidationError):
    """Raised when URL format validation is enabled and the url is not http(s)."""

    def __init__(self) -> None:
        super().__init__("'url' must be a valid URL")


class EmptyUpdateError(BookmarkValidationError):
    """Raised when an update payload carries no usable field."""

    def __init__(self) -> None:
        super().__init__(
            "Request body must contain either 'title', 'url', 'description' or 'rating'",
        )


class BookmarkNotFoundError(BookmarkError):
    """Raised when a bookmark id does not exist in the store."""

    status_code = 404

    def __init__(self, bookmark_id: str | int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("Bookmark doesn't exist")
