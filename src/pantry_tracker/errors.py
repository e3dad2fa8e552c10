"""Error taxonomy for pantry operations.

Every error carries a human-readable ``message`` and the HTTP status the API
layer should answer with. Services raise these; the FastAPI exception
handlers turn them into ``{"error": message}`` bodies.
"""


class PantryError(Exception):
    """Base class for errors surfaced to API callers."""

    http_status = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class MissingParameter(PantryError):
    """A required identifier or field was absent from the input."""


class ValidationFailed(PantryError):
    """A dependent record could not be created or yielded no usable id."""


class StoreUnavailable(PantryError):
    """The backing data store returned an error."""

    http_status = 503


class NotFound(PantryError):
    """A catalog record does not exist."""

    http_status = 404
