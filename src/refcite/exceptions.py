"""Exceptions raised by the citation pipeline.

Every error carries the HTTP status the web layer answers with and a message
that is safe to show to the user.
"""


class CitationError(Exception):
    """Base exception for all refcite errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CitationError):
    """Raised when a request is missing required fields or has a bad shape."""

    status_code = 400


class NotFoundError(CitationError):
    """Raised when an owned entity does not exist."""

    status_code = 404


class StyleNotFoundError(NotFoundError):
    """Raised when no style definition matches the requested id exactly."""

    status_code = 400

    def __init__(self, style_id: str):
        super().__init__(f"Citation style '{style_id}' not found")
        self.style_id = style_id


class IncompleteItemError(CitationError):
    """Raised when an item has neither a title nor any author."""

    status_code = 400

    def __init__(self, message: str = "A title or at least one author is required"):
        super().__init__(message)


class RenderingFailure(CitationError):
    """Raised when the CSL engine rejects an item."""

    pass


class CatalogUnavailable(CitationError):
    """Raised when the style directory cannot be read."""

    pass


class UpstreamError(CitationError):
    """Raised when an external bibliographic service fails."""

    status_code = 502


# Aliases matching the operation contracts
StyleNotFound = StyleNotFoundError
IncompleteItem = IncompleteItemError
