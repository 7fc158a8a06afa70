class DocumentError(Exception):
    """Base exception for document store and boundary errors."""


class DocumentNotFoundError(DocumentError):
    """Raised when a document cannot be found in the database."""
