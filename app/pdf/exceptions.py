class ExtractionError(Exception):
    """Raised when a document's bytes cannot be turned into usable text."""
