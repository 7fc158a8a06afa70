class QueueError(Exception):
    """Raised when the queue service cannot be reached or rejects a call."""


class QueueAuthError(QueueError):
    """Raised when the queue service refuses the configured credentials."""
