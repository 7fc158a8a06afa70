class TaskInputError(Exception):
    """Raised when a task's input cannot be acted on (missing id, missing file)."""
