class AnalysisError(Exception):
    """Raised when the model's analysis cannot be obtained or understood."""


class AnalysisValidationError(AnalysisError):
    """Raised when the parsed analysis violates the payload schema."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
