class TriageError(Exception):
    """Base exception for all triage pipeline errors."""


class ValidationError(TriageError):
    """Raised when a submission is missing required input before any stage runs."""


class ExtractionError(TriageError):
    """Raised when a specialized extraction stage cannot process its input."""


class RoutingError(TriageError):
    """Raised when the action router cannot obtain a decision from the model."""
