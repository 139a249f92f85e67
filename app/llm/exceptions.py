class ModelInvocationError(Exception):
    """Raised when a call to the hosted model fails or returns unusable output."""


class ModelNetworkError(ModelInvocationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class PromptTemplateError(Exception):
    """Raised when a prompt template cannot be loaded or rendered.

    This signals a programming error on the caller's side and is never
    treated as a recoverable stage failure.
    """
