class FeedbackError(RuntimeError):
    ...

class InvalidInput(FeedbackError, ValueError):
    """Text is empty or longer than the configured ceiling."""

class GenerationUnavailable(FeedbackError):
    """The model server could not be reached or returned an API error."""
