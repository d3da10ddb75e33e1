"""Domain exceptions."""


class WikiRAGError(Exception):
    """Base exception for wikirag."""

    pass


class ConfigurationError(WikiRAGError):
    """Feature or endpoint is not configured."""

    pass


class UpstreamServiceError(WikiRAGError):
    """Embedding endpoint unreachable or returned an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFound(WikiRAGError):
    """Requested resource was not found."""

    def __init__(self, resource: str, identifier: str | None = None) -> None:
        message = f"{resource} {identifier} not found" if identifier else f"{resource} not found"
        super().__init__(message)
        self.resource = resource
        self.identifier = identifier


class ValidationError(WikiRAGError):
    """Validation failed for input data."""

    def __init__(self, message: str, details: list[dict] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class PermissionDenied(WikiRAGError):
    """User does not have permission for the requested action."""

    pass
