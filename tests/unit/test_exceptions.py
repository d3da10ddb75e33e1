"""Unit tests for domain exceptions."""

from wikirag.domain.exceptions import (
    ConfigurationError,
    NotFound,
    PermissionDenied,
    UpstreamServiceError,
    ValidationError,
    WikiRAGError,
)


def test_not_found_message_contains_resource_and_identifier() -> None:
    """NotFound message includes resource and identifier."""
    exc = NotFound("Document", "abc-123")
    assert "Document" in str(exc)
    assert "abc-123" in str(exc)
    assert exc.resource == "Document"
    assert exc.identifier == "abc-123"


def test_not_found_without_identifier() -> None:
    """NotFound without identifier has simple message."""
    exc = NotFound("Task")
    assert str(exc) == "Task not found"
    assert exc.identifier is None


def test_validation_error_keeps_details() -> None:
    exc = ValidationError("Invalid search request", details=[{"loc": ["query"]}])
    assert exc.details == [{"loc": ["query"]}]
    assert ValidationError("x").details == []


def test_upstream_error_carries_status_code() -> None:
    exc = UpstreamServiceError("model not found", status_code=400)
    assert str(exc) == "model not found"
    assert exc.status_code == 400
    assert UpstreamServiceError("down").status_code is None


def test_all_errors_share_base() -> None:
    for exc in (
        ConfigurationError("x"),
        UpstreamServiceError("x"),
        NotFound("x"),
        ValidationError("x"),
        PermissionDenied("x"),
    ):
        assert isinstance(exc, WikiRAGError)
