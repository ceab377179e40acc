"""Tests for domain and storage exceptions (error_code, message, details)."""

import pytest

from property_media.domain.exceptions import (
    NoFileProvidedError,
    PropertyMediaException,
    ValidationException,
)
from property_media.infrastructure.exceptions import (
    StorageDeleteError,
    StorageException,
    StoragePermissionError,
    StorageUploadError,
    StorageWriteError,
)


def test_base_exception_default_error_code() -> None:
    """Base exception uses class name as error_code when not provided."""
    exc = PropertyMediaException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "PropertyMediaException"
    assert exc.details == {}
    assert str(exc) == "Something failed"


def test_base_exception_to_dict() -> None:
    """to_dict gives the JSON error body."""
    exc = PropertyMediaException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception_field() -> None:
    exc = ValidationException("Bad kind", field="media_kind")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "media_kind"}
    assert ValidationException("Bad").details == {}


def test_no_file_provided() -> None:
    exc = NoFileProvidedError("u1", "profile")
    assert exc.message == "No file provided"
    assert exc.error_code == "NO_FILE_PROVIDED"
    assert exc.details == {"owner_id": "u1", "category": "profile"}


@pytest.mark.parametrize(
    ("exc", "error_code", "detail_key"),
    [
        (StorageUploadError("k", "boom"), "STORAGE_UPLOAD_ERROR", "storage_key"),
        (StorageWriteError("k", "boom"), "STORAGE_WRITE_ERROR", "storage_key"),
        (StorageDeleteError("k", "boom"), "STORAGE_DELETE_ERROR", "reference"),
        (StoragePermissionError("k", "write"), "STORAGE_PERMISSION_ERROR", "path"),
    ],
)
def test_storage_errors(exc: StorageException, error_code: str, detail_key: str) -> None:
    """Storage errors share one base and carry the offending key or path."""
    assert isinstance(exc, StorageException)
    assert isinstance(exc, PropertyMediaException)
    assert exc.error_code == error_code
    assert exc.details[detail_key] == "k"
