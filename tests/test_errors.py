"""Unit tests for app.errors: hierarchy and serialization."""

import pytest

from app.errors import DocsError, NotAuthenticatedError, NotFoundError, StorageError, ValidationError


@pytest.mark.parametrize("cls,status", [
    (NotAuthenticatedError, 401),
    (NotFoundError, 404),
    (ValidationError, 422),
    (StorageError, 503),
])
def test_status_codes(cls, status):
    err = cls("nope")
    assert isinstance(err, DocsError)
    assert err.status_code == status


def test_to_dict():
    err = NotFoundError("Version not found", version_id=7)
    d = err.to_dict()
    assert d["detail"] == "Version not found"
    assert d["error_type"] == "NotFoundError"
    assert d["context"] == {"version_id": "7"}
    assert "timestamp" in d


def test_str_and_repr():
    err = StorageError("disk full")
    assert str(err) == "disk full"
    assert repr(err) == "StorageError: disk full"
