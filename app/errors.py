"""
Error hierarchy for the document service.

    DocsError
    ├── NotAuthenticatedError  : no acting user
    ├── NotFoundError          : document or version id unresolved
    ├── StorageError           : database call failed
    └── ValidationError        : bad input (e.g. blank title)

Services raise these; app.main maps them to HTTP responses.
"""

from datetime import datetime, timezone
from typing import Any


class DocsError(Exception):
    status_code = 500

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.error_type = self.__class__.__name__
        self.context = context
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "detail": self.message,
            "error_type": self.error_type,
            "timestamp": self.timestamp,
            "context": {k: str(v) for k, v in self.context.items()},
        }

    def __repr__(self) -> str:
        return f"{self.error_type}: {self.message}"


class NotAuthenticatedError(DocsError):
    status_code = 401


class NotFoundError(DocsError):
    status_code = 404


class StorageError(DocsError):
    status_code = 503


class ValidationError(DocsError):
    status_code = 422
