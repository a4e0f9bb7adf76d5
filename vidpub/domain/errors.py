"""Error taxonomy for the publish pipeline.

Every error carries a machine-readable ``kind`` and the HTTP status the API
layer maps it to. Diagnostic detail that must not reach the client (tool
stderr, storage error text) lives in extra attributes, never in ``message``.
"""
from typing import Optional


class PublishError(Exception):
    """Base class for all pipeline errors."""

    kind = "internal_error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequest(PublishError):
    kind = "bad_request"
    status_code = 400


class PayloadTooLarge(BadRequest):
    kind = "payload_too_large"


class UnsupportedMediaType(BadRequest):
    kind = "unsupported_media_type"


class AuthFailure(PublishError):
    kind = "unauthorized"
    status_code = 401


class Forbidden(PublishError):
    kind = "forbidden"
    status_code = 403


class NotFound(PublishError):
    kind = "not_found"
    status_code = 404


class UnprocessableMedia(PublishError):
    kind = "unprocessable_media"
    status_code = 422


class ToolFailure(PublishError):
    """External process exited non-zero, timed out, or could not start."""

    kind = "tool_failure"
    status_code = 400

    def __init__(self, message: str, stderr: str = "", returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode


class IOFailure(PublishError):
    kind = "io_failure"
    status_code = 500


class CommitFailure(IOFailure):
    """Metadata update failed after the object was already published."""

    kind = "commit_failure"

    def __init__(self, message: str, object_key: str) -> None:
        super().__init__(message)
        self.object_key = object_key


class StorageFailure(PublishError):
    kind = "storage_failure"
    status_code = 502
