"""
MiniNote Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for every failure the service knows about.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) map them to
       HTTP responses; context is logged, never returned to the client.
Who:   Raised by services and stores; caught by global handlers.

Exception Hierarchy:
    MiniNoteError (base)
    ├── SlugValidationError      → 303 redirect to a fresh note id
    ├── CapacityError            → 403 Forbidden (empty body)
    │   ├── NoteCountLimitError
    │   └── NoteSizeLimitError
    ├── StorageError             → 500 Internal Server Error (empty body)
    ├── NotFoundError            → 404 Not Found (empty body)
    ├── UnsupportedMediaTypeError → 415 (note save without a form body)
    └── UploadError              → status_code of the subclass
        ├── UploadTooLargeError  → 403
        ├── MissingUploadError   → 400
        └── InvalidUploadError   → 400
"""

from typing import Any, Dict, Optional


class MiniNoteError(Exception):
    """
    Base exception for all MiniNote application errors.

    Attributes:
        message:  Short description, safe to log
        context:  Additional debug info (logged, NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class SlugValidationError(MiniNoteError):
    """
    Raised when a note identifier does not match the slug grammar.

    Never shown to users: the handler answers with a redirect to a newly
    generated id, so a mistyped or guessed path simply starts a new note.
    """

    def __init__(self, slug: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["slug"] = slug
        super().__init__(message=f"Invalid note id '{slug}'", context=ctx)
        self.slug = slug


class CapacityError(MiniNoteError):
    """
    Raised when a write would exceed a configured ceiling.

    HTTP:    403 Forbidden with no body; logged server-side.
    """


class NoteCountLimitError(CapacityError):
    """The note root already holds FILE_LIMIT files and the slug is new."""

    def __init__(self, limit: int, count: int):
        super().__init__(
            message=f"File limit reached {limit}",
            context={"limit": limit, "count": count},
        )
        self.limit = limit


class NoteSizeLimitError(CapacityError):
    """The submitted note text is larger than SINGLE_FILE_SIZE_LIMIT bytes."""

    def __init__(self, limit: int, size: int):
        super().__init__(
            message=f"File size limit reached {limit}",
            context={"limit": limit, "size": size},
        )
        self.limit = limit


class StorageError(MiniNoteError):
    """
    Raised when a filesystem operation on the note root fails.

    What:    Could not read, write, delete or list files.
    When:    Disk full, permission denied, I/O error.
    HTTP:    500 Internal Server Error. Not retried: the note root is a
             single local disk with no transient-failure model.
    """

    def __init__(
        self,
        message: str = "Storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(MiniNoteError):
    """
    Raised when a requested note, upload or asset does not exist.

    HTTP:    404 Not Found. Expected during normal use, so it is not
             logged as an error.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class UploadError(MiniNoteError):
    """
    Base for upload failures. Subclasses fix the HTTP status.

    The message doubles as the short plain-text response body.
    """

    status_code: int = 400


class UploadTooLargeError(UploadError):
    """Upload payload exceeds UPLOAD_SIZE_LIMIT."""

    status_code = 403

    def __init__(self, limit: int, size: Optional[int] = None):
        ctx: Dict[str, Any] = {"limit": limit}
        if size is not None:
            ctx["size"] = size
        super().__init__(message="file too large", context=ctx)
        self.limit = limit


class MissingUploadError(UploadError):
    """The multipart body has no `file` field."""

    status_code = 400

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="no file", context=context)


class InvalidUploadError(UploadError):
    """The multipart stream could not be read."""

    status_code = 400

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="invalid file", context=context)


class UnsupportedMediaTypeError(MiniNoteError):
    """
    Raised when a note save is not form-encoded.

    A body of another type would parse as an empty form, and empty text
    means delete, so such a request must never reach NoteService.save.

    HTTP:    415 Unsupported Media Type, empty body.
    """

    def __init__(self, content_type: Optional[str]):
        super().__init__(
            message=f"Unsupported content type '{content_type or ''}'",
            context={"content_type": content_type},
        )
        self.content_type = content_type
