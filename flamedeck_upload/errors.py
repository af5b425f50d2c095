"""
Errors raised while uploading a trace.

Every error is terminal for the run. `status` is the HTTP status code when a
response was received and 0 otherwise.
"""


class UploadError(Exception):
    def __init__(self, message: str, status: int = 0):
        super().__init__(message)
        self.message = message
        self.status = status


class NotFoundError(UploadError):
    """The trace file path does not exist."""


class NameResolutionError(UploadError):
    """No file name could be derived from the path."""


class MissingFileNameError(UploadError):
    """Reading from stdin without --file-name."""


class EmptyInputError(UploadError):
    """stdin produced zero bytes."""


class InvalidMetadataError(UploadError):
    """--metadata is not valid JSON."""


class RequestConstructionError(UploadError):
    """The upload URL or headers could not be built."""


class TransportError(UploadError):
    """The request could not be sent or its response read."""


class MalformedSuccessResponseError(UploadError):
    """A 2xx response whose body lacks a trace id."""

    def __init__(self, message: str, status: int, body: str):
        super().__init__(message, status)
        self.body = body


class ApiError(UploadError):
    """A non-2xx response carrying a JSON error message."""

    def __init__(self, message: str, status: int, issues=None):
        super().__init__(message, status)
        self.issues = issues


class ApiErrorUnparseable(UploadError):
    """A non-2xx response whose body is not a JSON error."""

    def __init__(self, status: int, body: str):
        super().__init__(f"API Error ({status}) with unparseable body", status)
        self.body = body
