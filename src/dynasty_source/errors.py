"""Exceptions raised by the source adapter."""


class SourceError(Exception):
    """Base class for every error surfaced to the host."""


class TransportError(SourceError):
    """The request never produced an HTTP response."""

    def __init__(self, url: str, cause: Exception | None = None):
        self.url = url
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Transport error for {url}{detail}")


class HttpStatusError(SourceError):
    """A response arrived with a status other than 200."""

    def __init__(self, url: str, status: int):
        self.url = url
        self.status = status
        super().__init__(f"Unexpected status {status} for {url}")


class RetryExhausted(SourceError):
    """Some batch items were still failing after the last pass."""

    def __init__(self, pending: list[str], attempts: int):
        self.pending = pending
        self.attempts = attempts
        super().__init__(
            f"Too many request attempts: {len(pending)} request(s) still failing after {attempts} passes"
        )


class DecodeError(SourceError):
    """A response body did not match the expected record shape."""

    def __init__(self, url: str, cause: Exception | None = None):
        self.url = url
        self.cause = cause
        super().__init__(f"Could not decode response from {url}")


class Unimplemented(SourceError):
    """The operation is not supported by this source."""

    def __init__(self, message: str = "Not implemented"):
        super().__init__(message)


class UnsupportedFilter(Unimplemented):
    """A filter value the query builder does not understand."""

    def __init__(self, filter_value: object):
        self.filter_value = filter_value
        super().__init__(f"Unsupported filter value: {filter_value!r}")


class MissingField(SourceError):
    """A decoded record lacks a field the caller needs."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Missing field: {field}")
