"""Errors raised while collecting fleet metrics."""


class CollectError(Exception):
    """Base exception for collect errors."""

    pass


class TransportError(CollectError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, url: str, reason: BaseException) -> None:
        self.url = url
        self.reason = reason
        detail = str(reason) or type(reason).__name__
        super().__init__(f"Request to {url} failed: {detail}")


class UnexpectedStatus(CollectError):
    """Raised when the endpoint answers with a non-success status."""

    def __init__(self, status: int, url: str, body: str = "") -> None:
        self.status = status
        self.url = url
        self.body = body
        message = f"Request to {url} returned HTTP {status}"
        if body:
            message = f"{message}: {body.strip()[:200]}"
        super().__init__(message)


class DecodeError(CollectError):
    """Raised when a response body is not a usable metrics snapshot."""

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"Could not decode response from {url}: {detail}")
