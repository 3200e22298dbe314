"""Exceptions for the print host client.

These are raised internally and converted to `(ok, message)` results by the host clients,
so callers of `test()` and `upload()` never see them.

How to use the most important parts:
- `PrintHostError`: Base exception for everything raised in this package.
- `PrintHostHttpError`: Transport failure; `str()` renders the display message.
- `PrintHostUploadCancelled`: Raised from the upload body when the progress callback cancels.
"""

from printhost.client import transport


class PrintHostError(Exception):
    """Base exception for all print host client errors."""


class PrintHostHttpError(PrintHostError):
    """Raised when an HTTP exchange with the print host fails."""

    def __init__(self, error: str, status_code: int = 0, response_body: str = "") -> None:
        """Initialize the error.

        Args:
            error: Error description (transport error text or HTTP reason).
            status_code: HTTP status code, 0 when no response was received.
            response_body: Raw response body from the server.
        """
        super().__init__(transport.format_error(response_body, error, status_code))
        self.error = error
        self.status_code = status_code
        self.response_body = response_body


class PrintHostNetworkError(PrintHostHttpError):
    """Raised when the host is unreachable (connection refused, DNS, TLS, timeouts)."""


class PrintHostApiError(PrintHostHttpError):
    """Raised when the host answers with a non-2xx status."""


class PrintHostUploadCancelled(PrintHostError):
    """Raised when the progress callback requests cancellation of an upload."""
