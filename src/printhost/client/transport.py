"""HTTP helpers shared by every print host client.

This module owns the request/response handling: building endpoint URLs, attaching credentials,
turning failed exchanges into typed exceptions and streaming multipart uploads with progress.

How to use the most important parts:
- `make_url`: Join a configured host (with or without scheme) and a relative endpoint.
- `new_session` / `set_auth`: A per-call `requests.Session` carrying the API key header and optional CA bundle.
- `request`: Perform one exchange; raises `PrintHostNetworkError` / `PrintHostApiError` on failure.
- `MultipartBody`: A lazily encoded `multipart/form-data` body reporting progress per chunk.
"""

import collections
import collections.abc
import io
import threading
import typing

import requests
import structlog
from urllib3 import fields as urllib3_fields
from urllib3 import filepost

from printhost.client import consts, exceptions, models
from printhost.client.__version__ import __version__

logger = structlog.get_logger(consts.APP_NAME)

type ProgressFn = collections.abc.Callable[[models.UploadProgress, threading.Event], None]


def make_url(host: str, path: str) -> str:
    """Build an absolute URL for `path` on `host`.

    Hosts without a scheme default to plain HTTP. `path` is used verbatim, so pass it
    without a leading slash.

    Usage Example:
    ```python
        >>> make_url("192.168.1.20:3344", "printer/info")
        'http://192.168.1.20:3344/printer/info'
        >>> make_url("https://octopi.local/", "api/version")
        'https://octopi.local/api/version'
    ```
    """
    if host.startswith(("http://", "https://")):
        if host.endswith("/"):
            return f"{host}{path}"
        return f"{host}/{path}"
    return f"http://{host}/{path}"


def format_error(body: str, error: str, status: int) -> str:
    """Render a failed exchange as a single display string.

    Args:
        body: Raw response body (may be empty).
        error: Transport error text or HTTP reason phrase.
        status: HTTP status code, 0 when no response was received.

    Returns:
        A non-empty message; it contains the status code whenever one is known.
    """
    if not status:
        return error or "Unknown error"

    text = f"HTTP {status}: {error or 'Request failed'}"
    body = body.strip()
    if body:
        if len(body) > consts.MAX_ERROR_BODY:
            body = body[: consts.MAX_ERROR_BODY] + "..."
        text += f", body: `{body}`"
    return text


def new_session() -> requests.Session:
    """Create a session for a single probe or upload call."""
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": f"printhost-client/{__version__}",
            "Accept": "application/json",
        }
    )
    return session


def set_auth(session: requests.Session, api_key: str, cafile: str = "") -> None:
    """Attach credentials and TLS trust to `session`.

    The API key header is always sent, even when empty; hosts reject bad keys themselves.
    A non-empty `cafile` replaces the system trust store for TLS verification.
    """
    session.headers[consts.API_KEY_HEADER] = api_key
    if cafile:
        session.verify = cafile


def request(session: requests.Session, method: str, url: str, **kwargs: typing.Any) -> requests.Response:
    """Perform a single HTTP exchange.

    Args:
        session: Session from `new_session`.
        method: HTTP method (GET, POST, etc.).
        url: Absolute URL from `make_url`.
        **kwargs: Additional arguments passed to `requests.Session.request` (e.g. `timeout`, `data`).

    Returns:
        The response, guaranteed to carry a 2xx status.

    Raises:
        exceptions.PrintHostNetworkError: On connection, TLS (including an unreadable CA bundle) or timeout failures.
        exceptions.PrintHostApiError: On any non-2xx status.
    """
    # A session-level CA bundle loses to REQUESTS_CA_BUNDLE, a request-level one does not
    kwargs.setdefault("verify", session.verify)
    try:
        logger.debug("HTTP Request", method=method, url=url)
        response = session.request(method, url, **kwargs)
    except (requests.exceptions.RequestException, OSError) as e:
        raise exceptions.PrintHostNetworkError(str(e)) from e

    logger.debug("HTTP Response", status_code=response.status_code, body_len=len(response.content))

    if not 200 <= response.status_code < 300:
        raise exceptions.PrintHostApiError(
            response.reason or "",
            status_code=response.status_code,
            response_body=response.text,
        )
    return response


class MultipartBody:
    """Streaming `multipart/form-data` request body.

    The file is read lazily in chunks as the transport consumes the body, and `__len__` lets
    `requests` send a `Content-Length` header instead of chunked encoding.

    After every chunk the progress callback receives an `UploadProgress` snapshot and the
    per-upload cancel event. Once the callback sets the event, the next read raises
    `PrintHostUploadCancelled`, aborting the request.
    """

    def __init__(
        self,
        form: dict[str, str],
        file_field: str,
        fileobj: typing.BinaryIO,
        filename: str,
        file_size: int,
        progress_fn: ProgressFn | None = None,
        chunk_size: int = consts.UPLOAD_CHUNK_SIZE,
    ) -> None:
        """Initializes the body.

        Args:
            form: Plain form fields, sent before the file.
            file_field: Form field name of the file part.
            fileobj: Open binary file positioned at its start.
            filename: Remote filename declared in the file part.
            file_size: Size of `fileobj` in bytes.
            progress_fn: Optional callback invoked after each chunk.
            chunk_size: Preferred size of chunks yielded when iterating.
        """
        self.boundary = filepost.choose_boundary()
        self.cancel = threading.Event()
        self._progress_fn = progress_fn
        self._chunk_size = chunk_size

        head = io.BytesIO()
        for name, value in form.items():
            head.write(self._part_header(urllib3_fields.RequestField(name=name, data=value)))
            head.write(value.encode("utf-8"))
            head.write(b"\r\n")
        file_part = urllib3_fields.RequestField(name=file_field, data=b"", filename=filename)
        head.write(self._part_header(file_part, content_type="application/octet-stream"))
        tail = f"\r\n--{self.boundary}--\r\n".encode("latin-1")

        self._parts: collections.deque[typing.BinaryIO] = collections.deque(
            [io.BytesIO(head.getvalue()), fileobj, io.BytesIO(tail)]
        )
        self._total = len(head.getvalue()) + file_size + len(tail)
        self._sent = 0

    def _part_header(self, field: urllib3_fields.RequestField, content_type: str | None = None) -> bytes:
        field.make_multipart(content_type=content_type)
        return f"--{self.boundary}\r\n".encode("latin-1") + field.render_headers().encode("utf-8")

    @property
    def content_type(self) -> str:
        """Value for the request's `Content-Type` header."""
        return f"multipart/form-data; boundary={self.boundary}"

    def __len__(self) -> int:
        return self._total

    def __iter__(self) -> collections.abc.Iterator[bytes]:
        while chunk := self.read(self._chunk_size):
            yield chunk

    def read(self, size: int | None = -1) -> bytes:
        """Return up to `size` bytes of the encoded body (everything left if negative)."""
        if self.cancel.is_set():
            raise exceptions.PrintHostUploadCancelled("Upload canceled")

        if size is None or size < 0:
            size = self._total - self._sent

        chunk = bytearray()
        while len(chunk) < size and self._parts:
            data = self._parts[0].read(size - len(chunk))
            if not data:
                self._parts.popleft()
                continue
            chunk += data

        if chunk:
            self._sent += len(chunk)
            self._report()
        return bytes(chunk)

    def _report(self) -> None:
        if self._progress_fn is None:
            return
        self._progress_fn(models.UploadProgress(uploaded=self._sent, total=self._total), self.cancel)
        if self.cancel.is_set():
            raise exceptions.PrintHostUploadCancelled("Upload canceled")
