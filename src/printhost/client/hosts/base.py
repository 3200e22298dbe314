"""Shared contract for print host clients.

How to use the most important parts:
- `PrintHost`: The protocol every server family implements. Type your code against this.
- `HttpPrintHost`: Immutable configuration plus the connectivity probe and upload plumbing
  shared by the HTTP-based families. Subclasses only describe their endpoints and form fields.
"""

import abc
import collections.abc
import dataclasses
import typing

import pydantic
import requests
import structlog

from printhost.client import consts, exceptions, models, transport

logger = structlog.get_logger(consts.APP_NAME)

type ProgressFn = transport.ProgressFn
type ErrorFn = collections.abc.Callable[[str], None]


class PrintHost(typing.Protocol):
    """Protocol for a print host client."""

    @property
    def name(self) -> str:
        """Display name of the server family."""
        ...

    def test(self) -> tuple[bool, str]:
        """Verify that the host is reachable and is the expected server family.

        Returns:
            `(ok, message)`. The message is empty on success and may be empty on failure.
        """
        ...

    def upload(self, upload_data: models.PrintHostUpload, progress_fn: ProgressFn, error_fn: ErrorFn) -> bool:
        """Transfer a file to the host, probing it first.

        Returns:
            True if the file was accepted and the upload was not cancelled.
        """
        ...

    def get_test_ok_msg(self) -> str:
        """Message to show after a successful probe."""
        ...

    def get_test_failed_msg(self, msg: str) -> str:
        """Message to show after a failed probe, wrapping the probe's own message."""
        ...


@dataclasses.dataclass(frozen=True, kw_only=True)
class HttpPrintHost(abc.ABC):
    """Base for print hosts spoken to over HTTP with an `X-Api-Key` header.

    Attributes:
        host: Base URL or `host[:port]`; plain HTTP is assumed without a scheme.
        api_key: API key sent with every request.
        cafile: Optional CA bundle used to verify the host's TLS certificate.
        timeout: Socket timeout in seconds for each request.
    """

    host: str
    api_key: str = ""
    cafile: str = ""
    timeout: float = consts.DEFAULT_TIMEOUT

    name: typing.ClassVar[str]
    version_endpoint: typing.ClassVar[str]
    required_field: typing.ClassVar[str]
    server_prefix: typing.ClassVar[str]
    minimum_version: typing.ClassVar[str]
    info_model: typing.ClassVar[type[models.ServerInfo]]
    upload_file_field: typing.ClassVar[str]

    def make_url(self, path: str) -> str:
        """Absolute URL of `path` on this host."""
        return transport.make_url(self.host, path)

    def set_auth(self, session: requests.Session) -> None:
        """Attach the API key and CA bundle to `session`."""
        transport.set_auth(session, self.api_key, self.cafile)

    def _session(self) -> requests.Session:
        session = transport.new_session()
        self.set_auth(session)
        return session

    def validate_version_text(self, version_text: str | None) -> bool:
        """Whether the reported server identity belongs to this family.

        A host that doesn't identify itself at all is accepted.
        """
        return version_text.startswith(self.server_prefix) if version_text is not None else True

    def get_test_ok_msg(self) -> str:
        """Message to show after a successful probe."""
        return f"Connection to {self.name} works correctly."

    def get_test_failed_msg(self, msg: str) -> str:
        """Message to show after a failed probe."""
        return (
            f"Could not connect to {self.name}: {msg}\n\n"
            f"Note: {self.server_prefix} version at least {self.minimum_version} is required."
        )

    def test(self) -> tuple[bool, str]:
        """Probe the host's version endpoint.

        Returns:
            `(True, "")` when the host answered with a recognised identity, otherwise
            `(False, message)`. A response lacking the required field fails with an empty message.
        """
        url = self.make_url(self.version_endpoint)
        logger.info("Get version", host=self.name, url=url)

        try:
            with self._session() as session:
                response = transport.request(session, "GET", url, timeout=self.timeout)
        except exceptions.PrintHostHttpError as e:
            logger.error(
                "Error getting version",
                host=self.name,
                error=e.error,
                status_code=e.status_code,
                body=e.response_body,
            )
            return False, str(e)

        logger.debug("Got version", host=self.name, body=response.text)

        try:
            data = response.json()
            if not isinstance(data, dict):
                raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
            if self.required_field not in data:
                return False, ""
            info = self.info_model.model_validate(data)
        except (ValueError, pydantic.ValidationError) as e:
            logger.warning("Could not parse version response", host=self.name, error=str(e))
            return False, consts.PARSE_ERROR_MESSAGE

        if not self.validate_version_text(info.identity):
            return False, consts.MISMATCH_MESSAGE.format(info.identity or self.server_prefix)
        return True, ""

    @abc.abstractmethod
    def upload_endpoint(self, upload_data: models.PrintHostUpload) -> str:
        """Relative endpoint the file is posted to."""

    @abc.abstractmethod
    def upload_form(self, upload_data: models.PrintHostUpload) -> dict[str, str]:
        """Plain form fields sent alongside the file."""

    def upload(self, upload_data: models.PrintHostUpload, progress_fn: ProgressFn, error_fn: ErrorFn) -> bool:
        """Probe the host, then post `upload_data` as a multipart form.

        Args:
            upload_data: The file to send and where to put it.
            progress_fn: Called with an `UploadProgress` and the cancel event after every chunk.
                Setting the event aborts the transfer.
            error_fn: Called once with a display message if the probe or the upload fails.
                Not called when the upload is cancelled.

        Returns:
            True if the host accepted the file.
        """
        ok, test_msg = self.test()
        if not ok:
            error_fn(test_msg)
            return False

        url = self.make_url(self.upload_endpoint(upload_data))
        logger.info(
            "Uploading file",
            host=self.name,
            source=str(upload_data.source_path),
            url=url,
            filename=upload_data.upload_filename,
            path=upload_data.upload_parent_path,
            start_print=upload_data.start_print,
        )

        try:
            with upload_data.source_path.open("rb") as fileobj, self._session() as session:
                body = transport.MultipartBody(
                    self.upload_form(upload_data),
                    self.upload_file_field,
                    fileobj,
                    upload_data.upload_filename,
                    upload_data.source_path.stat().st_size,
                    progress_fn=progress_fn,
                )
                response = transport.request(
                    session,
                    "POST",
                    url,
                    data=body,
                    headers={"Content-Type": body.content_type},
                    timeout=self.timeout,
                )
        except exceptions.PrintHostUploadCancelled:
            logger.info("Upload canceled", host=self.name)
            return False
        except exceptions.PrintHostHttpError as e:
            logger.error(
                "Error uploading file",
                host=self.name,
                error=e.error,
                status_code=e.status_code,
                body=e.response_body,
            )
            error_fn(str(e))
            return False
        except OSError as e:
            logger.error("Could not read upload source", host=self.name, source=str(upload_data.source_path))
            error_fn(f"Could not read {upload_data.source_path}: {e.strerror or e}")
            return False

        logger.debug("File uploaded", host=self.name, status_code=response.status_code, body=response.text)
        return True
