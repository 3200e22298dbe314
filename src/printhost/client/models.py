"""Data models for the print host client.

How to use the most important parts:
- `PrintHostUpload`: Describes one upload job. Pass it to `PrintHost.upload(...)`.
- `UploadProgress`: The snapshot handed to your progress callback while a file is in flight.
- `RepetierServerInfo` / `OctoPrintVersion`: Parsed probe responses. Optional fields are `None` when
  the server omits them.
"""

import pathlib
import typing

import pydantic


class PrintHostUpload(pydantic.BaseModel):
    """A single file transfer to a print host."""

    model_config = pydantic.ConfigDict(frozen=True)

    source_path: pathlib.Path
    upload_path: pathlib.PurePosixPath
    start_print: bool = False

    @pydantic.field_validator("upload_path")
    @classmethod
    def require_filename(cls, v: pathlib.PurePosixPath) -> pathlib.PurePosixPath:
        """Reject upload paths without a filename component."""
        if not v.name:
            raise ValueError("upload_path must end with a filename")
        return v

    @property
    def upload_filename(self) -> str:
        """Remote filename the host should store the file under."""
        return self.upload_path.name

    @property
    def upload_parent_path(self) -> str:
        """Remote directory, or an empty string for the host's root."""
        parent = str(self.upload_path.parent)
        return "" if parent == "." else parent


class UploadProgress(pydantic.BaseModel):
    """Transfer progress of the request body."""

    model_config = pydantic.ConfigDict(frozen=True)

    uploaded: int
    total: int

    @property
    def percent(self) -> float:
        """Percentage of the body sent so far."""
        if self.total <= 0:
            return 0.0
        return min(100.0, self.uploaded * 100.0 / self.total)


class ServerInfo(pydantic.BaseModel):
    """Base for probe responses; hosts return plenty of fields we don't need."""

    model_config = pydantic.ConfigDict(extra="allow", coerce_numbers_to_str=True)

    @property
    def identity(self) -> str | None:
        """Server identification text checked against the expected family."""
        return None


class RepetierServerInfo(ServerInfo):
    """Response of Repetier-Server's `/printer/info` endpoint."""

    version: typing.Any
    name: str | None = None

    @pydantic.field_validator("name", mode="before")
    @classmethod
    def json_literal_as_text(cls, v: typing.Any) -> typing.Any:
        """Read JSON `null`/`true`/`false` as their literal text, so they fail the identity check."""
        if v is None or isinstance(v, bool):
            return "null" if v is None else str(v).lower()
        return v

    @property
    def identity(self) -> str | None:
        """The `name` field, e.g. `Repetier-Server 0.92.2`."""
        return self.name


class OctoPrintVersion(ServerInfo):
    """Response of OctoPrint's `/api/version` endpoint."""

    api: typing.Any
    server: str | None = None
    text: str | None = None

    @property
    def identity(self) -> str | None:
        """The `text` field, e.g. `OctoPrint 1.9.3`."""
        return self.text
