"""OctoPrint client."""

import dataclasses
import typing

from printhost.client import models
from printhost.client.hosts.base import HttpPrintHost


@dataclasses.dataclass(frozen=True, kw_only=True)
class OctoPrint(HttpPrintHost):
    """Client for an OctoPrint instance, uploading to its local storage."""

    name: typing.ClassVar[str] = "OctoPrint"
    version_endpoint: typing.ClassVar[str] = "api/version"
    required_field: typing.ClassVar[str] = "api"
    server_prefix: typing.ClassVar[str] = "OctoPrint"
    minimum_version: typing.ClassVar[str] = "1.1.0"
    info_model: typing.ClassVar[type[models.ServerInfo]] = models.OctoPrintVersion
    upload_file_field: typing.ClassVar[str] = "file"

    def upload_endpoint(self, upload_data: models.PrintHostUpload) -> str:
        return "api/files/local"

    def upload_form(self, upload_data: models.PrintHostUpload) -> dict[str, str]:
        form = {"print": "true" if upload_data.start_print else "false"}
        if upload_data.upload_parent_path:
            form["path"] = upload_data.upload_parent_path
        return form
