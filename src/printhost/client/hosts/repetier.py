"""Repetier-Server client.

Uploads go to `/printer/job/<printer>` (store and start printing) or `/printer/model/<printer>`
(store as a model only). Requires Repetier-Server 0.92.2 or newer.
"""

import dataclasses
import typing

from printhost.client import models
from printhost.client.hosts.base import HttpPrintHost


@dataclasses.dataclass(frozen=True, kw_only=True)
class RepetierServer(HttpPrintHost):
    """Client for a printer slot on a Repetier-Server instance.

    Attributes:
        printer_name: Printer slug on the server. It is placed into the upload URL verbatim,
            so it must already be URL-safe.

    Usage Example:
    ```python
        >>> host = RepetierServer(host="192.168.1.20:3344", api_key="secret", printer_name="Prusa_MK3")
        >>> ok, msg = host.test()
    ```
    """

    printer_name: str = ""

    name: typing.ClassVar[str] = "RepetierServer"
    version_endpoint: typing.ClassVar[str] = "printer/info"
    required_field: typing.ClassVar[str] = "version"
    server_prefix: typing.ClassVar[str] = "Repetier-Server"
    minimum_version: typing.ClassVar[str] = "0.92.2"
    info_model: typing.ClassVar[type[models.ServerInfo]] = models.RepetierServerInfo
    upload_file_field: typing.ClassVar[str] = "filename"

    def upload_endpoint(self, upload_data: models.PrintHostUpload) -> str:
        kind = "job" if upload_data.start_print else "model"
        return f"printer/{kind}/{self.printer_name}"

    def upload_form(self, upload_data: models.PrintHostUpload) -> dict[str, str]:
        # Repetier-Server has no folder support for uploads; the parent path is dropped.
        return {"a": "upload"}
