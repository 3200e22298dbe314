"""Print host clients, one per server family.

How to use the most important parts:
- `get_print_host`: Build the client for a configured `HostType`.
- `PrintHost`: The protocol all clients implement; hold values of this type in your code.
"""

import enum

from printhost.client import consts
from printhost.client.hosts.base import ErrorFn, HttpPrintHost, PrintHost, ProgressFn
from printhost.client.hosts.octoprint import OctoPrint
from printhost.client.hosts.repetier import RepetierServer

__all__ = [
    "ErrorFn",
    "HostType",
    "HttpPrintHost",
    "OctoPrint",
    "PrintHost",
    "ProgressFn",
    "RepetierServer",
    "get_print_host",
]


class HostType(enum.StrEnum):
    """Supported print host server families."""

    REPETIER = "repetier"
    OCTOPRINT = "octoprint"


def get_print_host(
    host_type: HostType | str,
    *,
    host: str,
    api_key: str = "",
    cafile: str = "",
    printer_name: str = "",
    timeout: float = consts.DEFAULT_TIMEOUT,
) -> PrintHost:
    """Create the client for `host_type`.

    Args:
        host_type: Server family, as a `HostType` or its string value.
        host: Base URL or `host[:port]` of the server.
        api_key: API key sent with every request.
        cafile: Optional CA bundle for TLS verification.
        printer_name: Printer slug; only used by Repetier-Server.
        timeout: Socket timeout in seconds.

    Raises:
        ValueError: If `host_type` is not a known family.

    Usage Example:
    ```python
        >>> host = get_print_host("repetier", host="192.168.1.20:3344", api_key="k", printer_name="MK3")
        >>> host.name
        'RepetierServer'
    ```
    """
    match HostType(host_type):
        case HostType.REPETIER:
            return RepetierServer(host=host, api_key=api_key, cafile=cafile, printer_name=printer_name, timeout=timeout)
        case HostType.OCTOPRINT:
            return OctoPrint(host=host, api_key=api_key, cafile=cafile, timeout=timeout)
