"""Print host client SDK.

This package provides Python clients for uploading G-code to networked 3D printer hosts
(Repetier-Server, OctoPrint) and verifying that a configured host is reachable.

How to use the most important parts:
- `get_print_host`: Build the right client for a configured `HostType`. Start here.
- `RepetierServer` / `OctoPrint`: The concrete clients. Both follow the `PrintHost` protocol,
  exposing `test()` for the connectivity probe and `upload(...)` for file transfer.
- `PrintHostUpload`: Describes one file to send and whether to start printing it.
"""

import logging

import structlog

# Set default library logging level to WARNING if the user hasn't configured structlog
if not structlog.is_configured():
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING))

from printhost.client.__version__ import __version__
from printhost.client.hosts import HostType, OctoPrint, PrintHost, RepetierServer, get_print_host
from printhost.client.models import PrintHostUpload, UploadProgress

__all__ = [
    "HostType",
    "OctoPrint",
    "PrintHost",
    "PrintHostUpload",
    "RepetierServer",
    "UploadProgress",
    "__version__",
    "get_print_host",
]
