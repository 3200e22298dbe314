"""Print host CLI package.

This module provides a command-line tool `printhostctl` used to probe print hosts and upload files to them.
"""

from printhost.client.cli.common import console, get_print_host, logger
from printhost.client.cli.main import app, main

__all__ = [
    "app",
    "console",
    "get_print_host",
    "logger",
    "main",
]
