"""Shared CLI helpers."""

import collections.abc
import contextlib
import logging
import signal
import sys
import threading
import typing

import better_exceptions
import structlog
from rich import console as rich_console

from printhost.client import consts as sdk_consts
from printhost.client import hosts
from printhost.client.cli import config, consts

if typing.TYPE_CHECKING:
    from structlog.typing import Processor

# Setup
better_exceptions.hook()
console = rich_console.Console()
err_console = rich_console.Console(stderr=True)
logger = structlog.get_logger(sdk_consts.APP_NAME)


def output_message(msg: str, *, error: bool = False) -> None:
    """Print a (Rich markup) status message to stdout, or stderr for errors."""
    target = err_console if error else console
    target.print(msg)


_LOGGING_INITIALIZED = False


def configure_logging(verbose: bool | None, debug: bool | None):
    """Sets up structlog based on verbosity."""
    global _LOGGING_INITIALIZED
    global logger

    # Commands that don't pass flags inherit whatever main configured
    if verbose is None and debug is None:
        if _LOGGING_INITIALIZED:
            return
        verbose = False
        debug = False

    _LOGGING_INITIALIZED = True

    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False),
    ]

    if not sys.stderr.isatty():
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )
    logger = structlog.get_logger(sdk_consts.APP_NAME)


def get_print_host(
    host: str | None = None,
    host_type: hosts.HostType | None = None,
    printer_name: str | None = None,
) -> hosts.PrintHost:
    """Return the print host client described by the settings.

    Explicit arguments override the configured values. Exits if no host is configured.
    """
    settings = config.settings
    resolved_host = host or settings.host
    if not resolved_host:
        output_message("[bold red]Error[/bold red]: No print host configured.", error=True)
        output_message(f"Set {consts.ENV_PREFIX}HOST or pass --host.", error=True)
        sys.exit(1)

    return hosts.get_print_host(
        host_type or settings.host_type,
        host=resolved_host,
        api_key=settings.api_key.get_secret_value(),
        cafile=settings.cafile,
        printer_name=printer_name if printer_name is not None else settings.printer_name,
        timeout=settings.timeout,
    )


@contextlib.contextmanager
def cancel_on_interrupt() -> collections.abc.Iterator[threading.Event]:
    """Turn Ctrl-C into a cancellation request instead of a KeyboardInterrupt.

    Yields an event that is set once SIGINT arrives; the previous handler is restored on exit.
    """
    requested = threading.Event()

    def _handler(signum, frame):
        logger.info("Cancellation requested")
        requested.set()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield requested
    finally:
        signal.signal(signal.SIGINT, previous)
