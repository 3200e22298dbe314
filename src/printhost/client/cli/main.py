"""Main entry point for the CLI."""

import sys
import typing

import cyclopts

from printhost.client import __version__
from printhost.client.cli import common
from printhost.client.cli.commands import config, host

# Define the App
app = cyclopts.App(
    name="printhostctl",
    help="Print host upload client (Repetier-Server, OctoPrint)",
    version=__version__,
    version_flags=["--version"],
    help_flags=["--help"],
)

app.command(host.probe_command, name="test")
app.command(host.upload_command, name="upload")
app.command(config.config_command, name="config")


@app.meta.default
def entry_point(
    *tokens: typing.Annotated[str, cyclopts.Parameter(show=False, allow_leading_hyphen=True)],
    verbose: typing.Annotated[
        bool, cyclopts.Parameter(name=["--verbose", "-v"], help="Enable verbose logging")
    ] = False,
    debug: typing.Annotated[bool, cyclopts.Parameter(name=["--debug"], help="Enable debug logging")] = False,
):
    """Main entry point handling global flags."""
    common.configure_logging(verbose, debug)
    app(tokens)


def main(args: list[str] | None = None):
    """Main entry point."""
    if args is None:
        args = sys.argv[1:]

    try:
        app.meta(args)
    except cyclopts.exceptions.CycloptsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected Error: {e}", file=sys.stderr)
        common.logger.exception("An unexpected error occurred")
        sys.exit(1)


if __name__ == "__main__":
    main()
