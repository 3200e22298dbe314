"""Print host commands: connectivity probe and file upload."""

import pathlib
import sys
import typing

import cyclopts
from rich import markup
from rich import progress as rich_progress

from printhost.client import hosts, models
from printhost.client.cli import common, consts

HostOption = typing.Annotated[str | None, cyclopts.Parameter(help="Host URL or host:port (overrides config)")]
HostTypeOption = typing.Annotated[
    hosts.HostType | None, cyclopts.Parameter(help="Server family (overrides config)")
]


def probe_command(host: HostOption = None, host_type: HostTypeOption = None):
    """Check that the print host is reachable and is the configured server family."""
    common.logger.debug("Command started", command="test", host=host, host_type=host_type)
    print_host = common.get_print_host(host=host, host_type=host_type)

    with common.console.status(f"Connecting to {print_host.name}..."):
        ok, msg = print_host.test()

    if ok:
        common.output_message(f"[green]{markup.escape(print_host.get_test_ok_msg())}[/green]")
        return

    common.output_message(f"[red]{markup.escape(print_host.get_test_failed_msg(msg))}[/red]", error=True)
    sys.exit(1)


def upload_command(
    path: typing.Annotated[pathlib.Path, cyclopts.Parameter(help="Local G-code or model file")],
    remote_name: typing.Annotated[
        str | None, cyclopts.Parameter(help="Remote file name, optionally with a folder (defaults to the local name)")
    ] = None,
    start_print: typing.Annotated[
        bool, cyclopts.Parameter(name=["--print"], help="Start printing once uploaded")
    ] = False,
    host: HostOption = None,
    host_type: HostTypeOption = None,
    printer_name: typing.Annotated[str | None, cyclopts.Parameter(help="Repetier printer slug")] = None,
):
    """Upload a file to the print host. Press Ctrl-C to cancel."""
    common.logger.debug(
        "Command started",
        command="upload",
        path=path,
        remote_name=remote_name,
        start_print=start_print,
    )
    if not path.is_file():
        common.output_message(f"[red]File not found: {markup.escape(str(path))}[/red]", error=True)
        sys.exit(1)

    print_host = common.get_print_host(host=host, host_type=host_type, printer_name=printer_name)
    upload_data = models.PrintHostUpload(
        source_path=path,
        upload_path=remote_name or path.name,
        start_print=start_print,
    )

    errors: list[str] = []
    with (
        rich_progress.Progress(
            rich_progress.TextColumn("[progress.description]{task.description}"),
            rich_progress.BarColumn(),
            rich_progress.DownloadColumn(),
            rich_progress.TransferSpeedColumn(),
            console=common.console,
        ) as bar,
        common.cancel_on_interrupt() as cancel_requested,
    ):
        task = bar.add_task(f"Uploading {upload_data.upload_filename}", total=None)

        def on_progress(progress: models.UploadProgress, cancel) -> None:
            bar.update(task, completed=progress.uploaded, total=progress.total)
            if cancel_requested.is_set():
                cancel.set()

        ok = print_host.upload(upload_data, on_progress, errors.append)

    if ok:
        action = "printing" if start_print else "stored"
        common.output_message(
            f"[green]Uploaded {markup.escape(upload_data.upload_filename)} to {print_host.name} ({action}).[/green]"
        )
        return

    for msg in errors:
        common.output_message(f"[red]Upload failed: {markup.escape(msg)}[/red]", error=True)
    if not errors:
        common.output_message("[yellow]Upload canceled.[/yellow]", error=True)
        sys.exit(consts.EXIT_CANCELLED)
    sys.exit(1)
