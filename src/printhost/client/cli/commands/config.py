"""Configuration inspection command."""

from rich.table import Table

from printhost.client.cli import common, config


def config_command():
    """Show the resolved print host settings."""
    settings = config.settings

    table = Table(title="Print Host Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Config file", str(config.get_config_file()))
    table.add_row("Host type", str(settings.host_type))
    table.add_row("Host", settings.host or "N/A")
    table.add_row("API key", "********" if settings.api_key.get_secret_value() else "N/A")
    table.add_row("CA file", settings.cafile or "System default")
    table.add_row("Printer name", settings.printer_name or "N/A")
    table.add_row("Timeout", f"{settings.timeout:g}s")

    common.console.print(table)
