"""CLI constants."""

ENV_PREFIX = "PRINTHOST_"
CONFIG_FILENAME = "config.json"
EXIT_CANCELLED = 130
