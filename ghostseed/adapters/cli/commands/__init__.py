"""Sous-package CLI commands - re-exporte les commandes publiques."""

from ghostseed.adapters.cli.commands.naming_commands import (
    check_names,
    name_app,
    parse_name,
    propose_name,
)
from ghostseed.adapters.cli.commands.pipeline_commands import (
    MediaFilter,
    display_report,
    run,
)

__all__ = [
    # pipeline
    "MediaFilter",
    "display_report",
    "run",
    # nommage
    "name_app",
    "parse_name",
    "check_names",
    "propose_name",
]
