"""CLI module for modinfo."""

from modinfo.cli.error_formatter import ErrorFormatter, ErrorTable, ErrorTree
from modinfo.cli.exception_handler import handle_exceptions

__all__ = [
    "ErrorFormatter",
    "ErrorTable",
    "ErrorTree",
    "handle_exceptions",
]
