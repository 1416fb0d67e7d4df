"""Utility modules for archclean.

This module exports commonly used utility functions.
"""

from archclean.utils.formatting import (
    console,
    err_console,
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
)
from archclean.utils.shell import (
    CommandResult,
    command_exists,
    is_root,
    run_command,
    run_interactive,
)

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "is_root",
    "print_error",
    "print_header",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "run_interactive",
]
