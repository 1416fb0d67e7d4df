"""System tool access for archclean.

This module provides the SystemCommands interface, its Arch Linux
implementation, and parsers for tool output.
"""

from archclean.system.arch import ArchSystem
from archclean.system.base import SystemCommandError, SystemCommands
from archclean.system.parsing import parse_df, parse_du_size, parse_free

__all__ = [
    "ArchSystem",
    "SystemCommandError",
    "SystemCommands",
    "parse_df",
    "parse_du_size",
    "parse_free",
]
