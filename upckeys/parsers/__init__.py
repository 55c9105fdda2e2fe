"""
upckeys Parsers
================

Input parsing utilities for the command-line arguments.
"""

from upckeys.parsers.essid_parser import EssidFormatError, parse_essid, split_prefixes

__all__ = ["EssidFormatError", "parse_essid", "split_prefixes"]
