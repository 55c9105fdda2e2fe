"""
upckeys Output Module
======================

Stdout formatting for recovered candidates.
"""

from upckeys.output.console import OUTPUT_FORMATS, ResultSink

__all__ = ["OUTPUT_FORMATS", "ResultSink"]
