"""
upckeys Shared Module
=====================

Configuration, structured logging, and console utilities shared by the
upckeys recovery tool.
"""

from shared.config import UpcConfig

__all__ = ["UpcConfig"]
