"""Utility functions for nmqtt.

This module provides input parsing helpers used by the interactive client.
"""

from __future__ import annotations

from .escapes import parse_hex, parse_text_with_escapes

__all__ = [
    "parse_hex",
    "parse_text_with_escapes",
]
