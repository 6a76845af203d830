"""
Value conversion utilities for confindent.

This module maps requested Python types to the functions that convert a
section's raw text into them.
"""

from .convert import convert, convert_list, register_converter, unregister_converter

__all__ = ['convert', 'convert_list', 'register_converter', 'unregister_converter']
