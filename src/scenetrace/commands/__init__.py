"""
scenetrace.commands - CLI command implementations
"""

__all__ = [
    "analyze",
    "dump",
    "fields",
    "unused",
]
