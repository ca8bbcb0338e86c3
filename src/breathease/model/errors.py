"""
Error Types
===========
The simulation core rejects exactly one class of input: arguments that can
never describe a valid session or field. Everything else is clamped.
"""


class InvalidArgument(ValueError):
    """Raised before any mutation when an argument is out of its valid domain."""
