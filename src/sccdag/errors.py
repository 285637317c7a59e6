from __future__ import annotations


class GraphFormatError(ValueError):
    """Raised when a serialized graph document cannot be turned into a Graph."""
