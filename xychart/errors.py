from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when series input cannot be normalised into numeric x/y values."""
