from .normalize import SeriesArrays, normalize_xy

__all__ = ["SeriesArrays", "normalize_xy"]
