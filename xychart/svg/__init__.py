from .surface import SvgSurface

__all__ = ["SvgSurface"]
