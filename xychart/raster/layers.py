from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from xychart.geometry import RGBA, TRANSPARENT
from xychart.raster.canvas import composite, new_canvas


@dataclass
class LayerStack:
    """Named transparent canvases composited in creation order."""

    width: int
    height: int
    layers: dict[str, np.ndarray] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")

    def get(self, name: str) -> np.ndarray:
        layer = self.layers.get(name)
        if layer is None:
            layer = new_canvas(self.width, self.height, TRANSPARENT)
            self.layers[name] = layer
        return layer

    def clear(self, name: str) -> None:
        layer = self.layers.get(name)
        if layer is not None:
            layer[...] = 0

    def names(self) -> list[str]:
        return list(self.layers)

    def flatten(self, background: RGBA = TRANSPARENT) -> np.ndarray:
        out = new_canvas(self.width, self.height, background)
        for layer in self.layers.values():
            composite(out, layer)
        return out
