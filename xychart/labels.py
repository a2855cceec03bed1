from __future__ import annotations

from dataclasses import dataclass

from xychart.dataset import XYDataset
from xychart.formatting import NumberFormat


DEFAULT_TEMPLATE = "{x}, {y} / {series}"
_FIELDS = ("x", "y", "series")


@dataclass(frozen=True)
class XYLabelGenerator:
    """Builds item label and tooltip text from a ``str.format`` template.

    The template may use ``{x}``, ``{y}`` and ``{series}``; x and y are written
    with a fixed number of decimals and no thousands separator.
    """

    template: str = DEFAULT_TEMPLATE
    x_decimals: int = 2
    y_decimals: int = 2

    def __post_init__(self) -> None:
        if self.x_decimals < 0 or self.y_decimals < 0:
            raise ValueError("decimals must be >= 0")
        try:
            self.template.format(**{name: "" for name in _FIELDS})
        except (KeyError, IndexError) as exc:
            raise ValueError(f"template may only use {{x}}, {{y}} and {{series}}: {self.template!r}") from exc

    def item_label(self, dataset: XYDataset, series_key: str, item_key: str) -> str:
        item = dataset.item_by_key(series_key, item_key)
        return self.template.format(
            x=NumberFormat(self.x_decimals, separator="").format(item.x),
            y=NumberFormat(self.y_decimals, separator="").format(item.y),
            series=series_key,
        )
