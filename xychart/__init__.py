from xychart.axis import AxisState, AxisStyle, Symbol, ValueAxis, linear_axis, log_axis, symbol_axis
from xychart.axis_space import AxisSpace
from xychart.chart import Chart, bar_chart, line_chart, scatter_chart
from xychart.dataset import XYDataset, XYItem
from xychart.errors import PlotDataError
from xychart.formatting import LogFormat, NumberFormat
from xychart.geometry import Font, Insets, Rectangle
from xychart.labels import XYLabelGenerator
from xychart.plot import NearestItem, XYPlot
from xychart.ranges import ValueRange
from xychart.raster import RasterSurface
from xychart.renderers import BarRenderer, BaseXYRenderer, ColorSource, LineRenderer, ScatterRenderer
from xychart.scheduler import ProgressOverlay, RenderCursor, RenderJob, RenderScheduler, SchedulerConfig
from xychart.subscriptions import ListenerList, Subscription
from xychart.svg import SvgSurface
from xychart.ticks import TickMark, TickSelector

__all__ = [
    "AxisSpace",
    "AxisState",
    "AxisStyle",
    "BarRenderer",
    "BaseXYRenderer",
    "Chart",
    "ColorSource",
    "Font",
    "Insets",
    "LineRenderer",
    "ListenerList",
    "LogFormat",
    "NearestItem",
    "NumberFormat",
    "PlotDataError",
    "ProgressOverlay",
    "RasterSurface",
    "Rectangle",
    "RenderCursor",
    "RenderJob",
    "RenderScheduler",
    "ScatterRenderer",
    "SchedulerConfig",
    "Subscription",
    "SvgSurface",
    "Symbol",
    "TickMark",
    "TickSelector",
    "ValueAxis",
    "ValueRange",
    "XYDataset",
    "XYItem",
    "XYLabelGenerator",
    "XYPlot",
    "bar_chart",
    "line_chart",
    "linear_axis",
    "log_axis",
    "scatter_chart",
    "symbol_axis",
]
