"""Scatter viewport drawing one square marker per trajectory position."""

from __future__ import annotations

import pyqtgraph as pg

from trajview.core.render_state import RenderFrame


class RenderViewport(pg.PlotWidget):
    """pyqtgraph plot that shows a ``RenderFrame`` inside its fitted rectangle.

    Markers are sized in data units, so they scale with the viewport the same
    way the instanced quads of the legacy viewer did.
    """

    def __init__(self, marker_size: float = 0.5) -> None:
        super().__init__()
        self.marker_size = marker_size
        self.setBackground((18, 18, 18))
        self.setMouseEnabled(x=False, y=False)
        self.hideButtons()
        self.setMenuEnabled(False)
        self.showGrid(x=True, y=True, alpha=0.15)
        self._scatter = pg.ScatterPlotItem(
            pxMode=False,
            symbol="s",
            size=marker_size,
            pen=None,
            brush=pg.mkBrush(80, 180, 255),
        )
        self.addItem(self._scatter)
        self._viewport: tuple[float, float, float, float] | None = None

    def display_aspect(self) -> float:
        box = self.getViewBox().sceneBoundingRect()
        width, height = box.width(), box.height()
        if width <= 0 or height <= 0:
            width, height = self.width(), self.height()
        if width <= 0 or height <= 0:
            return 1.0
        return float(width) / float(height)

    def instance_count(self) -> int:
        return len(self._scatter.data)

    def current_viewport(self) -> tuple[float, float, float, float] | None:
        return self._viewport

    def set_render_frame(self, frame: RenderFrame) -> None:
        positions = frame.positions
        self._scatter.setData(x=positions[:, 0], y=positions[:, 1], size=self.marker_size)
        left, right, bottom, top = frame.viewport
        if self._viewport != frame.viewport:
            self.setRange(xRange=(left, right), yRange=(bottom, top), padding=0.0)
            self._viewport = frame.viewport
