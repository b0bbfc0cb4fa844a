"""Time-series charts of the recent motion (pyqtgraph)."""
from __future__ import annotations

import logging

import pyqtgraph as pg
from PySide6.QtWidgets import QHBoxLayout, QWidget

from massspring import config
from massspring.model.history import HistoryBuffer

logger = logging.getLogger(__name__)


def _make_plot(title: str, y_label: str | None) -> pg.PlotWidget:
    plot = pg.PlotWidget()
    plot.setBackground('w')
    plot.showGrid(x=True, y=True, alpha=0.3)
    plot.setTitle(title, color='black', size='11pt')
    plot.setLabel('bottom', 't [s]', color='black')
    if y_label:
        plot.setLabel('left', y_label, color='black')
    for axis in ('bottom', 'left'):
        plot.getAxis(axis).setPen('k')
        plot.getAxis(axis).setTextPen('k')
    plot.setMinimumHeight(200)
    return plot


class ChartsWidget(QWidget):
    """Position chart and velocity/acceleration chart, side by side."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.position_plot = _make_plot("Position vs time", "x [m]")
        self.position_curve = self.position_plot.plot(
            [], [], pen=pg.mkPen(color=config.COLORS["position"], width=2)
        )

        self.kinematics_plot = _make_plot("Kinematics vs time", None)
        self.kinematics_plot.addLegend(offset=(10, 10))
        self.velocity_curve = self.kinematics_plot.plot(
            [], [], pen=pg.mkPen(color=config.COLORS["velocity"], width=2), name="Velocity (v)"
        )
        self.acceleration_curve = self.kinematics_plot.plot(
            [], [], pen=pg.mkPen(color=config.COLORS["acceleration"], width=2), name="Acceleration (a)"
        )

        layout.addWidget(self.position_plot)
        layout.addWidget(self.kinematics_plot)

    def update_from_history(self, history: HistoryBuffer) -> None:
        data = history.as_arrays()
        self.position_curve.setData(data["t"], data["x"])
        self.velocity_curve.setData(data["t"], data["v"])
        self.acceleration_curve.setData(data["t"], data["a"])
