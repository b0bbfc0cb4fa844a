"""
Main Application Window
=======================
The primary GUI container: scene, controls, live stats and charts.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects the driver's frame signal to every view, and makes
   sure the frame timer is cancelled when the window closes.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QMainWindow, QSplitter, QVBoxLayout, QWidget

from massspring.config import VISIBLE_APP_NAME
from massspring.controller.driver import SimulationDriver
from massspring.model.physics import InstantaneousState
from massspring.view.panels.control_panel import ControlPanel
from massspring.view.panels.stats_panel import StatsPanel
from massspring.view.widgets.charts import ChartsWidget
from massspring.view.widgets.scene import SpringScene

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, driver: SimulationDriver) -> None:
        super().__init__()
        self.driver = driver
        self.store = driver.store

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)

        header = QLabel(
            "<h2>Mass-spring system</h2>"
            "The <b>elastic force</b> pulls the block back towards equilibrium, "
            "producing a varying acceleration and velocity."
        )
        header.setWordWrap(True)
        main_layout.addWidget(header)

        # --- TOP: Scene | Controls + Stats ---
        top_splitter = QSplitter(Qt.Orientation.Horizontal)

        self.scene_view = SpringScene()
        top_splitter.addWidget(self.scene_view)

        side = QWidget()
        side_layout = QVBoxLayout(side)
        side_layout.setContentsMargins(0, 0, 0, 0)
        self.control_panel = ControlPanel(self.driver)
        self.stats_panel = StatsPanel()
        side_layout.addWidget(self.control_panel)
        side_layout.addWidget(self.stats_panel)
        top_splitter.addWidget(side)
        top_splitter.setSizes([930, 470])

        # --- BOTTOM: Charts ---
        vertical_splitter = QSplitter(Qt.Orientation.Vertical)
        vertical_splitter.addWidget(top_splitter)
        self.charts = ChartsWidget()
        vertical_splitter.addWidget(self.charts)
        vertical_splitter.setSizes([600, 300])
        main_layout.addWidget(vertical_splitter)

        self.statusBar()

        # --- SIGNAL CONNECTIONS ---
        self.driver.frame_ready.connect(self.on_frame)
        self.driver.running_changed.connect(self.on_running_changed)
        self.store.parameters_changed.connect(lambda _p: self.control_panel.load_from_state())
        self.store.display_changed.connect(lambda _d: self.refresh())
        self.control_panel.error_reported.connect(lambda msg: self.statusBar().showMessage(msg, 5000))

        # Initial render
        self.refresh()

    def on_frame(self, state: InstantaneousState) -> None:
        """Slot called for every new state produced by the driver."""
        params = self.store.params
        display = self.store.display
        self.scene_view.set_state(state, params, display)
        self.stats_panel.update_stats(state, params, display)
        self.charts.update_from_history(self.driver.history)

    def on_running_changed(self, running: bool) -> None:
        state = "running" if running else "paused"
        self.statusBar().showMessage(f"Simulation {state} at t = {self.driver.sim_time:.2f} s", 3000)

    def refresh(self) -> None:
        """Re-render from the current clock state (no time advance)."""
        self.on_frame(self.driver.current_state())

    def closeEvent(self, event, /) -> None:
        """Cancel the frame timer before the widgets are destroyed."""
        self.driver.shutdown()
        event.accept()
