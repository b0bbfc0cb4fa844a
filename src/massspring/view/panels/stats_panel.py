"""Real-time numeric readout: period, angular frequency, x, v, F, energy."""
from __future__ import annotations

from PySide6.QtWidgets import QGridLayout, QGroupBox, QLabel, QVBoxLayout, QWidget

from massspring import config
from massspring.model import physics
from massspring.model.physics import InstantaneousState, PhysicalParameters
from massspring.model.state import DisplayConfig


class StatsPanel(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)

        grp = QGroupBox("Real-time data")
        grid = QGridLayout(grp)

        self.values: dict[str, QLabel] = {}
        rows = [
            ("period", "Period (T)", None),
            ("omega", "Angular frequency (ω)", None),
            ("position", "Position (x)", config.COLORS["position"]),
            ("velocity", "Velocity (v)", config.COLORS["velocity"]),
            ("force", "Restoring force (Fel)", config.COLORS["force"]),
            ("kinetic", "Kinetic energy", None),
            ("potential", "Potential energy", None),
            ("total", "Total energy", None),
        ]
        for i, (key, caption, color) in enumerate(rows):
            caption_lbl = QLabel(caption)
            value_lbl = QLabel("-")
            style = "font-family: monospace; font-weight: bold;"
            if color:
                style += f" color: {color};"
            value_lbl.setStyleSheet(style)
            grid.addWidget(caption_lbl, i, 0)
            grid.addWidget(value_lbl, i, 1)
            self.values[key] = value_lbl
            self.values[f"{key}_caption"] = caption_lbl

        layout.addWidget(grp)
        layout.addStretch()

    def update_stats(
        self,
        state: InstantaneousState,
        params: PhysicalParameters,
        display: DisplayConfig,
    ) -> None:
        self.values["period"].setText(f"{physics.period(params):.2f} s")
        self.values["omega"].setText(f"{physics.angular_frequency(params):.2f} rad/s")
        self.values["position"].setText(f"{state.position:.2f} m")
        self.values["velocity"].setText(f"{state.velocity:.2f} m/s")
        self.values["force"].setText(f"{state.restoring_force:.2f} N")

        for key in ("kinetic", "potential", "total"):
            self.values[key].setVisible(display.show_energy)
            self.values[f"{key}_caption"].setVisible(display.show_energy)
        if display.show_energy:
            self.values["kinetic"].setText(f"{physics.kinetic_energy(state, params):.2f} J")
            self.values["potential"].setText(f"{physics.potential_energy(state, params):.2f} J")
            self.values["total"].setText(f"{physics.total_energy(params):.2f} J")
