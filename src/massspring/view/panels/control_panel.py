"""
Control Panel
=============
Transport buttons, parameter sliders and display toggles.

Every write goes through the SimulationDriver / ParameterStore; the panel
keeps no copy of the parameters and re-reads them with ``load_from_state``.
"""
from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QCheckBox, QDoubleSpinBox, QFormLayout, QGroupBox, QHBoxLayout, QLabel,
    QPushButton, QSlider, QStyle, QVBoxLayout, QWidget
)

from massspring import config
from massspring.controller.driver import SimulationDriver
from massspring.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)


class FloatSlider(QWidget):
    """QSlider working in float units with a value label."""
    value_changed = Signal(float)

    def __init__(
        self,
        minimum: float,
        maximum: float,
        step: float,
        fmt: Callable[[float], str],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.minimum = minimum
        self.step = step
        self._fmt = fmt

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(0, round((maximum - minimum) / step))
        self.slider.valueChanged.connect(self._on_slider_changed)
        layout.addWidget(self.slider, 1)

        self.label = QLabel()
        self.label.setMinimumWidth(70)
        self.label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        layout.addWidget(self.label)

    def value(self) -> float:
        return round(self.minimum + self.slider.value() * self.step, 6)

    def set_value(self, value: float) -> None:
        """Set without emitting ``value_changed``."""
        self.slider.blockSignals(True)
        self.slider.setValue(round((value - self.minimum) / self.step))
        self.slider.blockSignals(False)
        self.label.setText(self._fmt(value))

    def _on_slider_changed(self, _index: int) -> None:
        value = self.value()
        self.label.setText(self._fmt(value))
        self.value_changed.emit(value)


class ControlPanel(QWidget):
    # Emitted with a user-facing message when an input was rejected
    error_reported = Signal(str)

    def __init__(self, driver: SimulationDriver, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.driver = driver
        self.store = driver.store

        layout = QVBoxLayout(self)

        # --- Transport ---
        grp_transport = QGroupBox("Laboratory controls")
        l_transport = QHBoxLayout(grp_transport)

        self.btn_play = QPushButton("Play")
        self.btn_play.clicked.connect(self.driver.toggle_play)
        l_transport.addWidget(self.btn_play)

        self.btn_step = QPushButton("Step")
        self.btn_step.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaSkipForward))
        self.btn_step.setToolTip(f"Advance one step ({config.STEP_DELTA_S:g} s)")
        self.btn_step.clicked.connect(self.on_step_clicked)
        l_transport.addWidget(self.btn_step)

        self.btn_reset = QPushButton("Reset")
        self.btn_reset.clicked.connect(self.driver.reset)
        l_transport.addWidget(self.btn_reset)

        layout.addWidget(grp_transport)

        # --- Physical parameters ---
        grp_params = QGroupBox("Parameters")
        form = QFormLayout(grp_params)

        self.sld_mass = FloatSlider(*config.MASS_RANGE, fmt=lambda v: f"{v:.1f} kg")
        self.sld_mass.value_changed.connect(lambda v: self._apply(mass=v))
        form.addRow("Mass (m):", self.sld_mass)

        self.sld_stiffness = FloatSlider(*config.STIFFNESS_RANGE, fmt=lambda v: f"{v:.0f} N/m")
        self.sld_stiffness.value_changed.connect(lambda v: self._apply(stiffness=v))
        form.addRow("Spring constant (k):", self.sld_stiffness)

        self.sld_amplitude = FloatSlider(*config.AMPLITUDE_RANGE, fmt=lambda v: f"{v:.2f} m")
        self.sld_amplitude.value_changed.connect(lambda v: self._apply(amplitude=v))
        form.addRow("Amplitude (A):", self.sld_amplitude)

        self.spin_phase = QDoubleSpinBox()
        p_min, p_max, p_step = config.PHASE_RANGE
        self.spin_phase.setRange(p_min, p_max)
        self.spin_phase.setSingleStep(p_step)
        self.spin_phase.setDecimals(2)
        self.spin_phase.setSuffix(" rad")
        self.spin_phase.valueChanged.connect(lambda v: self._apply(phase=v))
        form.addRow("Phase (φ):", self.spin_phase)

        self.spin_speed = QDoubleSpinBox()
        s_min, s_max, s_step = config.PLAYBACK_SPEED_RANGE
        self.spin_speed.setRange(s_min, s_max)
        self.spin_speed.setSingleStep(s_step)
        self.spin_speed.setDecimals(1)
        self.spin_speed.setSuffix(" ×")
        self.spin_speed.valueChanged.connect(self.on_speed_changed)
        form.addRow("Playback speed:", self.spin_speed)

        layout.addWidget(grp_params)

        # --- Display toggles ---
        grp_display = QGroupBox("Display")
        l_display = QVBoxLayout(grp_display)

        self.chk_vectors = QCheckBox("Show vectors")
        self.chk_vectors.toggled.connect(lambda on: self.store.set_display(show_vectors=on))
        l_display.addWidget(self.chk_vectors)

        self.chk_circle = QCheckBox("Show circular-motion reference")
        self.chk_circle.toggled.connect(lambda on: self.store.set_display(show_circular_motion=on))
        l_display.addWidget(self.chk_circle)

        self.chk_energy = QCheckBox("Show energy")
        self.chk_energy.toggled.connect(lambda on: self.store.set_display(show_energy=on))
        l_display.addWidget(self.chk_energy)

        layout.addWidget(grp_display)
        layout.addStretch()

        self.driver.running_changed.connect(self.update_play_button)
        self.load_from_state()
        self.update_play_button(self.driver.is_running)

    def load_from_state(self) -> None:
        """Syncs widgets from the store and the clock."""
        params = self.store.params
        display = self.store.display

        self.sld_mass.set_value(params.mass)
        self.sld_stiffness.set_value(params.stiffness)
        self.sld_amplitude.set_value(params.amplitude)

        for widget, value in ((self.spin_phase, params.phase), (self.spin_speed, self.driver.playback_speed)):
            widget.blockSignals(True)
            widget.setValue(value)
            widget.blockSignals(False)

        for widget, checked in ((self.chk_vectors, display.show_vectors),
                                (self.chk_circle, display.show_circular_motion),
                                (self.chk_energy, display.show_energy)):
            widget.blockSignals(True)
            widget.setChecked(checked)
            widget.blockSignals(False)

    def update_play_button(self, running: bool) -> None:
        if running:
            self.btn_play.setText("Pause")
            self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPause))
        else:
            self.btn_play.setText("Play")
            self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay))

    def on_step_clicked(self) -> None:
        self.driver.step()

    def on_speed_changed(self, value: float) -> None:
        try:
            self.driver.set_playback_speed(value)
        except InvalidParameterError as e:
            self._reject(e)

    def _apply(self, **changes: float) -> None:
        try:
            self.driver.set_parameters(**changes)
        except InvalidParameterError as e:
            self._reject(e)

    def _reject(self, error: InvalidParameterError) -> None:
        logger.warning(f"Input rejected: {error}")
        self.error_reported.emit(str(error))
        self.load_from_state()
