"""
Parameter Store (Data Model)
============================
This module defines the single-writer store for the user-editable state.

Why is this file needed?
------------------------
1. State Management: It holds the current physical parameters and the display
   toggles in one place.
2. Validation: Writes are validated here, so the evaluator never sees an
   invalid mass or stiffness; a rejected update keeps the previous values.
3. Decoupling: Views read from this object; the control panel writes to it.

Classes:
    DisplayConfig: Pure presentation toggles.
    ParameterStore: The main container class.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace

from PySide6.QtCore import QObject, Signal

from massspring.exceptions import InvalidParameterError
from massspring.model.physics import PhysicalParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayConfig:
    show_vectors: bool = True
    show_circular_motion: bool = False
    show_energy: bool = False


_PARAM_NAMES = frozenset(f.name for f in fields(PhysicalParameters))
_DISPLAY_NAMES = frozenset(f.name for f in fields(DisplayConfig))


class ParameterStore(QObject):
    """Central state store with signals for panel/scene sync."""
    parameters_changed = Signal(object)
    display_changed = Signal(object)

    def __init__(self, params: PhysicalParameters | None = None) -> None:
        super().__init__()
        params = params if params is not None else PhysicalParameters()
        params.validate()
        self._params = params
        self._display = DisplayConfig()

    @property
    def params(self) -> PhysicalParameters:
        return self._params

    @property
    def display(self) -> DisplayConfig:
        return self._display

    def update(self, **changes: float) -> PhysicalParameters:
        """
        Apply a partial update of the physical parameters.

        Raises:
            InvalidParameterError: Unknown name or invalid merged value. The
                stored parameters are left untouched.
        """
        unknown = set(changes) - _PARAM_NAMES
        if unknown:
            name = sorted(unknown)[0]
            raise InvalidParameterError(name, changes[name], "unknown parameter")

        candidate = replace(self._params, **changes)
        try:
            candidate.validate()
        except InvalidParameterError as e:
            logger.warning(f"Rejected parameter update {changes}: {e.reason}")
            raise

        if candidate != self._params:
            self._params = candidate
            logger.info(f"Parameters changed: {candidate}")
            self.parameters_changed.emit(candidate)
        return self._params

    def set_display(self, **changes: bool) -> DisplayConfig:
        unknown = set(changes) - _DISPLAY_NAMES
        if unknown:
            raise KeyError(f"Unknown display option(s): {', '.join(sorted(unknown))}")

        candidate = replace(self._display, **{k: bool(v) for k, v in changes.items()})
        if candidate != self._display:
            self._display = candidate
            self.display_changed.emit(candidate)
        return self._display

    def reset(self) -> None:
        """Restore default parameters and toggles."""
        self._params = PhysicalParameters()
        self._display = DisplayConfig()
        self.parameters_changed.emit(self._params)
        self.display_changed.emit(self._display)
        logger.info("Parameter store has been reset.")
