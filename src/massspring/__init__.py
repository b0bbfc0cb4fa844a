"""
Mass-Spring SHM Lab
===================
Interactive visualization of a simple harmonic oscillator (mass-spring system).

Layers:
    model       Pure data structures and physics (no Qt).
    controller  Binds the simulation clock to the Qt event loop.
    view        Widgets: scene, charts, control panels, main window.
"""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("massspring")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
