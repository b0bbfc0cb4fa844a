"""
The CONTROLLER layer binds the pure simulation clock to the Qt event loop
and broadcasts new frames to the views through signals.
"""
