"""
The MODEL layer contains data structures and business logic.
It has NO knowledge of the widgets or of the frame scheduler; the only Qt
dependency is the signal mechanism of the parameter store.
It deals with the harmonic motion law, the rolling history and the clock.
"""
