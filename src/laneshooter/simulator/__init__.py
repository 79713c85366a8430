"""Desktop simulator for Lane Shooter (pygame)."""

from laneshooter.simulator.window import SimulatorWindow, WindowConfig

__all__ = ["SimulatorWindow", "WindowConfig"]
