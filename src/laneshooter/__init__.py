"""Lane Shooter - a four-lane arcade shooter with a deterministic core."""

__version__ = "0.1.0"
