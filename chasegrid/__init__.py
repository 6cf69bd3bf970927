"""Grid-based predator-prey chase simulation for the terminal."""

__version__ = "0.1.0"