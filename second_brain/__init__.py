"""Second Brain: personal document storage with near-duplicate warnings."""

__version__ = "1.0.0"
