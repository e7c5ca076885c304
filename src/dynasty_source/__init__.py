"""Dynasty Scans content source adapter."""

__version__ = "0.1.0"
