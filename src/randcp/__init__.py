"""Random file sampling and copy tool."""

__version__ = "0.9.0"
